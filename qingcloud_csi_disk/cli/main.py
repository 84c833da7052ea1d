from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from qingcloud_csi_disk.calculators.capacity import required_bytes
from qingcloud_csi_disk.core.exceptions import StorageClassError
from qingcloud_csi_disk.core.orchestrator import ResolveConfig, orchestrate
from qingcloud_csi_disk.models.resources import CapacityRange
from qingcloud_csi_disk.output.render import render_csv, render_json, render_matrix, render_table
from qingcloud_csi_disk.registry.instance_types import instance_type_from_name
from qingcloud_csi_disk.registry.volume_types import (
    DEFAULT_VOLUME_TYPE,
    size_constraint,
    to_volume_type,
    volume_type_name,
)
from qingcloud_csi_disk.utils.logger import create_logger
from qingcloud_csi_disk.utils.units import bytes_to_gib, parse_int, parse_quantity_bytes


app = typer.Typer(add_completion=False, help="QingCloud CSI disk storage class resolver")


def _parse_instance_type(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    it = instance_type_from_name(value)
    if it is not None:
        return int(it)
    try:
        return parse_int(value)
    except ValueError:
        raise typer.BadParameter(f"unknown instance type: {value}")


@app.command("resolve")
def resolve(
    files: List[Path] = typer.Argument(..., help="Kubernetes YAML manifests with StorageClass documents"),
    instance_type: Optional[str] = typer.Option(
        None,
        "--instance-type",
        help="Instance type (name or code) of the node the volumes attach to",
    ),
    output: str = typer.Option(
        "table",
        "--output",
        case_sensitive=False,
        help="Output format: table|json|csv",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    """Resolve StorageClass parameters into validated disk configurations."""
    create_logger("qingcloud_csi_disk", log_level, stream=sys.stderr)
    try:
        cfg = ResolveConfig(
            files=[str(p) for p in files],
            instance_type=_parse_instance_type(instance_type),
            log_level=log_level,
        )
        report = orchestrate(cfg)
    except StorageClassError as exc:
        typer.echo(f"Fatal error: {exc}", err=True)
        raise typer.Exit(code=1)

    fmt = output.lower()
    if fmt == "table":
        render_table(report)
    elif fmt == "json":
        typer.echo(render_json(report))
    elif fmt == "csv":
        typer.echo(render_csv(report))
    else:
        typer.echo("Unknown output format. Use table|json|csv.", err=True)
        raise typer.Exit(code=2)

    raise typer.Exit(code=1 if report.failed else 0)


@app.command("capacity")
def capacity(
    required: str = typer.Option("0", "--required", help="Required size, e.g. 20Gi"),
    limit: str = typer.Option("0", "--limit", help="Size limit, e.g. 100Gi (0 = none)"),
    volume_type: int = typer.Option(
        int(DEFAULT_VOLUME_TYPE), "--type", help="Volume type code used for the size constraint"
    ),
):
    """Compute the bytes to request for a volume and show the type's size limits."""
    try:
        vt = to_volume_type(volume_type)
        rng = CapacityRange(
            required_bytes=parse_quantity_bytes(required),
            limit_bytes=parse_quantity_bytes(limit),
        )
        size = required_bytes(rng)
    except (StorageClassError, ValueError) as exc:
        typer.echo(f"Fatal error: {exc}", err=True)
        raise typer.Exit(code=1)

    sc = size_constraint(vt)
    typer.echo(f"required_bytes: {size}")
    typer.echo(f"required_gib: {bytes_to_gib(size):g}")
    typer.echo(f"volume_type: {volume_type_name(vt)} ({int(vt)})")
    typer.echo(f"step_gb: {sc.step_gb}")
    typer.echo(f"max_gb: {sc.max_gb}")


@app.command("matrix")
def matrix():
    """Print the volume type / instance type compatibility matrix."""
    render_matrix()


if __name__ == "__main__":  # pragma: no cover
    app()
