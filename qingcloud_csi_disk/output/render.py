from __future__ import annotations

import csv
import io
import json

from rich.console import Console
from rich.table import Table

from qingcloud_csi_disk.models.results import ResolutionReport
from qingcloud_csi_disk.registry.compatibility import is_attachable, preferred_volume_type
from qingcloud_csi_disk.registry.instance_types import InstanceType, instance_type_name
from qingcloud_csi_disk.registry.volume_types import VolumeType, size_constraint, volume_type_name


def _attachable_cell(value) -> str:
    if value is None:
        return ""
    return "yes" if value else "no"


def render_table(report: ResolutionReport) -> None:
    console = Console()

    title = "Resolved Storage Classes"
    if report.instance_type is not None:
        title += f" (instance type {report.instance_type_name or report.instance_type})"
    table = Table(title=title)
    table.add_column("StorageClass")
    table.add_column("Volume Type")
    table.add_column("FS")
    table.add_column("Replica", justify="right")
    table.add_column("Tags")
    table.add_column("Attachable")
    table.add_column("Error")

    for s in report.storage_classes:
        if s.config is None:
            table.add_row(s.name, "", "", "", "", "", s.error or "")
            continue
        c = s.config
        table.add_row(
            s.name,
            f"{c.volume_type_name} ({int(c.volume_type)})",
            c.fs_type,
            str(c.replica),
            ",".join(c.tags),
            _attachable_cell(s.attachable),
            "",
        )

    console.print(table)

    if report.warnings:
        warn_table = Table(title="Warnings")
        warn_table.add_column("Message")
        for w in report.warnings:
            warn_table.add_row(w)
        console.print(warn_table)


def render_json(report: ResolutionReport) -> str:
    data = report.model_dump(mode="json")
    return json.dumps(data, indent=2, sort_keys=True)


def render_csv(report: ResolutionReport) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(
        [
            "StorageClass",
            "Volume Type",
            "Volume Type Name",
            "FS",
            "Replica",
            "Tags",
            "Attachable",
            "Error",
        ]
    )
    for s in report.storage_classes:
        c = s.config
        writer.writerow(
            [
                s.name,
                int(c.volume_type) if c else "",
                c.volume_type_name if c else "",
                c.fs_type if c else "",
                c.replica if c else "",
                ",".join(c.tags) if c else "",
                _attachable_cell(s.attachable),
                s.error or "",
            ]
        )
    return output.getvalue()


def render_matrix() -> None:
    console = Console()

    table = Table(title="Volume Type / Instance Type Compatibility")
    table.add_column("Volume Type")
    table.add_column("Step (GB)", justify="right")
    table.add_column("Max (GB)", justify="right")
    for it in InstanceType:
        table.add_column(f"{instance_type_name(it)} ({int(it)})", justify="center")

    for vt in VolumeType:
        sc = size_constraint(vt)
        table.add_row(
            f"{volume_type_name(vt)} ({int(vt)})",
            str(sc.step_gb),
            str(sc.max_gb),
            *["x" if is_attachable(vt, it) else "" for it in InstanceType],
        )
    console.print(table)

    pref = Table(title="Preferred Volume Type by Instance Type")
    pref.add_column("Instance Type")
    pref.add_column("Preferred Volume Type")
    for it in InstanceType:
        vt, found = preferred_volume_type(it)
        pref.add_row(f"{instance_type_name(it)} ({int(it)})", volume_type_name(vt) if found else "")
    console.print(pref)
