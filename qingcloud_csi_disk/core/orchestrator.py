from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from qingcloud_csi_disk.core.exceptions import OptionError
from qingcloud_csi_disk.core.resolver import resolve_storage_class
from qingcloud_csi_disk.models.resources import StorageClassItem, Topology
from qingcloud_csi_disk.models.results import ResolutionReport, ResolvedStorageClass
from qingcloud_csi_disk.parsers.yaml_parser import ParseOutput, parse_files
from qingcloud_csi_disk.registry.compatibility import is_attachable
from qingcloud_csi_disk.registry.instance_types import instance_type_name, is_valid_instance_type


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolveConfig:
    files: List[str] = field(default_factory=list)
    instance_type: Optional[int] = None
    log_level: str = "WARNING"


def resolve_items(
    items: List[StorageClassItem], topology: Optional[Topology] = None
) -> List[ResolvedStorageClass]:
    results: List[ResolvedStorageClass] = []
    for item in items:
        try:
            config = resolve_storage_class(item.parameters, topology)
        except OptionError as e:
            logger.info("StorageClass %s rejected: %s", item.name, e)
            results.append(
                ResolvedStorageClass(
                    name=item.name, source=item.source, error=str(e), error_field=e.field
                )
            )
            continue
        attachable = None
        if topology is not None:
            attachable = is_attachable(config.volume_type, topology.instance_type)
        results.append(
            ResolvedStorageClass(
                name=item.name, source=item.source, config=config, attachable=attachable
            )
        )
    return results


def orchestrate(cfg: ResolveConfig) -> ResolutionReport:
    parsed: ParseOutput = parse_files(cfg.files)
    warnings = list(parsed.warnings)

    topology = None
    if cfg.instance_type is not None:
        topology = Topology(instance_type=cfg.instance_type)
        if not is_valid_instance_type(cfg.instance_type):
            warnings.append(
                f"Instance type {cfg.instance_type} is not registered; default volume type applies"
            )

    if not parsed.storage_classes:
        warnings.append("No StorageClass documents found")

    return ResolutionReport(
        instance_type=cfg.instance_type,
        instance_type_name=instance_type_name(cfg.instance_type) if cfg.instance_type is not None else None,
        storage_classes=resolve_items(parsed.storage_classes, topology),
        warnings=sorted(set(warnings)),
    )
