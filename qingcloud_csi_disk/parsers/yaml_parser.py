from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import yaml

from qingcloud_csi_disk.core.exceptions import ParseError
from qingcloud_csi_disk.models.resources import StorageClassItem


SUPPORTED_KINDS = {"StorageClass"}


@dataclass(slots=True)
class ParseOutput:
    storage_classes: List[StorageClassItem]
    warnings: List[str]


def parse_files(paths: List[str]) -> ParseOutput:
    storage_classes: List[StorageClassItem] = []
    warnings: List[str] = []

    for p in paths:
        path = Path(p)
        if not path.exists():
            raise ParseError(f"File not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                docs = list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:  # noqa: BLE001
            raise ParseError(f"YAML parse error in {path}: {e}") from e

        for doc in docs:
            if not doc or not isinstance(doc, dict):
                continue
            if doc.get("kind") not in SUPPORTED_KINDS:
                continue
            meta = doc.get("metadata", {}) or {}
            if not isinstance(meta, dict):
                meta = {}
            name = _string_field(meta.get("name", "unnamed"), warnings, context="StorageClass metadata.name")
            provisioner = doc.get("provisioner")
            if provisioner is not None:
                provisioner = _string_field(provisioner, warnings, context=f"StorageClass {name} provisioner")
            params = _string_parameters(doc.get("parameters"), warnings, context=f"StorageClass {name}")
            storage_classes.append(
                StorageClassItem(
                    name=name,
                    provisioner=provisioner,
                    parameters=params,
                    source=str(path),
                )
            )

    return ParseOutput(storage_classes=storage_classes, warnings=warnings)


def _string_parameters(raw, warnings: List[str], *, context: str) -> Dict[str, str]:
    # Kubernetes only allows string parameters; YAML happily produces ints.
    if not raw:
        return {}
    if not isinstance(raw, dict):
        warnings.append(f"{context}: parameters is not a mapping; ignored")
        return {}
    params: Dict[str, str] = {}
    for k, v in raw.items():
        if v is None:
            v = ""
        elif not isinstance(v, str):
            warnings.append(f"{context}: parameter '{k}' is not a string; using '{v}'")
            v = str(v)
        params[str(k)] = v
    return params


def _string_field(value, warnings: List[str], *, context: str) -> str:
    if isinstance(value, str):
        return value
    warnings.append(f"{context} is not a string; using '{value}'")
    return str(value)
