from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StorageClassItem(BaseModel):
    name: str
    provisioner: Optional[str] = None
    parameters: Dict[str, str] = Field(default_factory=dict)
    source: Optional[str] = None  # manifest file the item was read from


class Topology(BaseModel):
    """What the consuming node looks like; only the instance type is used."""

    model_config = ConfigDict(frozen=True)

    instance_type: int
    zone: Optional[str] = None


class CapacityRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_bytes: int = 0
    limit_bytes: int = 0
