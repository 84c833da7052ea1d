from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from qingcloud_csi_disk.registry.disk_options import is_valid_filesystem, is_valid_replica
from qingcloud_csi_disk.registry.volume_types import VolumeType, volume_type_name


STORAGE_CLASS_TYPE_NAME = "type"
STORAGE_CLASS_FS_TYPE_NAME = "fsType"
STORAGE_CLASS_REPLICA_NAME = "replica"
STORAGE_CLASS_TAGS_NAME = "tags"


class StorageClassConfig(BaseModel):
    """Validated disk parameters of one storage class.

    Built by ``resolve_storage_class``; never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    volume_type: VolumeType
    fs_type: str
    replica: int
    tags: Tuple[str, ...] = ()

    @field_validator("fs_type")
    @classmethod
    def _check_fs_type(cls, v: str) -> str:
        if v and not is_valid_filesystem(v):
            raise ValueError(f"unsupported filesystem type {v!r}")
        return v

    @field_validator("replica")
    @classmethod
    def _check_replica(cls, v: int) -> int:
        if not is_valid_replica(v):
            raise ValueError(f"unsupported replica {v}")
        return v

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        # Tags are stored the way resolve_storage_class produces them.
        for tag in v:
            if "," in tag or "".join(tag.split()) != tag:
                raise ValueError(f"tag {tag!r} contains whitespace or a comma")
        return v

    @property
    def volume_type_name(self) -> str:
        return volume_type_name(self.volume_type)

    def to_parameters(self) -> Dict[str, str]:
        """Render back to storage class parameters."""
        return {
            STORAGE_CLASS_TYPE_NAME: str(int(self.volume_type)),
            STORAGE_CLASS_FS_TYPE_NAME: self.fs_type,
            STORAGE_CLASS_REPLICA_NAME: str(self.replica),
            STORAGE_CLASS_TAGS_NAME: ",".join(self.tags),
        }


class ResolvedStorageClass(BaseModel):
    name: str
    source: Optional[str] = None
    config: Optional[StorageClassConfig] = None
    error: Optional[str] = None
    error_field: Optional[str] = None
    attachable: Optional[bool] = None  # None when no topology was given

    @property
    def ok(self) -> bool:
        return self.config is not None


class ResolutionReport(BaseModel):
    instance_type: Optional[int] = None
    instance_type_name: Optional[str] = None
    storage_classes: List[ResolvedStorageClass]
    warnings: List[str]

    @property
    def failed(self) -> int:
        return sum(1 for s in self.storage_classes if not s.ok)
