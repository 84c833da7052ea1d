from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from qingcloud_csi_disk.core.exceptions import (
    MalformedOptionError,
    UnsupportedFilesystemError,
    UnsupportedReplicaError,
    UnsupportedVolumeTypeError,
)
from qingcloud_csi_disk.models.resources import Topology
from qingcloud_csi_disk.models.results import (
    STORAGE_CLASS_FS_TYPE_NAME,
    STORAGE_CLASS_REPLICA_NAME,
    STORAGE_CLASS_TAGS_NAME,
    STORAGE_CLASS_TYPE_NAME,
    StorageClassConfig,
)
from qingcloud_csi_disk.registry.compatibility import preferred_volume_type
from qingcloud_csi_disk.registry.disk_options import (
    DEFAULT_FILESYSTEM,
    DEFAULT_REPLICA,
    is_valid_filesystem,
    is_valid_replica,
)
from qingcloud_csi_disk.registry.volume_types import (
    DEFAULT_VOLUME_TYPE,
    VolumeType,
    is_valid_volume_type,
    volume_type_name,
)
from qingcloud_csi_disk.utils.units import parse_int


logger = logging.getLogger(__name__)

# Keys are matched case-insensitively. Anything else in the parameter map is
# ignored so storage classes written for newer drivers still resolve.
RECOGNIZED_OPTIONS = {
    name.lower(): name
    for name in (
        STORAGE_CLASS_TYPE_NAME,
        STORAGE_CLASS_FS_TYPE_NAME,
        STORAGE_CLASS_REPLICA_NAME,
        STORAGE_CLASS_TAGS_NAME,
    )
}


def default_storage_class(volume_type: int) -> StorageClassConfig:
    if not is_valid_volume_type(volume_type):
        raise UnsupportedVolumeTypeError(STORAGE_CLASS_TYPE_NAME, volume_type)
    return StorageClassConfig(
        volume_type=VolumeType(volume_type),
        fs_type=DEFAULT_FILESYSTEM,
        replica=DEFAULT_REPLICA,
        tags=(),
    )


def resolve_storage_class(
    options: Mapping[str, str], topology: Optional[Topology] = None
) -> StorageClassConfig:
    """Turn raw storage class parameters into a validated config.

    Recognized keys are ``type``, ``fsType``, ``replica`` and ``tags``.
    Missing fields get defaults: the volume type is taken from the topology's
    preferred volume type when one is given, else ``DEFAULT_VOLUME_TYPE``.
    Raises an ``OptionError`` subclass for the first invalid field, checked in
    the order type, fsType, replica, tags.
    """
    opts = _normalize_options(options)
    volume_type = _resolve_volume_type(opts.get(STORAGE_CLASS_TYPE_NAME), topology)
    fs_type = _resolve_fs_type(opts.get(STORAGE_CLASS_FS_TYPE_NAME))
    replica = _resolve_replica(opts.get(STORAGE_CLASS_REPLICA_NAME))
    tags = _resolve_tags(opts.get(STORAGE_CLASS_TAGS_NAME))
    return StorageClassConfig(
        volume_type=volume_type, fs_type=fs_type, replica=replica, tags=tags
    )


def _normalize_options(options: Mapping[str, str]) -> Dict[str, str]:
    grouped: Dict[str, Dict[str, str]] = {}
    for key, value in options.items():
        canonical = RECOGNIZED_OPTIONS.get(str(key).lower())
        if canonical is None:
            continue
        grouped.setdefault(canonical, {})[str(key)] = value

    opts: Dict[str, str] = {}
    for canonical in RECOGNIZED_OPTIONS.values():
        spellings = grouped.get(canonical)
        if not spellings:
            continue
        values = sorted(set(spellings.values()))
        if len(values) > 1:
            keys = ", ".join(sorted(spellings))
            raise MalformedOptionError(
                canonical,
                tuple(values),
                f"conflicting values for option {canonical} (keys {keys}): {values!r}",
            )
        opts[canonical] = values[0]
    return opts


def _resolve_volume_type(raw: Optional[str], topology: Optional[Topology]) -> VolumeType:
    if raw is None:
        if topology is None:
            return DEFAULT_VOLUME_TYPE
        preferred, found = preferred_volume_type(topology.instance_type)
        if found:
            return preferred
        logger.info(
            "failed to get instance type %d preferred volume type, fallback to use %s",
            topology.instance_type,
            volume_type_name(DEFAULT_VOLUME_TYPE),
        )
        return DEFAULT_VOLUME_TYPE

    try:
        code = parse_int(raw)
    except ValueError as e:
        raise MalformedOptionError(STORAGE_CLASS_TYPE_NAME, raw) from e
    if not is_valid_volume_type(code):
        raise UnsupportedVolumeTypeError(STORAGE_CLASS_TYPE_NAME, code)
    return VolumeType(code)


def _resolve_fs_type(raw: Optional[str]) -> str:
    # An empty value is what templated storage classes render for "unset".
    if not raw:
        return DEFAULT_FILESYSTEM
    if not is_valid_filesystem(raw):
        raise UnsupportedFilesystemError(STORAGE_CLASS_FS_TYPE_NAME, raw)
    return raw


def _resolve_replica(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_REPLICA
    try:
        replica = parse_int(raw)
    except ValueError as e:
        raise MalformedOptionError(STORAGE_CLASS_REPLICA_NAME, raw) from e
    if not is_valid_replica(replica):
        raise UnsupportedReplicaError(STORAGE_CLASS_REPLICA_NAME, replica)
    return replica


def _resolve_tags(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    compact = "".join(raw.split())
    if not compact:
        return ()
    return tuple(compact.split(","))
