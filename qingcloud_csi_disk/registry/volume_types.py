from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from qingcloud_csi_disk.core.exceptions import UnsupportedVolumeTypeError


class VolumeType(IntEnum):
    HIGH_PERFORMANCE = 0
    HIGH_CAPACITY = 2
    SUPER_HIGH_PERFORMANCE = 3
    NEONSAN = 5
    NEONSAN_HDD = 6
    STANDARD = 100
    SSD_ENTERPRISE = 200


DEFAULT_VOLUME_TYPE = VolumeType.STANDARD


class SizeConstraint(NamedTuple):
    step_gb: int
    max_gb: int


# Names as accepted by the CreateVolumes API
# https://docs.qingcloud.com/product/api/action/volume/create_volumes.html
VOLUME_TYPE_NAME: Mapping[int, str] = MappingProxyType(
    {
        VolumeType.HIGH_PERFORMANCE: "HighPerformance",
        VolumeType.HIGH_CAPACITY: "HighCapacity",
        VolumeType.SUPER_HIGH_PERFORMANCE: "SuperHighPerformance",
        VolumeType.NEONSAN: "NeonSAN",
        VolumeType.NEONSAN_HDD: "NeonSANHDD",
        VolumeType.STANDARD: "Standard",
        VolumeType.SSD_ENTERPRISE: "SSDEnterprise",
    }
)

VOLUME_TYPE_SIZE: Mapping[int, SizeConstraint] = MappingProxyType(
    {
        VolumeType.HIGH_PERFORMANCE: SizeConstraint(step_gb=10, max_gb=2000),
        VolumeType.HIGH_CAPACITY: SizeConstraint(step_gb=50, max_gb=5000),
        VolumeType.SUPER_HIGH_PERFORMANCE: SizeConstraint(step_gb=10, max_gb=2000),
        VolumeType.NEONSAN: SizeConstraint(step_gb=100, max_gb=50000),
        VolumeType.NEONSAN_HDD: SizeConstraint(step_gb=100, max_gb=50000),
        VolumeType.STANDARD: SizeConstraint(step_gb=10, max_gb=2000),
        VolumeType.SSD_ENTERPRISE: SizeConstraint(step_gb=10, max_gb=2000),
    }
)


def is_valid_volume_type(code: int) -> bool:
    return code in VOLUME_TYPE_NAME


def volume_type_name(code: int) -> str:
    """Display name of a volume type, or "" when the code is not registered."""
    return VOLUME_TYPE_NAME.get(code, "")


def to_volume_type(code: int) -> VolumeType:
    if not is_valid_volume_type(code):
        raise UnsupportedVolumeTypeError("type", code)
    return VolumeType(code)


def size_constraint(code: int) -> SizeConstraint:
    """Step and maximum size (GB) for a registered volume type.

    Callers validate the code first; an unknown code raises
    UnsupportedVolumeTypeError instead of returning a made-up constraint.
    """
    try:
        return VOLUME_TYPE_SIZE[code]
    except KeyError as e:
        raise UnsupportedVolumeTypeError("type", code) from e
