from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from qingcloud_csi_disk.registry.instance_types import InstanceType
from qingcloud_csi_disk.registry.volume_types import VolumeType, is_valid_volume_type


# Which volume type a node of a given instance type gets when the storage
# class does not name one.
INSTANCE_TYPE_ATTACH_PREFERRED: Mapping[int, VolumeType] = MappingProxyType(
    {
        InstanceType.HIGH_PERFORMANCE: VolumeType.HIGH_PERFORMANCE,
        InstanceType.SUPER_HIGH_PERFORMANCE: VolumeType.SUPER_HIGH_PERFORMANCE,
        InstanceType.SUPER_HIGH_PERFORMANCE_SAN: VolumeType.NEONSAN,
        InstanceType.HIGH_PERFORMANCE_SAN: VolumeType.NEONSAN,
        InstanceType.STANDARD: VolumeType.STANDARD,
        InstanceType.ENTERPRISE1: VolumeType.SSD_ENTERPRISE,
        InstanceType.ENTERPRISE2: VolumeType.SSD_ENTERPRISE,
        InstanceType.ENTERPRISE_COMPUTE3: VolumeType.SSD_ENTERPRISE,
        InstanceType.PREMIUM: VolumeType.SSD_ENTERPRISE,
    }
)

# Instance types each volume type may be attached to. Every registered volume
# type has an entry; an empty tuple means it attaches nowhere.
VOLUME_TYPE_ATTACH_CONSTRAINT: Mapping[int, Tuple[InstanceType, ...]] = MappingProxyType(
    {
        VolumeType.HIGH_PERFORMANCE: (
            InstanceType.HIGH_PERFORMANCE,
            InstanceType.STANDARD,
        ),
        VolumeType.HIGH_CAPACITY: (
            InstanceType.HIGH_PERFORMANCE,
            InstanceType.SUPER_HIGH_PERFORMANCE,
            InstanceType.STANDARD,
            InstanceType.ENTERPRISE1,
            InstanceType.ENTERPRISE2,
            InstanceType.ENTERPRISE_COMPUTE3,
            InstanceType.PREMIUM,
        ),
        VolumeType.SUPER_HIGH_PERFORMANCE: (
            InstanceType.SUPER_HIGH_PERFORMANCE,
            InstanceType.ENTERPRISE1,
            InstanceType.ENTERPRISE2,
            InstanceType.ENTERPRISE_COMPUTE3,
            InstanceType.PREMIUM,
        ),
        VolumeType.NEONSAN: (
            InstanceType.HIGH_PERFORMANCE,
            InstanceType.SUPER_HIGH_PERFORMANCE,
            InstanceType.SUPER_HIGH_PERFORMANCE_SAN,
            InstanceType.STANDARD,
            InstanceType.ENTERPRISE1,
            InstanceType.ENTERPRISE2,
            InstanceType.ENTERPRISE_COMPUTE3,
            InstanceType.PREMIUM,
        ),
        VolumeType.NEONSAN_HDD: (
            InstanceType.HIGH_PERFORMANCE,
            InstanceType.SUPER_HIGH_PERFORMANCE,
            InstanceType.HIGH_PERFORMANCE_SAN,
            InstanceType.STANDARD,
            InstanceType.ENTERPRISE1,
            InstanceType.ENTERPRISE2,
            InstanceType.ENTERPRISE_COMPUTE3,
            InstanceType.PREMIUM,
        ),
        VolumeType.STANDARD: (
            InstanceType.HIGH_PERFORMANCE,
            InstanceType.STANDARD,
        ),
        VolumeType.SSD_ENTERPRISE: (
            InstanceType.SUPER_HIGH_PERFORMANCE,
            InstanceType.ENTERPRISE1,
            InstanceType.ENTERPRISE2,
            InstanceType.ENTERPRISE_COMPUTE3,
            InstanceType.PREMIUM,
        ),
    }
)


def compatible_instance_types(volume_type: int) -> FrozenSet[InstanceType]:
    return frozenset(VOLUME_TYPE_ATTACH_CONSTRAINT.get(volume_type, ()))


def is_attachable(volume_type: int, instance_type: int) -> bool:
    return instance_type in compatible_instance_types(volume_type)


def preferred_volume_type(instance_type: int) -> Tuple[Optional[VolumeType], bool]:
    """Preferred volume type for an instance type.

    Returns ``(volume_type, True)`` on a hit and ``(None, False)`` when the
    instance type has no preference, in which case callers fall back to the
    default volume type.
    """
    vt = INSTANCE_TYPE_ATTACH_PREFERRED.get(instance_type)
    if vt is None:
        return None, False
    return vt, True


def _check_tables() -> None:
    for it, vt in INSTANCE_TYPE_ATTACH_PREFERRED.items():
        if not is_valid_volume_type(vt):
            raise RuntimeError(f"instance type {it} prefers unregistered volume type {vt}")
    for vt in VolumeType:
        if vt not in VOLUME_TYPE_ATTACH_CONSTRAINT:
            raise RuntimeError(f"volume type {vt.name} has no attach constraint entry")


_check_tables()
