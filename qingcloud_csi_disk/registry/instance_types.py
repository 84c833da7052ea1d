from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional


class InstanceType(IntEnum):
    HIGH_PERFORMANCE = 0
    SUPER_HIGH_PERFORMANCE = 1
    SUPER_HIGH_PERFORMANCE_SAN = 6
    HIGH_PERFORMANCE_SAN = 7
    STANDARD = 101
    ENTERPRISE1 = 201
    ENTERPRISE2 = 202
    ENTERPRISE_COMPUTE3 = 203
    PREMIUM = 301


INSTANCE_TYPE_NAME: Mapping[int, str] = MappingProxyType(
    {
        InstanceType.HIGH_PERFORMANCE: "HighPerformance",
        InstanceType.SUPER_HIGH_PERFORMANCE: "SuperHighPerformance",
        InstanceType.SUPER_HIGH_PERFORMANCE_SAN: "SuperHighPerformanceSAN",
        InstanceType.HIGH_PERFORMANCE_SAN: "HighPerformanceSAN",
        InstanceType.STANDARD: "Standard",
        InstanceType.ENTERPRISE1: "Enterprise1",
        InstanceType.ENTERPRISE2: "Enterprise2",
        InstanceType.ENTERPRISE_COMPUTE3: "EnterpriseCompute3",
        InstanceType.PREMIUM: "Premium",
    }
)

INSTANCE_TYPE_VALUE: Mapping[str, InstanceType] = MappingProxyType(
    {name: InstanceType(code) for code, name in INSTANCE_TYPE_NAME.items()}
)


def is_valid_instance_type(code: int) -> bool:
    return code in INSTANCE_TYPE_NAME


def instance_type_name(code: int) -> str:
    return INSTANCE_TYPE_NAME.get(code, "")


def instance_type_from_name(name: Optional[str]) -> Optional[InstanceType]:
    """Look up an instance type by its display name (exact match)."""
    if not name:
        return None
    return INSTANCE_TYPE_VALUE.get(name)
