from __future__ import annotations

from typing import FrozenSet


DEFAULT_FILESYSTEM = "ext4"
SUPPORTED_FILESYSTEMS: FrozenSet[str] = frozenset({"ext3", "ext4", "xfs"})

SINGLE_REPLICA = 1
MULTI_REPLICA = 2
DEFAULT_REPLICA = MULTI_REPLICA
SUPPORTED_REPLICAS: FrozenSet[int] = frozenset({SINGLE_REPLICA, MULTI_REPLICA})


def is_valid_filesystem(fs_type: str) -> bool:
    return fs_type in SUPPORTED_FILESYSTEMS


def is_valid_replica(replica: int) -> bool:
    return replica in SUPPORTED_REPLICAS
