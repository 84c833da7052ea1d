from __future__ import annotations

from typing import Optional

from qingcloud_csi_disk.core.exceptions import CapacityRangeInvalidError
from qingcloud_csi_disk.models.resources import CapacityRange


def required_bytes(capacity_range: Optional[CapacityRange]) -> int:
    """Bytes to request for a new volume.

    No range means 0; the caller applies its own minimum. A required size over
    a positive limit is an error, never clamped.
    """
    if capacity_range is None:
        return 0
    res = 0
    if capacity_range.required_bytes > 0:
        res = capacity_range.required_bytes
    if capacity_range.limit_bytes > 0 and res > capacity_range.limit_bytes:
        raise CapacityRangeInvalidError(res, capacity_range.limit_bytes)
    return res
