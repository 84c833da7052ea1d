from __future__ import annotations

import pytest

from qingcloud_csi_disk.calculators.capacity import required_bytes
from qingcloud_csi_disk.core.exceptions import CapacityRangeInvalidError
from qingcloud_csi_disk.models.resources import CapacityRange
from qingcloud_csi_disk.utils.units import GIB


def test_no_range_returns_zero():
    assert required_bytes(None) == 0
    assert required_bytes(CapacityRange(required_bytes=0, limit_bytes=0)) == 0


def test_required_within_limit():
    assert required_bytes(CapacityRange(required_bytes=10 * GIB, limit_bytes=20 * GIB)) == 10 * GIB
    assert required_bytes(CapacityRange(required_bytes=10 * GIB, limit_bytes=10 * GIB)) == 10 * GIB


def test_required_without_limit():
    assert required_bytes(CapacityRange(required_bytes=3 * GIB)) == 3 * GIB


def test_only_limit_returns_zero():
    assert required_bytes(CapacityRange(limit_bytes=5 * GIB)) == 0


def test_required_over_limit_fails():
    with pytest.raises(CapacityRangeInvalidError) as exc:
        required_bytes(CapacityRange(required_bytes=10 * GIB, limit_bytes=5 * GIB))
    assert exc.value.required_bytes == 10 * GIB
    assert exc.value.limit_bytes == 5 * GIB
    assert exc.value.field == "required_bytes"
