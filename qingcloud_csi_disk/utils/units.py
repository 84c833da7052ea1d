from __future__ import annotations

import re


KIB = 1024
MIB = 1024 ** 2
GIB = 1024 ** 3
TIB = 1024 ** 4

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_QUANTITY_PATTERN = re.compile(r"(?P<val>[0-9]+)(?P<unit>Ki|Mi|Gi|Ti|K|M|G|T)?")

_UNIT_BYTES = {
    None: 1,
    "Ki": KIB,
    "Mi": MIB,
    "Gi": GIB,
    "Ti": TIB,
    "K": 1_000,
    "M": 1_000_000,
    "G": 1_000_000_000,
    "T": 1_000_000_000_000,
}


def parse_int(value: str) -> int:
    """Parse a decimal integer the strict way.

    Accepts an optional sign followed by ASCII digits. Surrounding whitespace,
    underscores and other forms ``int()`` tolerates are rejected, and so are
    values outside the signed 64-bit range.
    """
    s = str(value)
    if not _INT_PATTERN.fullmatch(s):
        raise ValueError(f"invalid integer: {value!r}")
    n = int(s)
    if not INT64_MIN <= n <= INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return n


def parse_quantity_bytes(value: str | int) -> int:
    """Parse a Kubernetes storage quantity to bytes.

    - 10Gi => 10737418240
    - 500M => 500000000
    - 1024 => 1024
    """
    s = str(value).strip()
    m = _QUANTITY_PATTERN.fullmatch(s)
    if not m:
        raise ValueError(f"Unknown storage quantity: {value}")
    return int(m.group("val")) * _UNIT_BYTES[m.group("unit")]


def bytes_to_gib(value: int) -> float:
    return value / GIB
