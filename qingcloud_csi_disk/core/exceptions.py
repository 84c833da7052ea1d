from __future__ import annotations

from typing import Any


class StorageClassError(Exception):
    """Base exception for storage class resolution errors."""


class ParseError(StorageClassError):
    """Raised when reading YAML manifests fails fatally."""


class OptionError(StorageClassError):
    """A storage class option that cannot be satisfied.

    ``field`` is the option name and ``value`` the offending value, so callers
    can surface a provisioning failure without parsing the message.
    """

    reason = "invalid option"

    def __init__(self, field: str, value: Any, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(message or f"{self.reason} {field}={value!r}")


class MalformedOptionError(OptionError):
    reason = "malformed option"


class UnsupportedVolumeTypeError(OptionError):
    reason = "unsupported volume type"


class UnsupportedFilesystemError(OptionError):
    reason = "unsupported filesystem type"


class UnsupportedReplicaError(OptionError):
    reason = "unsupported replica"


class CapacityRangeInvalidError(OptionError):
    def __init__(self, required_bytes: int, limit_bytes: int):
        self.required_bytes = required_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            "required_bytes",
            required_bytes,
            f"volume required bytes {required_bytes} greater than limit bytes {limit_bytes}",
        )
