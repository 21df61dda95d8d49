"""
Operation timeouts for resource handlers.

Each resource declares default timeouts per operation; users may override
them in a ``timeouts`` block of the resource configuration using duration
strings such as ``"30m"``, ``"1h30m"`` or ``"45s"``.

Usage:
    from azurerm.core import timeouts

    deadline = timeouts.for_create_update(d)
    poller.result(timeout=deadline.remaining())
"""

import re
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, TYPE_CHECKING

from .exceptions import SchemaError

if TYPE_CHECKING:
    from .resource_data import ResourceData


DEFAULT_TIMEOUT = timedelta(minutes=20)

OPERATIONS = ("create", "read", "update", "delete")

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_FULL = re.compile(r"^(\d+(?:\.\d+)?(ms|h|m|s))+$")
_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Args:
        value: Duration such as "90m", "1h30m", "1.5h" or "45s"

    Returns:
        The parsed timedelta

    Raises:
        ValueError: If the string is not a valid duration
    """
    if not isinstance(value, str) or not _DURATION_FULL.match(value.strip()):
        raise ValueError(f"invalid duration {value!r}")

    seconds = sum(
        float(amount) * _UNIT_SECONDS[unit]
        for amount, unit in _DURATION_PART.findall(value.strip())
    )
    return timedelta(seconds=seconds)


@dataclass
class ResourceTimeout:
    """Default timeouts for each operation of a resource."""

    create: Optional[timedelta] = None
    read: Optional[timedelta] = None
    update: Optional[timedelta] = None
    delete: Optional[timedelta] = None

    def get(self, operation: str) -> timedelta:
        if operation not in OPERATIONS:
            raise SchemaError(f"unknown timeout operation {operation!r}")
        return getattr(self, operation) or DEFAULT_TIMEOUT


class Deadline:
    """A point in time by which an operation must finish."""

    def __init__(self, timeout: timedelta):
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout.total_seconds()

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    def expired(self) -> bool:
        return self.remaining() <= 0

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout}, remaining={self.remaining():.1f}s)"


def for_create_update(d: "ResourceData") -> Deadline:
    if d.is_new_resource():
        return Deadline(d.timeout("create"))
    return Deadline(d.timeout("update"))


def for_read(d: "ResourceData") -> Deadline:
    return Deadline(d.timeout("read"))


def for_delete(d: "ResourceData") -> Deadline:
    return Deadline(d.timeout("delete"))
