"""
Reusable attribute validators.

Every validator follows the signature ``(value, key) -> (warnings, errors)``
so it can be plugged into ``Schema.validate_func``. Validators built from
parameters (string_in_slice, int_between) are factories returning such a
function.
"""

import ipaddress
import json
import re
from typing import Any, Iterable, List, Tuple

Result = Tuple[List[str], List[str]]

_GUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


def _expect_string(value: Any, key: str) -> List[str]:
    if not isinstance(value, str):
        return [f"expected type of {key} to be string"]
    return []


def guid(value: Any, key: str) -> Result:
    errors = _expect_string(value, key)
    if errors:
        return [], errors
    if not _GUID.match(value):
        return [], [f"{key} is an invalid UUUID: {value!r}"]
    return [], []


def ipv4_address(value: Any, key: str) -> Result:
    errors = _expect_string(value, key)
    if errors:
        return [], errors
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return [], [f"{key} is not a valid IPv4 address: {value!r}"]
    return [], []


def ipv6_address(value: Any, key: str) -> Result:
    errors = _expect_string(value, key)
    if errors:
        return [], errors
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return [], [f"{key} is not a valid IPv6 address: {value!r}"]
    return [], []


def normalize_ipv6(value: str) -> str:
    """Compress an IPv6 address so equivalent spellings compare equal."""
    try:
        return str(ipaddress.IPv6Address(value))
    except ValueError:
        return value


def no_empty_strings(value: Any, key: str) -> Result:
    errors = _expect_string(value, key)
    if errors:
        return [], errors
    if not value.strip():
        return [], [f"{key} must not be empty"]
    return [], []


def string_in_slice(valid: Iterable[str], ignore_case: bool = False):
    """Validator accepting only the given values."""
    valid = list(valid)

    def validate(value: Any, key: str) -> Result:
        errors = _expect_string(value, key)
        if errors:
            return [], errors
        for candidate in valid:
            if value == candidate or (ignore_case and value.lower() == candidate.lower()):
                return [], []
        return [], [f"expected {key} to be one of {valid}, got {value}"]

    return validate


def int_between(minimum: int, maximum: int):
    """Validator accepting integers within [minimum, maximum]."""

    def validate(value: Any, key: str) -> Result:
        if not isinstance(value, int) or isinstance(value, bool):
            return [], [f"expected type of {key} to be integer"]
        if value < minimum or value > maximum:
            return [], [f"expected {key} to be in the range ({minimum} - {maximum}), got {value}"]
        return [], []

    return validate


def string_is_json(value: Any, key: str) -> Result:
    errors = _expect_string(value, key)
    if errors:
        return [], errors
    if value == "":
        return [], []
    try:
        json.loads(value)
    except json.JSONDecodeError as e:
        return [], [f"{key} contains an invalid JSON: {e}"]
    return [], []


def normalize_json(value: str) -> str:
    """Re-serialise JSON with sorted keys and no insignificant whitespace."""
    if not value:
        return ""
    try:
        return json.dumps(json.loads(value), sort_keys=True, separators=(",", ":"))
    except json.JSONDecodeError:
        return value
