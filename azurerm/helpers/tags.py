"""
Tag (de)serialization shared by every taggable resource.

Azure accepts at most 50 tags per resource; keys are limited to 512
characters and values to 256.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from azurerm.core.schema import Schema, ValueType

if TYPE_CHECKING:
    from azurerm.core.resource_data import ResourceData

MAX_TAGS = 50
MAX_KEY_LENGTH = 512
MAX_VALUE_LENGTH = 256


def validate(value: Any, key: str):
    if not isinstance(value, dict):
        return [], [f"expected type of {key} to be map"]

    errors = []
    if len(value) > MAX_TAGS:
        errors.append(f"a maximum of {MAX_TAGS} tags can be applied to each ARM resource")

    for k, v in value.items():
        if len(k) > MAX_KEY_LENGTH:
            errors.append(f"the maximum length for a tag key is {MAX_KEY_LENGTH} characters: {k!r} is {len(k)} characters")
        if v is not None and len(str(v)) > MAX_VALUE_LENGTH:
            errors.append(f"the maximum length for a tag value is {MAX_VALUE_LENGTH} characters: the value for {k!r} is {len(str(v))} characters")
    return [], errors


def schema() -> Schema:
    return Schema(
        ValueType.MAP,
        optional=True,
        elem=Schema(ValueType.STRING),
        validate_func=validate,
    )


def schema_force_new() -> Schema:
    return Schema(
        ValueType.MAP,
        optional=True,
        force_new=True,
        elem=Schema(ValueType.STRING),
        validate_func=validate,
    )


def expand(tags: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Convert configured tags into the API's string map."""
    return {str(k): "" if v is None else str(v) for k, v in (tags or {}).items()}


def flatten(tags: Optional[Dict[str, Optional[str]]]) -> Dict[str, str]:
    """Convert API tags into state, dropping nothing and mapping None to ""."""
    return {k: v if v is not None else "" for k, v in (tags or {}).items()}


def flatten_and_set(d: "ResourceData", tags: Optional[Dict[str, Optional[str]]]) -> None:
    d.set("tags", flatten(tags))
