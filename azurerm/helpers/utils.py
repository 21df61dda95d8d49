from typing import Any, Iterable, List, Optional


def expand_string_slice(values: Optional[Iterable[Any]]) -> List[str]:
    return [str(v) for v in (values or []) if v is not None]


def flatten_string_slice(values: Optional[Iterable[Optional[str]]]) -> List[str]:
    return [v for v in (values or []) if v is not None]


def ids_of(items: Optional[Iterable[Any]]) -> List[str]:
    """Collect the ``id`` attribute of SDK sub-resources, skipping empty ones."""
    return [item.id for item in (items or []) if getattr(item, "id", None)]


def enum_value(value: Any) -> str:
    """String value of an SDK enum member (or a plain string), "" for None."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))
