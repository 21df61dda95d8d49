"""
Flat attribute state for a single handler invocation.

ResourceData combines three layers, read in this order:

    1. Values written by the handler via set()
    2. The user's configuration (with schema defaults applied)
    3. The prior state persisted by the orchestrator

Handlers read attributes with get(), write observed values with set(), and
signal that the remote object is gone with set_id("").
"""

from datetime import timedelta
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from .exceptions import SchemaError
from .timeouts import parse_duration

if TYPE_CHECKING:
    from .schema import Resource, Schema


_EMPTY_VALUES = ("", 0, 0.0, False, [], {})


class ResourceData:
    """
    State accessor handed to every Create/Read/Update/Delete handler.

    Attributes:
        resource: The Resource definition this data belongs to
    """

    def __init__(
        self,
        resource: "Resource",
        config: Optional[Dict[str, Any]] = None,
        state: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource
        self._config = config
        self._prior: Dict[str, Any] = dict(state or {})
        self._written: Dict[str, Any] = {}
        self._id: str = self._prior.pop("id", "") or ""
        self._new = not self._id

    # ==========================================
    # Identity
    # ==========================================

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        """Set the resource ID; an empty ID removes the resource from state."""
        self._id = value or ""

    def is_new_resource(self) -> bool:
        """True while creating a resource that had no prior state."""
        return self._new

    # ==========================================
    # Attribute access
    # ==========================================

    def _schema_for(self, key: str) -> "Schema":
        try:
            return self.resource.schema[key]
        except KeyError:
            raise SchemaError(
                f"Invalid address to set: {key!r}",
                resource_type=self.resource.type_name or None,
            ) from None

    def get(self, key: str) -> Any:
        """
        Get an attribute value, falling back to the zero value of its type.

        Raises:
            SchemaError: If the key is not part of the schema
        """
        value, _ = self.get_ok(key)
        return value

    def get_ok(self, key: str) -> Tuple[Any, bool]:
        """
        Get an attribute value and whether it was set to a non-zero value.

        With a configuration present, an attribute missing from it only keeps
        its prior value when it is computed; anything else reads as removed.
        """
        s = self._schema_for(key)
        if key in self._written:
            value = self._written[key]
        elif self._config is not None and self._config.get(key) is not None:
            value = s.coerce(self._config[key])
        elif key in self._prior and (self._config is None or s.computed):
            value = s.coerce(self._prior[key])
        else:
            value = s.zero_value()
        return value, value not in _EMPTY_VALUES

    def set(self, key: str, value: Any) -> None:
        """
        Write an observed value into state.

        Raises:
            SchemaError: If the key is not part of the schema
        """
        s = self._schema_for(key)
        self._written[key] = s.coerce(value)

    def has_change(self, key: str) -> bool:
        """True if the configured value differs from the prior state."""
        s = self._schema_for(key)
        if self._config is None or self._new:
            return False
        old = s.coerce(self._prior.get(key))
        new = s.coerce(self._config.get(key))
        if s.computed and self._config.get(key) is None:
            return False
        return old != new

    # ==========================================
    # Timeouts
    # ==========================================

    def timeout(self, operation: str) -> timedelta:
        """Effective timeout for an operation, honouring a ``timeouts`` block."""
        overrides = (self._config or {}).get("timeouts") or {}
        if overrides.get(operation):
            return parse_duration(overrides[operation])
        return self.resource.timeouts.get(operation)

    # ==========================================
    # Export
    # ==========================================

    def state(self) -> Optional[Dict[str, Any]]:
        """
        The flat state to persist, or None when the resource is gone.
        """
        if not self._id:
            return None
        result: Dict[str, Any] = {"id": self._id}
        for key in self.resource.schema:
            result[key] = self.get(key)
        return result

    def __repr__(self) -> str:
        return f"ResourceData(type={self.resource.type_name!r}, id={self._id!r})"
