"""
Declarative attribute schemas for resources and data sources.

A Resource describes the attributes a user can configure (required/optional),
the attributes the provider fills in (computed), how each value is validated,
and which handlers implement Create/Read/Update/Delete.

Usage:
    from azurerm.core.schema import Resource, Schema, ValueType

    def resource_example() -> Resource:
        return Resource(
            type_name="azurerm_example",
            create=create_example,
            read=read_example,
            delete=delete_example,
            schema={
                "name": Schema(ValueType.STRING, required=True, force_new=True),
                "alias": Schema(ValueType.STRING, computed=True),
            },
        )

Validator Signature:
    validate_func(value, key) -> (warnings, errors)
    Both are lists of strings; an empty error list means the value is valid.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .exceptions import SchemaError
from .timeouts import OPERATIONS, ResourceTimeout, parse_duration

if TYPE_CHECKING:
    from .resource_data import ResourceData


ValidateFunc = Callable[[Any, str], Tuple[List[str], List[str]]]
Handler = Callable[["ResourceData", Any], None]

TIMEOUTS_KEY = "timeouts"


class ValueType(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LIST = "list"
    SET = "set"
    MAP = "map"

    @property
    def is_collection(self) -> bool:
        return self in (ValueType.LIST, ValueType.SET, ValueType.MAP)


_SCALAR_CHECKS = {
    ValueType.STRING: lambda v: isinstance(v, str),
    ValueType.INT: lambda v: isinstance(v, int) and not isinstance(v, bool),
    ValueType.FLOAT: lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    ValueType.BOOL: lambda v: isinstance(v, bool),
}


def _sort_key(item: Any) -> str:
    if isinstance(item, dict):
        return json.dumps(item, sort_keys=True)
    return str(item)


@dataclass
class Schema:
    """
    Schema for a single attribute.

    Exactly one of required/optional/computed must be set, except that
    optional and computed may be combined (the provider fills the value in
    when the user leaves it unset).

    Attributes:
        type: The ValueType of the attribute
        elem: Element schema for LIST/SET/MAP (a Schema), or a Resource for
            nested blocks
        state_func: Normalises a scalar before it is stored (e.g. location)
        validate_func: Validator for scalar values and whole maps
    """

    type: ValueType
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    validate_func: Optional[ValidateFunc] = None
    state_func: Optional[Callable[[Any], Any]] = None
    elem: Any = None
    max_items: int = 0
    min_items: int = 0
    sensitive: bool = False
    description: str = ""

    def __post_init__(self):
        if self.required and (self.optional or self.computed):
            raise SchemaError("required cannot be combined with optional or computed")
        if self.default is not None and (self.required or not self.optional):
            raise SchemaError("default is only allowed on optional attributes")
        if self.type.is_collection and self.elem is None and self.type != ValueType.MAP:
            raise SchemaError(f"{self.type.value} attributes need an elem schema")
        if (self.max_items or self.min_items) and self.type not in (ValueType.LIST, ValueType.SET):
            raise SchemaError("max_items/min_items only apply to lists and sets")

    @property
    def is_block(self) -> bool:
        """True when the elements are nested blocks rather than scalars."""
        return isinstance(self.elem, Resource)

    def zero_value(self) -> Any:
        if self.default is not None:
            return self.coerce(self.default)
        return {
            ValueType.STRING: "",
            ValueType.INT: 0,
            ValueType.FLOAT: 0.0,
            ValueType.BOOL: False,
            ValueType.LIST: [],
            ValueType.SET: [],
            ValueType.MAP: {},
        }[self.type]

    def coerce(self, value: Any) -> Any:
        """Normalise a value to this schema's type for storage and comparison."""
        if value is None:
            if self.default is not None:
                value = self.default
            else:
                return self.zero_value()

        if self.type == ValueType.STRING:
            value = str(value)
        elif self.type == ValueType.INT:
            value = int(value)
        elif self.type == ValueType.FLOAT:
            value = float(value)
        elif self.type == ValueType.BOOL:
            value = bool(value)
        elif self.type == ValueType.MAP:
            elem = self.elem if isinstance(self.elem, Schema) else None
            return {
                str(k): (elem.coerce(v) if elem else v)
                for k, v in dict(value).items()
            }
        else:
            items = [self._coerce_item(item) for item in value]
            if self.type == ValueType.SET:
                unique = {_sort_key(item): item for item in items}
                return [unique[k] for k in sorted(unique)]
            return items

        if self.state_func is not None and value != "":
            value = self.state_func(value)
        return value

    def _coerce_item(self, item: Any) -> Any:
        if self.is_block:
            item = item or {}
            return {
                key: sub.coerce(item.get(key))
                for key, sub in self.elem.schema.items()
            }
        return self.elem.coerce(item)

    def validate_value(self, value: Any, path: str) -> List[str]:
        """
        Validate a configured value.

        Args:
            value: The configured value (never None)
            path: Dotted attribute path used in error messages

        Returns:
            List of error messages
        """
        errors: List[str] = []

        if self.type in _SCALAR_CHECKS:
            if not _SCALAR_CHECKS[self.type](value):
                return [f'"{path}": expected {self.type.value}, got {type(value).__name__}']
            if self.validate_func is not None:
                _, errs = self.validate_func(value, path)
                errors.extend(errs)
            return errors

        if self.type == ValueType.MAP:
            if not isinstance(value, dict):
                return [f'"{path}": expected map, got {type(value).__name__}']
            if isinstance(self.elem, Schema):
                for k, v in value.items():
                    if v is not None:
                        errors.extend(self.elem.validate_value(v, f"{path}.{k}"))
            if self.validate_func is not None:
                _, errs = self.validate_func(value, path)
                errors.extend(errs)
            return errors

        if not isinstance(value, (list, tuple, set, frozenset)):
            return [f'"{path}": expected {self.type.value}, got {type(value).__name__}']

        if self.max_items and len(value) > self.max_items:
            errors.append(f'"{path}": attribute supports {self.max_items} item maximum, config has {len(value)} declared')
        if self.min_items and len(value) < self.min_items:
            errors.append(f'"{path}": attribute supports {self.min_items} item minimum, config has {len(value)} declared')

        for i, item in enumerate(value):
            item_path = f"{path}.{i}"
            if self.is_block:
                if not isinstance(item, dict):
                    errors.append(f'"{item_path}": expected block, got {type(item).__name__}')
                    continue
                errors.extend(validate_block(self.elem.schema, item, f"{item_path}."))
            elif item is None:
                errors.append(f'"{item_path}": null values are not allowed')
            else:
                errors.extend(self.elem.validate_value(item, item_path))

        return errors

    def apply_defaults(self, value: Any) -> Any:
        if value is None:
            return self.default
        if self.is_block and isinstance(value, (list, tuple)):
            return [apply_block_defaults(self.elem.schema, item) for item in value]
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Describe the schema as JSON-serialisable data."""
        result: Dict[str, Any] = {"type": self.type.value}
        for flag in ("required", "optional", "computed", "force_new", "sensitive"):
            if getattr(self, flag):
                result[flag] = True
        if self.default is not None:
            result["default"] = self.default
        if self.max_items:
            result["max_items"] = self.max_items
        if self.min_items:
            result["min_items"] = self.min_items
        if self.description:
            result["description"] = self.description
        if isinstance(self.elem, Resource):
            result["block"] = {k: s.to_dict() for k, s in self.elem.schema.items()}
        elif isinstance(self.elem, Schema):
            result["elem"] = self.elem.to_dict()
        return result


def validate_block(schema: Dict[str, Schema], config: Dict[str, Any], prefix: str = "") -> List[str]:
    """
    Validate a configuration block against a schema map.

    Checks unknown attributes, required attributes, attempts to set
    computed-only attributes, and delegates value checks to each Schema.
    """
    errors: List[str] = []

    for key in config:
        if key not in schema and not (prefix == "" and key == TIMEOUTS_KEY):
            errors.append(f'"{prefix}{key}": unsupported argument')

    for key, s in schema.items():
        path = f"{prefix}{key}"
        value = config.get(key)
        if value is None:
            if s.required:
                errors.append(f'"{path}": required field is not set')
            continue
        if s.computed and not s.optional:
            errors.append(f'"{path}": computed attributes cannot be set')
            continue
        errors.extend(s.validate_value(value, path))

    return errors


def apply_block_defaults(schema: Dict[str, Schema], config: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(config)
    for key, s in schema.items():
        value = s.apply_defaults(result.get(key))
        if value is not None:
            result[key] = value
    return result


def import_state_passthrough(d: "ResourceData", meta: Any) -> List["ResourceData"]:
    """Importer that keeps the given ID as is; Read fills in the rest."""
    return [d]


def _check_attribute_flags(prefix: str, schema: Dict[str, Schema]) -> None:
    for key, s in schema.items():
        if not (s.required or s.optional or s.computed):
            raise SchemaError(f"{prefix}.{key}: one of required, optional or computed must be set")
        if s.is_block:
            _check_attribute_flags(f"{prefix}.{key}", s.elem.schema)


class Resource:
    """
    A resource or data source definition.

    A data source only defines ``read``. Resources without ``update`` must
    mark every configurable attribute as force_new.

    Attributes:
        type_name: Orchestrator type name (e.g. "azurerm_dashboard")
        schema: Mapping of attribute name to Schema
        importer: Import function; ``import_state_passthrough`` for most resources
        timeouts: Default per-operation timeouts
        customize_diff: Cross-attribute validation run before create/update
    """

    def __init__(
        self,
        schema: Dict[str, Schema],
        type_name: str = "",
        create: Optional[Handler] = None,
        read: Optional[Handler] = None,
        update: Optional[Handler] = None,
        delete: Optional[Handler] = None,
        importer: Optional[Callable] = None,
        timeouts: Optional[ResourceTimeout] = None,
        customize_diff: Optional[Handler] = None,
    ):
        self.type_name = type_name
        self.schema = schema
        self.create = create
        self.read = read
        self.update = update
        self.delete = delete
        self.importer = importer
        self.timeouts = timeouts or ResourceTimeout()
        self.customize_diff = customize_diff

    @property
    def is_data_source(self) -> bool:
        return self.read is not None and self.create is None and self.delete is None

    def internal_validate(self) -> None:
        """
        Check the resource definition for consistency.

        Raises:
            SchemaError: On a missing handler or an updatable attribute on a
                resource without an update handler
        """
        if self.read is None:
            raise SchemaError(f"{self.type_name}: read handler is required")
        _check_attribute_flags(self.type_name, self.schema)
        if self.is_data_source:
            for key, s in self.schema.items():
                if s.force_new and not s.computed and not s.required:
                    raise SchemaError(f"{self.type_name}.{key}: data sources cannot have force_new optional attributes")
            return
        if self.create is None or self.delete is None:
            raise SchemaError(f"{self.type_name}: create and delete handlers are required")
        if self.update is None:
            for key, s in self.schema.items():
                if (s.required or s.optional) and not s.force_new and key != "tags":
                    raise SchemaError(
                        f"{self.type_name}.{key}: all fields are force_new or computed "
                        f"when no update handler is defined"
                    )

    def validate(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate a user configuration without calling the API.

        Returns:
            List of error messages; empty when the configuration is valid
        """
        errors = validate_block(self.schema, config)
        raw_timeouts = config.get(TIMEOUTS_KEY) or {}
        if not isinstance(raw_timeouts, dict):
            errors.append(f'"{TIMEOUTS_KEY}": expected block')
            return errors
        for operation, value in raw_timeouts.items():
            if operation not in OPERATIONS:
                errors.append(f'"{TIMEOUTS_KEY}.{operation}": unsupported timeout')
                continue
            try:
                parse_duration(value)
            except ValueError as e:
                errors.append(f'"{TIMEOUTS_KEY}.{operation}": {e}')
        return errors

    def data(
        self,
        config: Optional[Dict[str, Any]] = None,
        state: Optional[Dict[str, Any]] = None,
    ) -> "ResourceData":
        """Build a ResourceData for one handler invocation."""
        from .resource_data import ResourceData

        if config is not None:
            config = apply_block_defaults(self.schema, config)
        return ResourceData(self, config=config, state=state)

    def import_state(self, resource_id: str, meta: Any) -> List["ResourceData"]:
        """
        Turn an existing Azure ID into ResourceData ready to be read.

        Raises:
            SchemaError: If the resource does not support import
        """
        if self.importer is None:
            raise SchemaError(f"{self.type_name} does not support import")
        d = self.data(state={"id": resource_id})
        return self.importer(d, meta)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "data_source": self.is_data_source,
            "attributes": {k: s.to_dict() for k, s in self.schema.items()},
            "timeouts": {
                op: str(self.timeouts.get(op))
                for op in OPERATIONS
                if getattr(self.timeouts, op) is not None
            },
        }
