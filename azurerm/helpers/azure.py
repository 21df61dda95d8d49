"""
Azure Resource Manager helpers shared by every resource.

Contents:
    - ResourceID / parse_azure_resource_id: split an ARM ID into its parts
    - normalize_location: canonical region names ("West Europe" -> "westeurope")
    - Schema helpers for the ubiquitous location / resource_group_name fields

Resource ID Format:
    /subscriptions/{sub}/resourceGroups/{rg}/providers/{namespace}/{type}/{name}[/{type}/{name}...]
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict

from azurerm.core.exceptions import ResourceIDError
from azurerm.core.schema import Schema, ValueType

_RESOURCE_GROUP_NAME = re.compile(r"^[-\w._()]+$")


@dataclass
class ResourceID:
    """
    A parsed Azure Resource ID.

    Attributes:
        subscription_id: Subscription GUID
        resource_group: Resource group name ("" for subscription-level IDs)
        provider: Resource provider namespace (e.g. "Microsoft.Network")
        path: Remaining type/name pairs
    """

    subscription_id: str
    resource_group: str = ""
    provider: str = ""
    path: Dict[str, str] = field(default_factory=dict)

    def pop_segment(self, name: str) -> str:
        """
        Remove and return the value of a path segment.

        Raises:
            ResourceIDError: If the segment is missing
        """
        if name not in self.path:
            raise ResourceIDError(f"ID was missing the `{name}` element")
        return self.path.pop(name)

    def validate_no_empty_segments(self, source_id: str) -> None:
        """
        Ensure every path segment has been consumed.

        Raises:
            ResourceIDError: If unexpected segments remain
        """
        if self.path:
            raise ResourceIDError(
                f"ID contained more segments than required: {source_id!r}, {self.path}"
            )


def parse_azure_resource_id(resource_id: str) -> ResourceID:
    """
    Parse an Azure Resource ID into its components.

    Args:
        resource_id: The full ARM resource ID

    Returns:
        ResourceID with subscription, resource group, provider and path

    Raises:
        ResourceIDError: If the ID is empty, not absolute, has an odd number
            of segments, contains an empty key/value, or has no subscription
    """
    if not resource_id or not resource_id.startswith("/"):
        raise ResourceIDError(f"Cannot parse Azure ID: {resource_id!r}")

    path = resource_id.strip("/")
    components = path.split("/")

    if len(components) % 2 != 0:
        raise ResourceIDError(f"The number of path segments is not divisible by 2 in {path!r}")

    component_map: Dict[str, str] = {}
    for i in range(0, len(components), 2):
        key, value = components[i], components[i + 1]
        if key == "" or value == "":
            raise ResourceIDError(f"Key/Value cannot be empty strings. Key: {key!r}, Value: {value!r}")
        component_map[key] = value

    subscription = component_map.pop("subscriptions", "")
    if not subscription:
        raise ResourceIDError(f"No subscription ID found in: {path!r}")

    parsed = ResourceID(subscription_id=subscription)

    if "resourceGroups" in component_map:
        parsed.resource_group = component_map.pop("resourceGroups")
    elif "resourcegroups" in component_map:
        parsed.resource_group = component_map.pop("resourcegroups")

    if "providers" in component_map:
        parsed.provider = component_map.pop("providers")

    parsed.path = component_map
    return parsed


def validate_resource_id(value: Any, key: str):
    """Validator: value must be a parseable Azure Resource ID."""
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    try:
        parse_azure_resource_id(value)
    except ResourceIDError as e:
        return [], [f"Can not parse {key!r} as a resource id: {e.message}"]
    return [], []


def validate_resource_group_name(value: Any, key: str):
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    errors = []
    if len(value) > 90:
        errors.append(f"{key} may not exceed 90 characters in length")
    if value.endswith("."):
        errors.append(f"{key} cannot end with a period")
    if not _RESOURCE_GROUP_NAME.match(value):
        errors.append(f"{key} can only consist of alphanumeric characters, periods, underscores, hyphens and parenthesis")
    return [], errors


def normalize_location(location: str) -> str:
    """Lowercase a region name and strip its spaces."""
    return location.replace(" ", "").lower()


# ==========================================
# Schema helpers
# ==========================================

def schema_location() -> Schema:
    return Schema(
        ValueType.STRING,
        required=True,
        force_new=True,
        state_func=normalize_location,
        description="Azure region where the resource exists",
    )


def schema_location_for_data_source() -> Schema:
    return Schema(ValueType.STRING, computed=True)


def schema_resource_group_name() -> Schema:
    return Schema(
        ValueType.STRING,
        required=True,
        force_new=True,
        validate_func=validate_resource_group_name,
    )


def schema_resource_group_name_for_data_source() -> Schema:
    return Schema(ValueType.STRING, required=True)


def schema_resource_group_name_set_optional() -> Schema:
    return Schema(
        ValueType.SET,
        optional=True,
        elem=Schema(ValueType.STRING, validate_func=validate_resource_group_name),
    )
