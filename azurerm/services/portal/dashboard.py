"""
Resource: azurerm_dashboard

Manages a shared Azure Portal dashboard. The dashboard layout is passed
through as a JSON document (``dashboard_properties``) holding the
``lenses`` and ``metadata`` of the dashboard.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict

from azure.core.exceptions import DeserializationError, HttpResponseError

from azurerm.core.exceptions import ProviderError
from azurerm.core.schema import Resource, Schema, ValueType, import_state_passthrough
from azurerm.core.timeouts import ResourceTimeout
from azurerm.helpers import azure, tags, validate
from azurerm.helpers.response import raw_json, was_not_found
from azurerm.helpers.tf import check_for_existing, should_resources_be_imported

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_dashboard"

_DASHBOARD_NAME = re.compile(r"^[a-zA-Z0-9-]{1,64}$")
_PROPERTY_KEYS = ("lenses", "metadata")


def validate_dashboard_name(value: Any, key: str):
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if not _DASHBOARD_NAME.match(value):
        return [], [f"{key} may only contain alphanumeric characters and dashes, up to 64 characters: {value!r}"]
    return [], []


@dataclass
class DashboardID:
    resource_group: str
    name: str


def parse_dashboard_id(input_id: str) -> DashboardID:
    parsed = azure.parse_azure_resource_id(input_id)
    name = parsed.pop_segment("dashboards")
    parsed.validate_no_empty_segments(input_id)
    return DashboardID(parsed.resource_group, name)


def resource_dashboard() -> Resource:
    return Resource(
        type_name=RESOURCE_TYPE,
        create=create_update_dashboard,
        read=read_dashboard,
        update=create_update_dashboard,
        delete=delete_dashboard,
        importer=import_state_passthrough,
        timeouts=ResourceTimeout(
            create=timedelta(minutes=30),
            read=timedelta(minutes=5),
            update=timedelta(minutes=30),
            delete=timedelta(minutes=30),
        ),
        schema={
            "name": Schema(
                ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=validate_dashboard_name,
            ),
            "resource_group_name": azure.schema_resource_group_name(),
            "location": azure.schema_location(),
            "tags": tags.schema(),
            "dashboard_properties": Schema(
                ValueType.STRING,
                optional=True,
                computed=True,
                validate_func=validate.string_is_json,
                state_func=validate.normalize_json,
            ),
        },
    )


def create_update_dashboard(d, meta) -> None:
    client = meta.client.portal.dashboards

    name = d.get("name")
    resource_group = d.get("resource_group_name")
    description = f'Dashboard "{name}" (Resource Group "{resource_group}")'

    if should_resources_be_imported(meta) and d.is_new_resource():
        check_for_existing(RESOURCE_TYPE, description, lambda: client.get(resource_group, name, cls=raw_json))

    dashboard = {
        "location": azure.normalize_location(d.get("location")),
        "tags": tags.expand(d.get("tags")),
        "properties": expand_dashboard_properties(d.get("dashboard_properties")),
    }

    logger.info(f"Creating/updating {description}...")
    body = json.dumps(dashboard).encode("utf-8")
    try:
        resp = client.create_or_update(resource_group, name, body, cls=raw_json)
    except (HttpResponseError, DeserializationError) as e:
        logger.error(f"Failed to create {description}: {e}")
        raise ProviderError(f"Error creating/updating {description}: {e}", RESOURCE_TYPE) from e

    if not (resp or {}).get("id"):
        raise ProviderError(f"API returns a nil/empty id on {description}", RESOURCE_TYPE)

    d.set_id(resp["id"])
    logger.info(f"✓ {description} created/updated")

    read_dashboard(d, meta)


def read_dashboard(d, meta) -> None:
    client = meta.client.portal.dashboards

    id = parse_dashboard_id(d.id)

    try:
        resp = client.get(id.resource_group, id.name, cls=raw_json)
    except (HttpResponseError, DeserializationError) as e:
        if was_not_found(e):
            logger.info(f"✗ Dashboard {d.id!r} does not exist - removing from state")
            d.set_id("")
            return
        raise ProviderError(
            f'Error retrieving Dashboard "{id.name}" (Resource Group "{id.resource_group}"): {e}',
            RESOURCE_TYPE,
        ) from e

    d.set("name", resp.get("name"))
    d.set("resource_group_name", id.resource_group)
    if resp.get("location"):
        d.set("location", azure.normalize_location(resp["location"]))

    d.set("dashboard_properties", flatten_dashboard_properties(resp.get("properties") or {}))

    tags.flatten_and_set(d, resp.get("tags"))


def delete_dashboard(d, meta) -> None:
    client = meta.client.portal.dashboards

    id = parse_dashboard_id(d.id)
    description = f'Dashboard "{id.name}" (Resource Group "{id.resource_group}")'

    logger.info(f"Deleting {description}...")
    try:
        client.delete(id.resource_group, id.name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ {description} not found (already deleted)")
            return
        raise ProviderError(f"Error deleting {description}: {e}", RESOURCE_TYPE) from e

    logger.info(f"✓ {description} deleted")


def expand_dashboard_properties(value: str) -> Dict[str, Any]:
    """
    Parse the configured JSON into the dashboard's properties.

    Raises:
        ProviderError: If the JSON is invalid
    """
    if not value:
        return {}
    try:
        properties = json.loads(value)
    except json.JSONDecodeError as e:
        raise ProviderError(f"Error parsing JSON for `dashboard_properties`: {e}", RESOURCE_TYPE) from e
    if not isinstance(properties, dict):
        raise ProviderError("`dashboard_properties` must be a JSON object", RESOURCE_TYPE)
    return properties


def flatten_dashboard_properties(properties: Dict[str, Any]) -> str:
    result = {key: properties[key] for key in _PROPERTY_KEYS if properties.get(key) is not None}
    return json.dumps(result, sort_keys=True, separators=(",", ":"))
