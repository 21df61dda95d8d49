"""
Data source: azurerm_private_link_endpoint_connection

Reports the service connections of a Private Endpoint together with the
private IP address assigned to the endpoint's network interface.
"""

import logging
from typing import Any, List, Optional

from azure.core.exceptions import HttpResponseError

from azurerm.core.exceptions import ProviderError, ResourceIDError
from azurerm.core.schema import Resource, Schema, ValueType
from azurerm.helpers import azure
from azurerm.helpers.response import was_not_found
from .parse import parse_network_interface_id
from .validate import validate_private_link_name

logger = logging.getLogger(__name__)


def data_source_private_link_endpoint_connection() -> Resource:
    return Resource(
        type_name="azurerm_private_link_endpoint_connection",
        read=read_private_link_endpoint_connection,
        schema={
            "name": Schema(
                ValueType.STRING,
                required=True,
                validate_func=validate_private_link_name,
            ),
            "location": azure.schema_location_for_data_source(),
            "resource_group_name": azure.schema_resource_group_name_for_data_source(),
            "private_service_connection": Schema(
                ValueType.LIST,
                computed=True,
                elem=Resource(schema={
                    "name": Schema(ValueType.STRING, computed=True),
                    "request_response": Schema(ValueType.STRING, computed=True),
                    "status": Schema(ValueType.STRING, computed=True),
                    "private_ip_address": Schema(ValueType.STRING, computed=True),
                }),
            ),
        },
    )


def read_private_link_endpoint_connection(d, meta) -> None:
    client = meta.client.network.private_endpoints

    name = d.get("name")
    resource_group = d.get("resource_group_name")
    description = f'Private Link Endpoint "{name}" (Resource Group "{resource_group}")'

    try:
        resp = client.get(resource_group, name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ {description} not found")
            d.set_id("")
            return
        raise ProviderError(f"Error reading {description}: {e}") from e

    if not getattr(resp, "id", None):
        raise ProviderError(f"API returns a nil/empty id on {description}")

    d.set_id(resp.id)
    d.set("name", resp.name)
    d.set("resource_group_name", resource_group)
    if resp.location:
        d.set("location", azure.normalize_location(resp.location))

    private_ip_address = ""
    nics = resp.network_interfaces or []
    if nics and nics[0].id:
        private_ip_address = get_private_ip_address(nics[0].id, meta)

    d.set(
        "private_service_connection",
        flatten_service_connections(
            resp.private_link_service_connections,
            resp.manual_private_link_service_connections,
            private_ip_address,
        ),
    )


def get_private_ip_address(network_interface_id: str, meta) -> str:
    """
    Private IP of the first IP configuration of a network interface.

    Lookup failures are logged and yield "" so the data source still reads.
    """
    try:
        id = parse_network_interface_id(network_interface_id)
    except ResourceIDError as e:
        logger.warning(f"✗ Could not parse network interface ID {network_interface_id!r}: {e.message}")
        return ""

    client = meta.client.network.network_interfaces
    try:
        resp = client.get(id.resource_group, id.name)
    except HttpResponseError as e:
        logger.warning(f"✗ Could not read network interface {id.name!r}: {e}")
        return ""

    configs = resp.ip_configurations or []
    if configs and configs[0].private_ip_address:
        return configs[0].private_ip_address
    return ""


def flatten_service_connections(
    service_connections: Optional[List[Any]],
    manual_service_connections: Optional[List[Any]],
    private_ip_address: str,
) -> List[dict]:
    results = []
    for item in (service_connections or []) + (manual_service_connections or []):
        result = {
            "name": item.name or "",
            "private_ip_address": private_ip_address,
            "status": "",
            "request_response": "",
        }
        state = getattr(item, "private_link_service_connection_state", None)
        if state is not None:
            result["status"] = state.status or ""
            result["request_response"] = state.description or ""
        results.append(result)
    return results
