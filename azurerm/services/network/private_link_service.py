"""
Resource: azurerm_private_link_service

A Private Link Service exposes a service behind a Standard Load Balancer to
private endpoints in other virtual networks.

The create/update LRO reports success before the service has finished
applying its configuration, so after the poller completes the handler keeps
polling ``provisioning_state`` until it reaches ``Succeeded``.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from azure.core.exceptions import HttpResponseError

from azurerm.core import timeouts
from azurerm.core.exceptions import ProviderError
from azurerm.core.schema import Resource, Schema, ValueType, import_state_passthrough
from azurerm.core.state import StateChangeConf, wait_for_completion
from azurerm.core.timeouts import ResourceTimeout
from azurerm.helpers import azure, tags, validate
from azurerm.helpers.response import was_not_found
from azurerm.helpers.tf import check_for_existing, should_resources_be_imported
from azurerm.helpers.utils import enum_value, expand_string_slice, flatten_string_slice, ids_of
from .parse import parse_private_link_service_id
from .validate import IPV4, validate_private_link_name, validate_private_link_nat_ip_configuration

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_private_link_service"


def resource_private_link_service() -> Resource:
    return Resource(
        type_name=RESOURCE_TYPE,
        create=create_update_private_link_service,
        read=read_private_link_service,
        update=create_update_private_link_service,
        delete=delete_private_link_service,
        importer=import_state_passthrough,
        timeouts=ResourceTimeout(
            create=timedelta(minutes=60),
            read=timedelta(minutes=5),
            update=timedelta(minutes=60),
            delete=timedelta(minutes=60),
        ),
        customize_diff=validate_private_link_nat_ip_configuration,
        schema={
            "name": Schema(
                ValueType.STRING,
                required=True,
                force_new=True,
                validate_func=validate_private_link_name,
            ),
            "location": azure.schema_location(),
            "resource_group_name": azure.schema_resource_group_name(),
            "auto_approval_subscription_ids": Schema(
                ValueType.SET,
                optional=True,
                elem=Schema(ValueType.STRING, validate_func=validate.guid),
            ),
            "visibility_subscription_ids": Schema(
                ValueType.SET,
                optional=True,
                elem=Schema(ValueType.STRING, validate_func=validate.guid),
            ),
            # Once created the primary configuration cannot change without
            # recreating the service.
            "nat_ip_configuration": Schema(
                ValueType.LIST,
                required=True,
                max_items=8,
                elem=Resource(schema={
                    "name": Schema(
                        ValueType.STRING,
                        required=True,
                        force_new=True,
                        validate_func=validate_private_link_name,
                    ),
                    "private_ip_address": Schema(
                        ValueType.STRING,
                        optional=True,
                        validate_func=validate.ipv4_address,
                    ),
                    # Only IPv4 is accepted by the API today
                    "private_ip_address_version": Schema(
                        ValueType.STRING,
                        optional=True,
                        default=IPV4,
                        validate_func=validate.string_in_slice([IPV4]),
                    ),
                    "subnet_id": Schema(
                        ValueType.STRING,
                        required=True,
                        validate_func=azure.validate_resource_id,
                    ),
                    "primary": Schema(ValueType.BOOL, required=True, force_new=True),
                }),
            ),
            "load_balancer_frontend_ip_configuration_ids": Schema(
                ValueType.SET,
                required=True,
                elem=Schema(ValueType.STRING, validate_func=azure.validate_resource_id),
            ),
            "alias": Schema(ValueType.STRING, computed=True),
            "network_interface_ids": Schema(
                ValueType.SET,
                computed=True,
                elem=Schema(ValueType.STRING, validate_func=azure.validate_resource_id),
            ),
            "tags": tags.schema(),
        },
    )


def create_update_private_link_service(d, meta) -> None:
    client = meta.client.network.private_link_services
    deadline = timeouts.for_create_update(d)

    name = d.get("name")
    resource_group = d.get("resource_group_name")
    description = f'Private Link Service "{name}" (Resource Group "{resource_group}")'

    if should_resources_be_imported(meta) and d.is_new_resource():
        check_for_existing(RESOURCE_TYPE, description, lambda: client.get(resource_group, name))

    from azure.mgmt.network import models

    parameters = models.PrivateLinkService(
        location=azure.normalize_location(d.get("location")),
        auto_approval=models.PrivateLinkServicePropertiesAutoApproval(
            subscriptions=expand_string_slice(d.get("auto_approval_subscription_ids")),
        ),
        visibility=models.PrivateLinkServicePropertiesVisibility(
            subscriptions=expand_string_slice(d.get("visibility_subscription_ids")),
        ),
        ip_configurations=expand_ip_configurations(d.get("nat_ip_configuration")),
        load_balancer_frontend_ip_configurations=expand_frontend_ip_configurations(
            d.get("load_balancer_frontend_ip_configuration_ids")
        ),
        tags=tags.expand(d.get("tags")),
    )

    logger.info(f"Creating/updating {description}...")
    try:
        poller = client.begin_create_or_update(resource_group, name, parameters)
    except HttpResponseError as e:
        logger.error(f"Failed to create {description}: {e}")
        raise ProviderError(f"Error creating {description}: {e}", RESOURCE_TYPE) from e

    try:
        wait_for_completion(poller, deadline)
    except HttpResponseError as e:
        raise ProviderError(f"Error waiting for creation of {description}: {e}", RESOURCE_TYPE) from e

    try:
        resp = client.get(resource_group, name)
    except HttpResponseError as e:
        raise ProviderError(f"Error retrieving {description}: {e}", RESOURCE_TYPE) from e
    if not getattr(resp, "id", None):
        raise ProviderError(f"API returns a nil/empty id on {description}", RESOURCE_TYPE)

    # The poller can finish while the service is still applying the new values
    logger.debug(f"Waiting for {description} to finish applying")
    state_conf = StateChangeConf(
        pending=["Pending", "Updating", "Creating"],
        target=["Succeeded"],
        refresh=private_link_service_wait_for_ready_refresh_func(client, resource_group, name),
        timeout=deadline.remaining(),
        min_timeout=15,
    )
    try:
        state_conf.wait_for_state()
    except ProviderError as e:
        raise ProviderError(f"Error waiting for {description} to complete: {e.message}", RESOURCE_TYPE) from e

    d.set_id(resp.id)
    logger.info(f"✓ {description} created/updated")

    read_private_link_service(d, meta)


def private_link_service_wait_for_ready_refresh_func(client: Any, resource_group: str, name: str):
    def refresh():
        try:
            res = client.get(resource_group, name)
        except HttpResponseError as e:
            raise ProviderError(
                f'Error issuing read request for Private Link Service "{name}" '
                f'(Resource Group "{resource_group}"): {e}'
            ) from e
        state = enum_value(getattr(res, "provisioning_state", None))
        return res, state or "Pending"

    return refresh


def read_private_link_service(d, meta) -> None:
    client = meta.client.network.private_link_services

    id = parse_private_link_service_id(d.id)
    resource_group = id.resource_group
    name = id.name

    try:
        resp = client.get(resource_group, name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ Private Link Service {d.id!r} does not exist - removing from state")
            d.set_id("")
            return
        raise ProviderError(
            f'Error reading Private Link Service "{name}" (Resource Group "{resource_group}"): {e}',
            RESOURCE_TYPE,
        ) from e

    d.set("name", resp.name)
    d.set("resource_group_name", resource_group)
    if resp.location:
        d.set("location", azure.normalize_location(resp.location))

    d.set("alias", resp.alias)
    d.set("auto_approval_subscription_ids", flatten_string_slice(_subscriptions(resp.auto_approval)))
    d.set("visibility_subscription_ids", flatten_string_slice(_subscriptions(resp.visibility)))
    d.set("nat_ip_configuration", flatten_ip_configurations(resp.ip_configurations))
    d.set("load_balancer_frontend_ip_configuration_ids", ids_of(resp.load_balancer_frontend_ip_configurations))
    d.set("network_interface_ids", ids_of(resp.network_interfaces))

    tags.flatten_and_set(d, resp.tags)


def delete_private_link_service(d, meta) -> None:
    client = meta.client.network.private_link_services
    deadline = timeouts.for_delete(d)

    id = parse_private_link_service_id(d.id)
    resource_group = id.resource_group
    name = id.name
    description = f'Private Link Service "{name}" (Resource Group "{resource_group}")'

    logger.info(f"Deleting {description}...")
    try:
        poller = client.begin_delete(resource_group, name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ {description} not found (already deleted)")
            return
        raise ProviderError(f"Error deleting {description}: {e}", RESOURCE_TYPE) from e

    try:
        wait_for_completion(poller, deadline)
    except HttpResponseError as e:
        if not was_not_found(e):
            raise ProviderError(f"Error waiting for deleting {description}: {e}", RESOURCE_TYPE) from e

    logger.info(f"✓ {description} deleted")


# ==========================================
# Expand / flatten
# ==========================================

def expand_ip_configurations(input: List[Dict[str, Any]]) -> Optional[List[Any]]:
    from azure.mgmt.network import models

    if not input:
        return None

    results = []
    for item in input:
        private_ip_address = item.get("private_ip_address") or ""
        result = models.PrivateLinkServiceIpConfiguration(
            name=item.get("name"),
            private_ip_address_version=item.get("private_ip_address_version") or IPV4,
            subnet=models.Subnet(id=item.get("subnet_id")),
            primary=bool(item.get("primary")),
        )
        if private_ip_address:
            result.private_ip_address = private_ip_address
            result.private_ip_allocation_method = "Static"
        else:
            result.private_ip_allocation_method = "Dynamic"
        results.append(result)

    return results


def expand_frontend_ip_configurations(ids: List[str]) -> Optional[List[Any]]:
    from azure.mgmt.network import models

    if not ids:
        return None
    return [models.FrontendIPConfiguration(id=id) for id in ids]


def flatten_ip_configurations(input: Optional[List[Any]]) -> List[Dict[str, Any]]:
    results = []
    for item in input or []:
        subnet = getattr(item, "subnet", None)
        results.append({
            "name": item.name or "",
            "private_ip_address": getattr(item, "private_ip_address", None) or "",
            "private_ip_address_version": enum_value(getattr(item, "private_ip_address_version", None)),
            "subnet_id": (subnet.id if subnet is not None else None) or "",
            "primary": bool(getattr(item, "primary", False)),
        })
    return results


def _subscriptions(block: Any) -> Optional[List[str]]:
    if block is None:
        return None
    return block.subscriptions
