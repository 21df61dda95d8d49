"""
Resource: azurerm_netapp_account

Manages an Azure NetApp Files account, the top-level container for
capacity pools and volumes.
"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from azure.core.exceptions import HttpResponseError

from azurerm.core import timeouts
from azurerm.core.exceptions import ProviderError
from azurerm.core.schema import Resource, Schema, ValueType, import_state_passthrough
from azurerm.core.state import wait_for_completion
from azurerm.core.timeouts import ResourceTimeout
from azurerm.helpers import azure, tags
from azurerm.helpers.response import was_not_found
from azurerm.helpers.tf import check_for_existing, should_resources_be_imported

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_netapp_account"

_ACCOUNT_NAME = re.compile(r"^[-_\da-zA-Z]{3,128}$")


def validate_netapp_account_name(value: Any, key: str):
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if not _ACCOUNT_NAME.match(value):
        return [], [
            f"{key} must be between 3 and 128 characters in length and contain only "
            f"letters, numbers, underscores and hyphens: {value!r}"
        ]
    return [], []


@dataclass
class NetAppAccountID:
    resource_group: str
    name: str


def parse_netapp_account_id(input_id: str) -> NetAppAccountID:
    parsed = azure.parse_azure_resource_id(input_id)
    name = parsed.pop_segment("netAppAccounts")
    parsed.validate_no_empty_segments(input_id)
    return NetAppAccountID(parsed.resource_group, name)


def resource_netapp_account() -> Resource:
    return Resource(
        type_name=RESOURCE_TYPE,
        create=create_update_netapp_account,
        read=read_netapp_account,
        update=create_update_netapp_account,
        delete=delete_netapp_account,
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
                validate_func=validate_netapp_account_name,
            ),
            "resource_group_name": azure.schema_resource_group_name(),
            "location": azure.schema_location(),
            "tags": tags.schema(),
        },
    )


def create_update_netapp_account(d, meta) -> None:
    client = meta.client.netapp.accounts
    deadline = timeouts.for_create_update(d)

    name = d.get("name")
    resource_group = d.get("resource_group_name")
    description = f'NetApp Account "{name}" (Resource Group "{resource_group}")'

    if should_resources_be_imported(meta) and d.is_new_resource():
        check_for_existing(RESOURCE_TYPE, description, lambda: client.get(resource_group, name))

    from azure.mgmt.netapp.models import NetAppAccount

    body = NetAppAccount(
        location=azure.normalize_location(d.get("location")),
        tags=tags.expand(d.get("tags")),
    )

    logger.info(f"Creating/updating {description}...")
    try:
        poller = client.begin_create_or_update(resource_group, name, body)
        wait_for_completion(poller, deadline)
    except HttpResponseError as e:
        logger.error(f"Failed to create {description}: {e}")
        raise ProviderError(f"Error creating/updating {description}: {e}", RESOURCE_TYPE) from e

    try:
        resp = client.get(resource_group, name)
    except HttpResponseError as e:
        raise ProviderError(f"Error retrieving {description}: {e}", RESOURCE_TYPE) from e
    if not getattr(resp, "id", None):
        raise ProviderError(f"Cannot read {description} ID", RESOURCE_TYPE)

    d.set_id(resp.id)
    logger.info(f"✓ {description} created/updated")

    read_netapp_account(d, meta)


def read_netapp_account(d, meta) -> None:
    client = meta.client.netapp.accounts

    id = parse_netapp_account_id(d.id)

    try:
        resp = client.get(id.resource_group, id.name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ NetApp Account {d.id!r} does not exist - removing from state")
            d.set_id("")
            return
        raise ProviderError(
            f'Error reading NetApp Account "{id.name}" (Resource Group "{id.resource_group}"): {e}',
            RESOURCE_TYPE,
        ) from e

    d.set("name", id.name)
    d.set("resource_group_name", id.resource_group)
    if resp.location:
        d.set("location", azure.normalize_location(resp.location))

    tags.flatten_and_set(d, resp.tags)


def delete_netapp_account(d, meta) -> None:
    client = meta.client.netapp.accounts
    deadline = timeouts.for_delete(d)

    id = parse_netapp_account_id(d.id)
    description = f'NetApp Account "{id.name}" (Resource Group "{id.resource_group}")'

    logger.info(f"Deleting {description}...")
    try:
        poller = client.begin_delete(id.resource_group, id.name)
        wait_for_completion(poller, deadline)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ {description} not found (already deleted)")
            return
        raise ProviderError(f"Error deleting {description}: {e}", RESOURCE_TYPE) from e

    logger.info(f"✓ {description} deleted")
