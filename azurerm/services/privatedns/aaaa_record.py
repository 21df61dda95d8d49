"""
Resource: azurerm_private_dns_aaaa_record

Manages an AAAA record set inside a Private DNS Zone. Record sets are not
long-running operations, so create/update and delete return immediately.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, List, Optional

from azure.core.exceptions import HttpResponseError

from azurerm.core.exceptions import ProviderError
from azurerm.core.schema import Resource, Schema, ValueType, import_state_passthrough
from azurerm.core.timeouts import ResourceTimeout
from azurerm.helpers import azure, tags, validate
from azurerm.helpers.response import was_not_found
from azurerm.helpers.tf import check_for_existing, should_resources_be_imported

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_private_dns_aaaa_record"
RECORD_TYPE = "AAAA"


@dataclass
class PrivateDnsAaaaRecordID:
    resource_group: str
    zone_name: str
    name: str


def parse_private_dns_aaaa_record_id(input_id: str) -> PrivateDnsAaaaRecordID:
    """
    Raises:
        ResourceIDError: If the ID is malformed or misses the zone or record segment
    """
    parsed = azure.parse_azure_resource_id(input_id)
    zone_name = parsed.pop_segment("privateDnsZones")
    name = parsed.pop_segment(RECORD_TYPE)
    parsed.validate_no_empty_segments(input_id)
    return PrivateDnsAaaaRecordID(parsed.resource_group, zone_name, name)


def resource_private_dns_aaaa_record() -> Resource:
    return Resource(
        type_name=RESOURCE_TYPE,
        create=create_update_private_dns_aaaa_record,
        read=read_private_dns_aaaa_record,
        update=create_update_private_dns_aaaa_record,
        delete=delete_private_dns_aaaa_record,
        importer=import_state_passthrough,
        timeouts=ResourceTimeout(
            create=timedelta(minutes=30),
            read=timedelta(minutes=5),
            update=timedelta(minutes=30),
            delete=timedelta(minutes=30),
        ),
        schema={
            "name": Schema(ValueType.STRING, required=True, force_new=True),
            "resource_group_name": azure.schema_resource_group_name(),
            "zone_name": Schema(ValueType.STRING, required=True, force_new=True),
            "records": Schema(
                ValueType.SET,
                required=True,
                elem=Schema(
                    ValueType.STRING,
                    validate_func=validate.ipv6_address,
                    state_func=validate.normalize_ipv6,
                ),
            ),
            "ttl": Schema(
                ValueType.INT,
                required=True,
                validate_func=validate.int_between(1, 2147483647),
            ),
            "fqdn": Schema(ValueType.STRING, computed=True),
            "tags": tags.schema(),
        },
    )


def create_update_private_dns_aaaa_record(d, meta) -> None:
    client = meta.client.privatedns.record_sets

    name = d.get("name")
    resource_group = d.get("resource_group_name")
    zone_name = d.get("zone_name")
    description = f'Private DNS AAAA Record "{name}" (Zone "{zone_name}" / Resource Group "{resource_group}")'

    if should_resources_be_imported(meta) and d.is_new_resource():
        check_for_existing(
            RESOURCE_TYPE,
            description,
            lambda: client.get(resource_group, zone_name, RECORD_TYPE, name),
        )

    from azure.mgmt.privatedns.models import RecordSet

    parameters = RecordSet(
        ttl=d.get("ttl"),
        aaaa_records=expand_aaaa_records(d.get("records")),
        metadata=tags.expand(d.get("tags")),
    )

    logger.info(f"Creating/updating {description}...")
    try:
        client.create_or_update(resource_group, zone_name, RECORD_TYPE, name, parameters)
    except HttpResponseError as e:
        logger.error(f"Failed to create {description}: {e}")
        raise ProviderError(f"Error creating/updating {description}: {e}", RESOURCE_TYPE) from e

    try:
        resp = client.get(resource_group, zone_name, RECORD_TYPE, name)
    except HttpResponseError as e:
        raise ProviderError(f"Error retrieving {description}: {e}", RESOURCE_TYPE) from e
    if not getattr(resp, "id", None):
        raise ProviderError(f"Cannot read {description} ID", RESOURCE_TYPE)

    d.set_id(resp.id)
    logger.info(f"✓ {description} created/updated")

    read_private_dns_aaaa_record(d, meta)


def read_private_dns_aaaa_record(d, meta) -> None:
    client = meta.client.privatedns.record_sets

    id = parse_private_dns_aaaa_record_id(d.id)

    try:
        resp = client.get(id.resource_group, id.zone_name, RECORD_TYPE, id.name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ Private DNS AAAA Record {d.id!r} does not exist - removing from state")
            d.set_id("")
            return
        raise ProviderError(
            f'Error retrieving Private DNS AAAA Record "{id.name}" '
            f'(Zone "{id.zone_name}" / Resource Group "{id.resource_group}"): {e}',
            RESOURCE_TYPE,
        ) from e

    d.set("name", id.name)
    d.set("resource_group_name", id.resource_group)
    d.set("zone_name", id.zone_name)
    d.set("ttl", resp.ttl)
    d.set("fqdn", resp.fqdn)
    d.set("records", flatten_aaaa_records(resp.aaaa_records))

    tags.flatten_and_set(d, resp.metadata)


def delete_private_dns_aaaa_record(d, meta) -> None:
    client = meta.client.privatedns.record_sets

    id = parse_private_dns_aaaa_record_id(d.id)
    description = (
        f'Private DNS AAAA Record "{id.name}" '
        f'(Zone "{id.zone_name}" / Resource Group "{id.resource_group}")'
    )

    logger.info(f"Deleting {description}...")
    try:
        client.delete(id.resource_group, id.zone_name, RECORD_TYPE, id.name)
    except HttpResponseError as e:
        if was_not_found(e):
            logger.info(f"✗ {description} not found (already deleted)")
            return
        raise ProviderError(f"Error deleting {description}: {e}", RESOURCE_TYPE) from e

    logger.info(f"✓ {description} deleted")


def expand_aaaa_records(records: List[str]) -> List[Any]:
    from azure.mgmt.privatedns.models import AaaaRecord

    return [AaaaRecord(ipv6_address=record) for record in records or []]


def flatten_aaaa_records(records: Optional[List[Any]]) -> List[str]:
    return [r.ipv6_address for r in records or [] if getattr(r, "ipv6_address", None)]
