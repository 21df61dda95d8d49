"""
Unit tests for azurerm_private_dns_aaaa_record.

Test Categories:
    - ID parsing
    - Create/Update: record set body and import check
    - Read: IPv6 normalization and state removal
    - Delete
"""

import pytest
from types import SimpleNamespace

from azurerm.core.exceptions import ImportAsExistsError, ProviderError, ResourceIDError
from azurerm.services.privatedns.aaaa_record import (
    create_update_private_dns_aaaa_record,
    delete_private_dns_aaaa_record,
    parse_private_dns_aaaa_record_id,
    read_private_dns_aaaa_record,
    resource_private_dns_aaaa_record,
)

RECORD_ID = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg"
    "/providers/Microsoft.Network/privateDnsZones/contoso.internal/AAAA/www"
)


def record_response(addresses=("fd5d:70bc:930e:d008::7335", "fd5d:70bc:930e:d008:0000:0000:0000:7334")):
    return SimpleNamespace(
        id=RECORD_ID,
        ttl=300,
        fqdn="www.contoso.internal.",
        aaaa_records=[SimpleNamespace(ipv6_address=a) for a in addresses],
        metadata={"env": "test"},
    )


@pytest.fixture
def resource():
    return resource_private_dns_aaaa_record()


@pytest.fixture
def config():
    return {
        "name": "www",
        "resource_group_name": "rg",
        "zone_name": "contoso.internal",
        "records": ["fd5d:70bc:930e:d008:0000:0000:0000:7334", "fd5d:70bc:930e:d008::7335"],
        "ttl": 300,
        "tags": {"env": "test"},
    }


def record_sets(meta):
    return meta.client.privatedns.record_sets


class TestParseID:

    def test_parse(self):
        actual = parse_private_dns_aaaa_record_id(RECORD_ID)
        assert (actual.resource_group, actual.zone_name, actual.name) == ("rg", "contoso.internal", "www")

    def test_wrong_record_type(self):
        with pytest.raises(ResourceIDError, match="AAAA"):
            parse_private_dns_aaaa_record_id(RECORD_ID.replace("/AAAA/", "/A/"))


class TestCreateUpdate:

    def test_create(self, resource, config, mock_meta):
        record_sets(mock_meta).get.return_value = record_response()
        d = resource.data(config=config)

        create_update_private_dns_aaaa_record(d, mock_meta)

        args = record_sets(mock_meta).create_or_update.call_args.args
        assert args[:4] == ("rg", "contoso.internal", "AAAA", "www")
        record_set = args[4]
        assert record_set.ttl == 300
        assert [r.ipv6_address for r in record_set.aaaa_records] == [
            "fd5d:70bc:930e:d008::7334",
            "fd5d:70bc:930e:d008::7335",
        ]
        assert record_set.metadata == {"env": "test"}
        assert d.id == RECORD_ID
        assert d.get("fqdn") == "www.contoso.internal."

    def test_requires_import(self, resource, config, strict_meta):
        record_sets(strict_meta).get.return_value = record_response()
        d = resource.data(config=config)

        with pytest.raises(ImportAsExistsError):
            create_update_private_dns_aaaa_record(d, strict_meta)
        record_sets(strict_meta).create_or_update.assert_not_called()

    def test_missing_id(self, resource, config, mock_meta):
        record_sets(mock_meta).get.return_value = SimpleNamespace(id=None)
        d = resource.data(config=config)

        with pytest.raises(ProviderError, match="Cannot read"):
            create_update_private_dns_aaaa_record(d, mock_meta)


class TestRead:

    def test_read_normalizes_addresses(self, resource, mock_meta):
        """Equivalent IPv6 spellings collapse to the compressed form."""
        record_sets(mock_meta).get.return_value = record_response()
        d = resource.data(state={"id": RECORD_ID})

        read_private_dns_aaaa_record(d, mock_meta)

        state = d.state()
        assert state["records"] == ["fd5d:70bc:930e:d008::7334", "fd5d:70bc:930e:d008::7335"]
        assert state["zone_name"] == "contoso.internal"
        assert state["ttl"] == 300
        assert state["tags"] == {"env": "test"}

    def test_read_not_found(self, resource, mock_meta, not_found_error):
        record_sets(mock_meta).get.side_effect = not_found_error()
        d = resource.data(state={"id": RECORD_ID})

        read_private_dns_aaaa_record(d, mock_meta)

        assert d.id == ""


class TestDelete:

    def test_delete(self, resource, mock_meta):
        d = resource.data(state={"id": RECORD_ID})

        delete_private_dns_aaaa_record(d, mock_meta)

        record_sets(mock_meta).delete.assert_called_once_with("rg", "contoso.internal", "AAAA", "www")

    def test_delete_not_found(self, resource, mock_meta, not_found_error):
        record_sets(mock_meta).delete.side_effect = not_found_error()
        delete_private_dns_aaaa_record(resource.data(state={"id": RECORD_ID}), mock_meta)

    def test_delete_error(self, resource, mock_meta, http_error):
        record_sets(mock_meta).delete.side_effect = http_error(500)
        with pytest.raises(ProviderError, match="Error deleting"):
            delete_private_dns_aaaa_record(resource.data(state={"id": RECORD_ID}), mock_meta)
