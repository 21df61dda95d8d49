"""
Tests for not-found detection and the "requires import" check.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from azurerm.core.exceptions import ImportAsExistsError, ProviderError
from azurerm.helpers.response import raw_json, was_not_found
from azurerm.helpers.tf import check_for_existing, should_resources_be_imported
from azurerm.helpers.utils import enum_value, expand_string_slice, flatten_string_slice, ids_of


class TestWasNotFound:

    def test_resource_not_found_error(self, not_found_error):
        assert was_not_found(not_found_error())

    def test_404_status(self, http_error):
        assert was_not_found(http_error(404))

    def test_other_status(self, http_error):
        assert not was_not_found(http_error(500))

    def test_raw_response(self):
        assert was_not_found(SimpleNamespace(status_code=404))
        assert was_not_found(SimpleNamespace(response=SimpleNamespace(status_code=404)))

    def test_none(self):
        assert not was_not_found(None)

    def test_raw_json_hook(self):
        pipeline_response = MagicMock()
        pipeline_response.http_response.json.return_value = {"id": "/d"}
        assert raw_json(pipeline_response, None, {}) == {"id": "/d"}


class TestCheckForExisting:

    def test_absent_resource_passes(self, not_found_error):
        get = MagicMock(side_effect=not_found_error())
        check_for_existing("azurerm_dashboard", 'Dashboard "d"', get)
        get.assert_called_once()

    def test_existing_resource_raises(self):
        get = MagicMock(return_value=SimpleNamespace(id="/subscriptions/x/resourceGroups/rg/providers/P/dashboards/d"))

        with pytest.raises(ImportAsExistsError) as exc_info:
            check_for_existing("azurerm_dashboard", 'Dashboard "d"', get)

        assert exc_info.value.resource_id.endswith("/dashboards/d")
        assert 'documentation for "azurerm_dashboard"' in str(exc_info.value)

    def test_existing_raw_json_raises(self):
        get = MagicMock(return_value={"id": "/subscriptions/x/resourceGroups/rg/providers/P/dashboards/d"})

        with pytest.raises(ImportAsExistsError):
            check_for_existing("azurerm_dashboard", 'Dashboard "d"', get)

    def test_lookup_failure_wrapped(self, http_error):
        error = http_error(403, "Forbidden")
        get = MagicMock(side_effect=error)

        with pytest.raises(ProviderError, match="Error checking for presence of existing") as exc_info:
            check_for_existing("azurerm_dashboard", 'Dashboard "d"', get)
        assert exc_info.value.__cause__ is error

    def test_feature_flag(self, mock_meta, strict_meta):
        assert not should_resources_be_imported(mock_meta)
        assert should_resources_be_imported(strict_meta)


class TestUtils:

    def test_string_slices(self):
        assert expand_string_slice(["a", None, 1]) == ["a", "1"]
        assert flatten_string_slice(None) == []
        assert flatten_string_slice(["a", None]) == ["a"]

    def test_ids_of(self):
        items = [SimpleNamespace(id="/a"), SimpleNamespace(id=None), SimpleNamespace(id="/b")]
        assert ids_of(items) == ["/a", "/b"]
        assert ids_of(None) == []

    def test_enum_value(self):
        assert enum_value(SimpleNamespace(value="Succeeded")) == "Succeeded"
        assert enum_value("IPv4") == "IPv4"
        assert enum_value(None) == ""
