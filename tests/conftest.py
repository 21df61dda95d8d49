"""
Shared test fixtures.

Unit tests never talk to Azure: the ProviderContext handed to handlers
carries a MagicMock in place of the ArmClient, and SDK responses are plain
SimpleNamespace objects with the attributes the handlers read.
"""

import pytest
from unittest.mock import MagicMock

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from azurerm.core.context import Features, ProviderConfig, ProviderContext

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture(autouse=True)
def mock_sleep(monkeypatch):
    """Skip time.sleep calls to speed up tests."""
    monkeypatch.setattr("time.sleep", lambda x: None)


@pytest.fixture
def provider_config():
    return ProviderConfig(subscription_id=SUBSCRIPTION_ID, location="westeurope")


@pytest.fixture
def mock_meta(provider_config):
    """ProviderContext with a mocked ArmClient."""
    return ProviderContext(config=provider_config, client=MagicMock())


@pytest.fixture
def strict_meta():
    """ProviderContext that requires existing resources to be imported."""
    config = ProviderConfig(
        subscription_id=SUBSCRIPTION_ID,
        features=Features(resources_be_imported=True),
    )
    return ProviderContext(config=config, client=MagicMock())


@pytest.fixture
def not_found_error():
    """Factory for the SDK's 404 error."""
    def make(message="Resource not found"):
        return ResourceNotFoundError(message)
    return make


@pytest.fixture
def http_error():
    """Factory for a generic SDK error with a status code."""
    def make(status_code=500, message="Internal Server Error"):
        error = HttpResponseError(message)
        error.status_code = status_code
        return error
    return make
