"""
Acceptance Test Fixtures.

These tests create REAL Azure resources and incur costs. They only run when
ARM_ACC=1 is set and a subscription is configured through ARM_* variables
or config_credentials.json.

Usage:
    ARM_ACC=1 ARM_SUBSCRIPTION_ID=... pytest tests/acceptance -m live -v -s

Every test gets its own resource group, deleted again on teardown.
"""

import os
import random
import time
from dataclasses import replace

import pytest

import azurerm.constants as CONSTANTS
from azurerm.core.config_loader import load_provider_config
from azurerm.core.context import Features
from azurerm.core.exceptions import ConfigurationError
from azurerm.provider import Provider

DEFAULT_LOCATION = "westeurope"


@pytest.fixture(autouse=True)
def mock_sleep():
    """Live tests poll real operations, so time.sleep is left alone."""


def acc_rand_time_int() -> int:
    """Random suffix for resource names: a timestamp plus three random digits."""
    return int(time.strftime("%y%m%d%H%M%S")) * 1000 + random.randint(0, 999)


@pytest.fixture(scope="session")
def acc_config():
    if os.environ.get(CONSTANTS.ENV_ACCEPTANCE) != "1":
        pytest.skip(f"Acceptance tests skipped unless env '{CONSTANTS.ENV_ACCEPTANCE}' set to 1")
    try:
        return load_provider_config()
    except ConfigurationError as e:
        pytest.skip(f"Azure credentials not configured: {e}")


@pytest.fixture(scope="session")
def provider():
    return Provider()


@pytest.fixture(scope="session")
def acc_meta(acc_config, provider):
    """ProviderContext talking to the real subscription."""
    return provider.configure(acc_config)


@pytest.fixture
def strict_acc_meta(acc_config, acc_meta):
    """Same credentials, but existing resources must be imported."""
    config = replace(acc_config, features=Features(resources_be_imported=True))
    return Provider().configure(config, credential=acc_meta.client.credential)


@pytest.fixture(scope="session")
def location(acc_config):
    return acc_config.location or DEFAULT_LOCATION


@pytest.fixture
def ri():
    return acc_rand_time_int()


@pytest.fixture
def resource_group(acc_meta, location, ri):
    """Create a throwaway resource group and delete it after the test."""
    from azure.mgmt.resource.resources import ResourceManagementClient
    from azure.mgmt.resource.resources.models import ResourceGroup

    client = ResourceManagementClient(**acc_meta.client.options().client_kwargs())
    name = f"acctestRG-{ri}"

    print(f"\n[ACC] Creating resource group {name} in {location}")
    client.resource_groups.create_or_update(name, ResourceGroup(location=location))

    yield name

    print(f"\n[ACC] Deleting resource group {name}")
    client.resource_groups.begin_delete(name).result()
