"""
Tests for provider configuration loading.

Test Categories:
1. Credentials file values
2. Environment variable overrides
3. Fail-fast errors
"""

import json

import pytest

from azurerm.core.config_loader import load_provider_config
from azurerm.core.exceptions import ConfigurationError

SUB = "00000000-0000-0000-0000-000000000000"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a developer's config_credentials.json out of the tests."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({
        "azure_subscription_id": SUB,
        "azure_tenant_id": "tenant",
        "azure_client_id": "client",
        "azure_client_secret": "secret",
        "azure_region": "West Europe",
        "mode": "DEBUG",
    }))
    return path


class TestFromFile:

    def test_values_loaded(self, credentials_file):
        config = load_provider_config(credentials_file, env={})

        assert config.subscription_id == SUB
        assert config.tenant_id == "tenant"
        assert config.client_id == "client"
        assert config.client_secret == "secret"
        assert config.location == "West Europe"
        assert config.environment == "public"
        assert config.debug is True
        assert config.uses_service_principal

    def test_default_file_in_working_directory(self, tmp_path):
        (tmp_path / "config_credentials.json").write_text(json.dumps({"azure_subscription_id": SUB}))
        assert load_provider_config(env={}).subscription_id == SUB

    def test_config_file_from_env(self, credentials_file):
        config = load_provider_config(env={"ARM_CONFIG_FILE": str(credentials_file)})
        assert config.subscription_id == SUB

    def test_secret_not_in_repr(self, credentials_file):
        assert "secret" not in repr(load_provider_config(credentials_file, env={}))


class TestFromEnv:

    def test_env_only(self):
        config = load_provider_config(env={"ARM_SUBSCRIPTION_ID": SUB})
        assert config.subscription_id == SUB
        assert not config.uses_service_principal
        assert config.features.resources_be_imported is False

    def test_env_overrides_file(self, credentials_file):
        config = load_provider_config(credentials_file, env={
            "ARM_CLIENT_ID": "other-client",
            "ARM_ENVIRONMENT": "china",
        })
        assert config.client_id == "other-client"
        assert config.environment == "china"
        assert config.resource_manager_endpoint == "https://management.chinacloudapi.cn/"
        assert config.authority_host == "login.chinacloudapi.cn"

    def test_strict_mode(self):
        config = load_provider_config(env={"ARM_SUBSCRIPTION_ID": SUB, "ARM_PROVIDER_STRICT": "true"})
        assert config.features.resources_be_imported is True

    def test_skip_provider_registration(self):
        config = load_provider_config(env={
            "ARM_SUBSCRIPTION_ID": SUB,
            "ARM_SKIP_PROVIDER_REGISTRATION": "1",
        })
        assert config.skip_provider_registration is True


class TestErrors:

    def test_missing_subscription(self):
        with pytest.raises(ConfigurationError, match="subscription_id"):
            load_provider_config(env={})

    def test_unknown_environment(self):
        with pytest.raises(ConfigurationError, match="Unknown environment"):
            load_provider_config(env={"ARM_SUBSCRIPTION_ID": SUB, "ARM_ENVIRONMENT": "mars"})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_provider_config(path, env={})

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_provider_config(tmp_path / "missing.json", env={})
