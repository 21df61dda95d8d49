"""
Configuration loading utilities.

Loading Order (later wins):
    1. config_credentials.json (optional file)
    2. ARM_* environment variables

Usage:
    from azurerm.core.config_loader import load_provider_config

    config = load_provider_config(Path("config_credentials.json"))
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import azurerm.constants as CONSTANTS
from .context import Features, ProviderConfig
from .exceptions import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes")


def load_json_file(file_path: Path, required: bool = True) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents as a dictionary.

    Args:
        file_path: Path to the JSON file
        required: If True, raise error when file is missing. If False, return empty dict.

    Raises:
        ConfigurationError: If file is missing (when required) or has invalid JSON
    """
    if not file_path.exists():
        if required:
            raise ConfigurationError(
                f"Required configuration file not found: {file_path.name}",
                config_file=str(file_path)
            )
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            config_file=str(file_path)
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a JSON object",
            config_file=str(file_path)
        )
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def load_provider_config(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ProviderConfig:
    """
    Load the provider configuration.

    Args:
        config_path: Optional path to config_credentials.json. When omitted,
            ARM_CONFIG_FILE is consulted; a missing default file is not an error.
        env: Environment mapping (defaults to os.environ)

    Returns:
        ProviderConfig with file values overridden by environment variables

    Raises:
        ConfigurationError: If the subscription ID is missing, the environment
            is unknown, or the file is invalid
    """
    env = os.environ if env is None else env

    required = True
    if config_path is None:
        if env.get(CONSTANTS.ENV_CONFIG_FILE):
            config_path = Path(env[CONSTANTS.ENV_CONFIG_FILE])
        else:
            config_path = Path(CONSTANTS.CONFIG_CREDENTIALS_FILE)
            required = False
    file_values = load_json_file(config_path, required=required)

    def pick(field_name: str, env_var: str, default: str = "") -> str:
        if env.get(env_var):
            return env[env_var]
        file_key = CONSTANTS.CREDENTIALS_KEYS[field_name]
        return str(file_values.get(file_key) or default)

    subscription_id = pick("subscription_id", CONSTANTS.ENV_SUBSCRIPTION_ID)
    # Fail-fast: a subscription is required for every API call
    if not subscription_id:
        raise ConfigurationError(
            "Missing required setting 'subscription_id'. Set ARM_SUBSCRIPTION_ID or "
            f"'azure_subscription_id' in {CONSTANTS.CONFIG_CREDENTIALS_FILE}.",
            config_file=str(config_path) if config_path else None
        )

    environment = pick("environment", CONSTANTS.ENV_ENVIRONMENT, CONSTANTS.DEFAULT_ENVIRONMENT).lower()
    if environment not in CONSTANTS.ENVIRONMENTS:
        raise ConfigurationError(
            f"Unknown environment '{environment}'. "
            f"Available: {sorted(CONSTANTS.ENVIRONMENTS.keys())}"
        )

    strict = env.get(CONSTANTS.ENV_PROVIDER_STRICT, file_values.get("resources_be_imported", False))
    skip_registration = env.get(
        CONSTANTS.ENV_SKIP_PROVIDER_REGISTRATION,
        file_values.get("skip_provider_registration", False),
    )

    return ProviderConfig(
        subscription_id=subscription_id,
        tenant_id=pick("tenant_id", CONSTANTS.ENV_TENANT_ID),
        client_id=pick("client_id", CONSTANTS.ENV_CLIENT_ID),
        client_secret=pick("client_secret", CONSTANTS.ENV_CLIENT_SECRET),
        environment=environment,
        location=pick("location", CONSTANTS.ENV_TEST_LOCATION),
        skip_provider_registration=_as_bool(skip_registration),
        features=Features(resources_be_imported=_as_bool(strict)),
        debug=str(file_values.get("mode", "")).upper() == CONSTANTS.DEBUG_MODE,
    )
