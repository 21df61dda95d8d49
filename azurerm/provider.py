"""
Provider entry point.

The Provider exposes every registered resource and data source by type name
and builds the ProviderContext ("meta") handed to their handlers.

Usage:
    from azurerm.provider import Provider

    provider = Provider()
    meta = provider.configure()
    resource = provider.resource("azurerm_private_link_service")
"""

import logging
from typing import Any, Dict, Optional

import azurerm.services  # noqa: F401  (registers every resource)
from azurerm.clients.client import ArmClient
from azurerm.core.config_loader import load_provider_config
from azurerm.core.context import ProviderConfig, ProviderContext
from azurerm.core.registry import ResourceRegistry
from azurerm.core.schema import Resource
from azurerm.logger import configure_logger_from_config

logger = logging.getLogger(__name__)


class Provider:
    """
    The AzureRM provider: a catalogue of resources plus its configuration.
    """

    @property
    def resources_map(self) -> Dict[str, Resource]:
        return {name: ResourceRegistry.get(name) for name in ResourceRegistry.list_resources()}

    @property
    def data_sources_map(self) -> Dict[str, Resource]:
        return {
            name: ResourceRegistry.get(name, data_source=True)
            for name in ResourceRegistry.list_resources(data_source=True)
        }

    def resource(self, type_name: str) -> Resource:
        """
        Raises:
            ResourceNotRegisteredError: If no resource has that type name
        """
        return ResourceRegistry.get(type_name)

    def data_source(self, type_name: str) -> Resource:
        """
        Raises:
            ResourceNotRegisteredError: If no data source has that type name
        """
        return ResourceRegistry.get(type_name, data_source=True)

    def internal_validate(self) -> None:
        """
        Check every resource and data source definition.

        Raises:
            SchemaError: On the first inconsistent definition
        """
        for resource in self.resources_map.values():
            resource.internal_validate()
        for data_source in self.data_sources_map.values():
            data_source.internal_validate()

    def configure(
        self,
        config: Optional[ProviderConfig] = None,
        credential: Optional[Any] = None,
    ) -> ProviderContext:
        """
        Build the handler context.

        Args:
            config: Provider configuration; loaded from config_credentials.json
                and ARM_* environment variables when omitted
            credential: Optional pre-built Azure credential (tests, notebooks)

        Raises:
            ConfigurationError: If no valid configuration can be loaded
        """
        if config is None:
            config = load_provider_config()

        configure_logger_from_config(config)
        logger.debug(
            f"Configuring provider (subscription: {config.subscription_id}, "
            f"environment: {config.environment})"
        )

        return ProviderContext(config=config, client=ArmClient(config, credential=credential))
