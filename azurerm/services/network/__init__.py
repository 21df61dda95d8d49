"""
Network resources.

Registers:
    - azurerm_private_link_service (resource)
    - azurerm_private_link_endpoint_connection (data source)
"""

from azurerm.core.registry import ResourceRegistry
from .private_link_endpoint_connection import data_source_private_link_endpoint_connection
from .private_link_service import resource_private_link_service

ResourceRegistry.register("azurerm_private_link_service", resource_private_link_service)
ResourceRegistry.register(
    "azurerm_private_link_endpoint_connection",
    data_source_private_link_endpoint_connection,
    data_source=True,
)
