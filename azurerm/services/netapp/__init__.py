"""
NetApp resources.

Registers:
    - azurerm_netapp_account (resource)
"""

from azurerm.core.registry import ResourceRegistry
from .account import resource_netapp_account

ResourceRegistry.register("azurerm_netapp_account", resource_netapp_account)
