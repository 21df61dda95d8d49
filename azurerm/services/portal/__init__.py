"""
Portal resources.

Registers:
    - azurerm_dashboard (resource)
"""

from azurerm.core.registry import ResourceRegistry
from .dashboard import resource_dashboard

ResourceRegistry.register("azurerm_dashboard", resource_dashboard)
