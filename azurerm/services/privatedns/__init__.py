"""
Private DNS resources.

Registers:
    - azurerm_private_dns_aaaa_record (resource)
"""

from azurerm.core.registry import ResourceRegistry
from .aaaa_record import resource_private_dns_aaaa_record

ResourceRegistry.register("azurerm_private_dns_aaaa_record", resource_private_dns_aaaa_record)
