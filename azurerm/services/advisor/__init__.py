"""
Advisor data sources.

Registers:
    - azurerm_advisor_recommendations (data source)
"""

from azurerm.core.registry import ResourceRegistry
from .recommendations import data_source_advisor_recommendations

ResourceRegistry.register(
    "azurerm_advisor_recommendations",
    data_source_advisor_recommendations,
    data_source=True,
)
