"""
Core abstractions for the AzureRM provider.

This package provides the schema layer, the per-invocation state accessor,
the polling helpers and the configuration types shared by every resource.

Modules:
    schema: Resource and Schema definitions
    resource_data: ResourceData flat state accessor
    state: StateChangeConf polling and LRO deadline helpers
    timeouts: Per-operation timeouts and deadlines
    context: ProviderConfig and ProviderContext (handler "meta")
    registry: ResourceRegistry for type-name lookup
    config_loader: Configuration loading utilities
    exceptions: Custom exception types

Usage:
    from azurerm.core import Resource, Schema, ValueType
    from azurerm.core import ResourceRegistry
"""

from .schema import Resource, Schema, ValueType, import_state_passthrough
from .timeouts import ResourceTimeout
from .resource_data import ResourceData
from .context import Features, ProviderConfig, ProviderContext
from .registry import ResourceRegistry
from .exceptions import (
    ProviderError,
    ConfigurationError,
    SchemaError,
    ValidationError,
    ImportAsExistsError,
    ResourceIDError,
    ResourceNotRegisteredError,
)

__all__ = [
    # Schema
    "Resource",
    "Schema",
    "ValueType",
    "import_state_passthrough",
    "ResourceTimeout",
    "ResourceData",
    # Context
    "Features",
    "ProviderConfig",
    "ProviderContext",
    # Registry
    "ResourceRegistry",
    # Exceptions
    "ProviderError",
    "ConfigurationError",
    "SchemaError",
    "ValidationError",
    "ImportAsExistsError",
    "ResourceIDError",
    "ResourceNotRegisteredError",
]
