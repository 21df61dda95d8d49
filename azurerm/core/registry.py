"""
Resource registry for type-name lookup.

This module implements the Registry pattern: every service package registers
its resources and data sources when it is imported, and the Provider looks
them up by orchestrator type name.

How Registration Works:
    Each service package (e.g., services/network/__init__.py) calls
    register() when the module loads:

        from azurerm.core.registry import ResourceRegistry
        from .private_link_service import resource_private_link_service
        ResourceRegistry.register("azurerm_private_link_service", resource_private_link_service)

    services/__init__.py imports every service package to trigger
    registration.
"""

from typing import Callable, Dict, TYPE_CHECKING

from .exceptions import ResourceNotRegisteredError

if TYPE_CHECKING:
    from .schema import Resource


ResourceFactory = Callable[[], "Resource"]


class ResourceRegistry:
    """
    Central registry of resource and data source factories.

    Class-level state is used because services register themselves at
    import time, before any Provider instance exists.

    Example Usage:
        ResourceRegistry.register("azurerm_dashboard", resource_dashboard)
        resource = ResourceRegistry.get("azurerm_dashboard")
    """

    _resources: Dict[str, ResourceFactory] = {}
    _data_sources: Dict[str, ResourceFactory] = {}

    @classmethod
    def _table(cls, data_source: bool) -> Dict[str, ResourceFactory]:
        return cls._data_sources if data_source else cls._resources

    @classmethod
    def register(cls, name: str, factory: ResourceFactory, data_source: bool = False) -> None:
        """
        Register a factory under a type name.

        Registering the same factory twice is idempotent; registering a
        different factory under a taken name is an error.

        Raises:
            ValueError: If name is already registered with a different factory
        """
        table = cls._table(data_source)
        if name in table:
            existing = table[name]
            if existing is not factory:
                raise ValueError(
                    f"Resource '{name}' is already registered with {existing.__name__}. "
                    f"Cannot re-register with {factory.__name__}."
                )
            return

        table[name] = factory

    @classmethod
    def get(cls, name: str, data_source: bool = False) -> "Resource":
        """
        Build a fresh Resource for the given type name.

        Raises:
            ResourceNotRegisteredError: If nothing is registered with that name
        """
        table = cls._table(data_source)
        if name not in table:
            raise ResourceNotRegisteredError(name, sorted(table.keys()))

        resource = table[name]()
        resource.type_name = name
        return resource

    @classmethod
    def list_resources(cls, data_source: bool = False) -> list[str]:
        """List registered type names, sorted alphabetically."""
        return sorted(cls._table(data_source).keys())

    @classmethod
    def is_registered(cls, name: str, data_source: bool = False) -> bool:
        return name in cls._table(data_source)

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registrations.

        This is primarily used for testing to reset state between tests.
        """
        cls._resources.clear()
        cls._data_sources.clear()
