"""
Drive a single resource handler against a single ResourceData.

This is not a plan engine: it takes a configuration and/or a prior state,
runs validation and the cross-attribute check, calls the matching handler
and returns the resulting flat state (None once the resource is gone).

Sequence:
    validate -> customize_diff -> create / update / read / delete
"""

import logging
from typing import Any, Dict, List, Optional

from azurerm.core.context import ProviderContext
from azurerm.core.exceptions import ProviderError, SchemaError, ValidationError
from azurerm.core.resource_data import ResourceData
from azurerm.core.schema import Resource

logger = logging.getLogger(__name__)

State = Optional[Dict[str, Any]]


def _validate(resource: Resource, config: Dict[str, Any]) -> None:
    errors = resource.validate(config)
    if errors:
        raise ValidationError(resource.type_name, errors)


def _replacement_keys(resource: Resource, d: ResourceData) -> List[str]:
    return [
        key for key, s in resource.schema.items()
        if s.force_new and d.has_change(key)
    ]


def apply(resource: Resource, config: Dict[str, Any], meta: ProviderContext, state: State = None) -> State:
    """
    Create the resource when there is no prior state, update it otherwise.

    Raises:
        ValidationError: If the configuration is invalid, or if an update
            would change an attribute that forces a new resource
    """
    if resource.is_data_source:
        raise SchemaError(f"{resource.type_name} is a data source and cannot be applied")

    _validate(resource, config)
    d = resource.data(config=config, state=state)

    if resource.customize_diff is not None:
        resource.customize_diff(d, meta)

    if d.is_new_resource():
        logger.info(f"[{resource.type_name}] Creating...")
        resource.create(d, meta)
        return d.state()

    replaced = _replacement_keys(resource, d)
    if replaced:
        raise ValidationError(
            resource.type_name,
            [f'"{key}": changing this attribute forces a new resource; destroy and re-create it' for key in replaced],
        )

    logger.info(f"[{resource.type_name}] Updating {d.id}...")
    if resource.update is not None:
        resource.update(d, meta)
    else:
        resource.read(d, meta)
    return d.state()


def refresh(resource: Resource, state: Dict[str, Any], meta: ProviderContext) -> State:
    """Read the remote object into state; None when it no longer exists."""
    d = resource.data(state=state)
    if not d.id:
        raise ProviderError("Cannot refresh a resource without an ID", resource.type_name)
    resource.read(d, meta)
    if not d.id:
        logger.info(f"[{resource.type_name}] ✗ Resource is gone; removed from state")
    return d.state()


def destroy(resource: Resource, state: Dict[str, Any], meta: ProviderContext) -> None:
    d = resource.data(state=state)
    if not d.id:
        raise ProviderError("Cannot destroy a resource without an ID", resource.type_name)
    logger.info(f"[{resource.type_name}] Destroying {d.id}...")
    resource.delete(d, meta)
    d.set_id("")


def import_resource(resource: Resource, resource_id: str, meta: ProviderContext) -> List[Dict[str, Any]]:
    """
    Import an existing Azure object by ID.

    Raises:
        ProviderError: If the object does not exist
        SchemaError: If the resource does not support import
    """
    states = []
    for d in resource.import_state(resource_id, meta):
        resource.read(d, meta)
        if not d.id:
            raise ProviderError(
                f"Cannot import non-existent remote object {resource_id!r}",
                resource.type_name,
            )
        states.append(d.state())
    logger.info(f"[{resource.type_name}] ✓ Imported {resource_id}")
    return states


def read_data_source(resource: Resource, config: Dict[str, Any], meta: ProviderContext) -> State:
    _validate(resource, config)
    d = resource.data(config=config)
    resource.read(d, meta)
    return d.state()
