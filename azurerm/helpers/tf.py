"""
Orchestrator-facing helpers used by Create handlers.
"""

import logging
from typing import Any, Callable

from azure.core.exceptions import HttpResponseError

from azurerm.core.context import ProviderContext
from azurerm.core.exceptions import ImportAsExistsError, ProviderError
from azurerm.helpers.response import was_not_found

logger = logging.getLogger(__name__)


def should_resources_be_imported(meta: ProviderContext) -> bool:
    """True when creating an existing resource must fail instead of adopting it."""
    return meta.features.resources_be_imported


def import_as_exists_error(resource_type: str, resource_id: str) -> ImportAsExistsError:
    return ImportAsExistsError(resource_type, resource_id)


def check_for_existing(
    resource_type: str,
    description: str,
    get_existing: Callable[[], Any],
) -> None:
    """
    Fail when a resource that is about to be created already exists.

    Args:
        resource_type: Orchestrator type name, used in the error
        description: Human-readable name for error messages,
            e.g. 'Private Link Service "pls" (Resource Group "rg")'
        get_existing: Calls the SDK ``get`` for the resource; returns a
            model or its raw JSON

    Raises:
        ImportAsExistsError: If the resource already exists
        ProviderError: If the lookup fails for another reason
    """
    try:
        existing = get_existing()
    except HttpResponseError as e:
        if was_not_found(e):
            return
        raise ProviderError(f"Error checking for presence of existing {description}: {e}") from e

    if isinstance(existing, dict):
        existing_id = existing.get("id")
    else:
        existing_id = getattr(existing, "id", None)
    if existing_id:
        logger.info(f"{description} already exists: {existing_id}")
        raise import_as_exists_error(resource_type, existing_id)

