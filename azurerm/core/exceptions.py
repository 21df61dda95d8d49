"""
Custom exceptions for the AzureRM provider.

This module defines a hierarchy of exceptions used by the schema layer,
the resource handlers and the polling helpers, so that callers can tell a
bad configuration apart from a failed API call.

Exception Hierarchy:
    ProviderError (base)
    ├── ConfigurationError - Invalid or missing provider configuration
    ├── SchemaError - Programming error in a schema definition or state write
    ├── ValidationError - User configuration failed validation
    ├── ImportAsExistsError - New resource already exists remotely
    ├── ResourceIDError - Malformed Azure Resource ID
    ├── ResourceNotRegisteredError - Unknown resource type requested
    └── StateWaitError - Polling for a terminal state failed
        ├── WaitTimeoutError - Timed out waiting for the target state
        ├── UnexpectedStateError - Refresh returned an unknown state
        └── NotFoundError - Resource vanished while waiting
"""

from typing import Iterable, Optional


class ProviderError(Exception):
    """
    Base exception for all provider-related errors.

    Attributes:
        message: Human-readable error description
        resource_type: Optional resource type where the error occurred
    """

    def __init__(self, message: str, resource_type: Optional[str] = None):
        self.message = message
        self.resource_type = resource_type

        if resource_type:
            full_message = f"{message} [resource={resource_type}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(ProviderError):
    """
    Raised when the provider configuration is invalid or incomplete.

    This typically occurs when:
    - ARM_SUBSCRIPTION_ID is neither set nor present in the credentials file
    - The credentials file has invalid JSON
    - An unknown cloud environment is requested
    """

    def __init__(self, message: str, config_file: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message)


class SchemaError(ProviderError):
    """Raised for internally inconsistent schemas or writes to unknown keys."""


class ValidationError(ProviderError):
    """
    Raised when a user configuration fails schema validation.

    Attributes:
        errors: Every validation message collected for the configuration
    """

    def __init__(self, resource_type: str, errors: Iterable[str]):
        self.errors = list(errors)
        message = "Invalid configuration:\n  - " + "\n  - ".join(self.errors)
        super().__init__(message, resource_type=resource_type)


class ImportAsExistsError(ProviderError):
    """
    Raised when a resource about to be created already exists.

    The resource must be imported into state before it can be managed.
    """

    def __init__(self, resource_type: str, resource_id: str):
        self.resource_id = resource_id
        message = (
            f'A resource with the ID "{resource_id}" already exists - to be managed via '
            f"Terraform this resource needs to be imported into the State. Please see the "
            f'resource documentation for "{resource_type}" for more information.'
        )
        super().__init__(message)


class ResourceIDError(ProviderError):
    """Raised when an Azure Resource ID cannot be parsed."""


class ResourceNotRegisteredError(ProviderError):
    """
    Raised when an unknown resource type is requested.

    Example:
        >>> ResourceRegistry.get("azurerm_unknown")
        ResourceNotRegisteredError: Resource 'azurerm_unknown' not found. Available: [...]
    """

    def __init__(self, type_name: str, available: list[str]):
        self.type_name = type_name
        self.available = available
        message = f"Resource '{type_name}' not found. Available: {available}"
        super().__init__(message)


class StateWaitError(ProviderError):
    """Base class for failures while waiting on a state transition."""


class WaitTimeoutError(StateWaitError):
    """
    Raised when the target state is not reached before the timeout.

    Attributes:
        last_state: The last state observed by the refresh function
        expected: The target states that were being waited for
        timeout: Timeout in seconds
    """

    def __init__(self, last_state: Optional[str], expected: list[str], timeout: float):
        self.last_state = last_state
        self.expected = expected
        self.timeout = timeout
        message = (
            f"timeout while waiting for state to become '{', '.join(expected)}' "
            f"(last state: '{last_state}', timeout: {timeout:.0f}s)"
        )
        super().__init__(message)


class UnexpectedStateError(StateWaitError):
    """Raised when the refresh function reports a state outside pending/target."""

    def __init__(self, state: str, expected: list[str]):
        self.state = state
        self.expected = expected
        super().__init__(f"unexpected state '{state}', wanted target '{', '.join(expected)}'")


class NotFoundError(StateWaitError):
    """Raised when the resource is not found for too many consecutive refreshes."""

    def __init__(self, retries: int, last_state: Optional[str] = None):
        self.retries = retries
        self.last_state = last_state
        super().__init__(f"couldn't find resource ({retries} retries)")
