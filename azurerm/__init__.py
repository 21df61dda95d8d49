"""
AzureRM provider for Python.

Declarative resource and data source definitions for Azure Resource
Manager, with handlers that translate flat attribute state into Azure SDK
calls and back.

Packages:
    core: Schema, ResourceData, polling, configuration and errors
    clients: Azure SDK client construction
    helpers: ID parsing, tags, validators and not-found detection
    services: Resources and data sources grouped by Azure service
"""

__version__ = "0.1.0"
