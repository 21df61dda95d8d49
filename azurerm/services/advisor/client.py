from typing import Any

from azurerm.clients.options import ClientOptions


def build_client(options: ClientOptions) -> Any:
    """Build the Advisor client (recommendations)."""
    from azure.mgmt.advisor import AdvisorManagementClient

    return AdvisorManagementClient(**options.client_kwargs())
