from typing import Any

from azurerm.clients.options import ClientOptions


def build_client(options: ClientOptions) -> Any:
    """Build the network management client (private link services, endpoints, interfaces)."""
    from azure.mgmt.network import NetworkManagementClient

    return NetworkManagementClient(**options.client_kwargs())
