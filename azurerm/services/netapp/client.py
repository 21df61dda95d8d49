from typing import Any

from azurerm.clients.options import ClientOptions


def build_client(options: ClientOptions) -> Any:
    """Build the NetApp client (accounts)."""
    from azure.mgmt.netapp import NetAppManagementClient

    return NetAppManagementClient(**options.client_kwargs())
