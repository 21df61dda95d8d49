from typing import Any

from azurerm.clients.options import ClientOptions


def build_client(options: ClientOptions) -> Any:
    """Build the private DNS client (record sets)."""
    from azure.mgmt.privatedns import PrivateDnsManagementClient

    return PrivateDnsManagementClient(**options.client_kwargs())
