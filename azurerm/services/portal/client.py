from typing import Any

from azurerm.clients.options import ClientOptions


def build_client(options: ClientOptions) -> Any:
    """Build the portal client (shared dashboards)."""
    from azure.mgmt.portal import Portal

    return Portal(**options.client_kwargs())
