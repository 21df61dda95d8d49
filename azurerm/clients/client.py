"""
Azure SDK client construction.

ArmClient owns the credential and builds each service's management client
on first use, so a handler that only touches the network API never imports
the other SDK packages.

SDK Clients:
    - network: NetworkManagementClient (private link services, endpoints, NICs)
    - privatedns: PrivateDnsManagementClient (record sets)
    - portal: Portal (dashboards)
    - advisor: AdvisorManagementClient (recommendations)
    - netapp: NetAppManagementClient (accounts)

Usage:
    client = ArmClient(config)
    client.network.private_link_services.get(...)
    client.clients["netapp"].accounts.get(...)
"""

import logging
from typing import Any, Callable, Dict, Optional

from azurerm.core.context import ProviderConfig
from azurerm.services.advisor.client import build_client as build_advisor_client
from azurerm.services.netapp.client import build_client as build_netapp_client
from azurerm.services.network.client import build_client as build_network_client
from azurerm.services.portal.client import build_client as build_portal_client
from azurerm.services.privatedns.client import build_client as build_privatedns_client
from .options import ClientOptions

logger = logging.getLogger(__name__)


_BUILDERS: Dict[str, Callable[[ClientOptions], Any]] = {
    "network": build_network_client,
    "privatedns": build_privatedns_client,
    "portal": build_portal_client,
    "advisor": build_advisor_client,
    "netapp": build_netapp_client,
}


class ArmClient:
    """
    Lazily constructed Azure SDK clients for one provider configuration.

    Attributes:
        config: The ProviderConfig the clients are built for
    """

    def __init__(self, config: ProviderConfig, credential: Optional[Any] = None):
        self.config = config
        self._credential = credential
        self._clients: Dict[str, Any] = {}

    @property
    def credential(self) -> Any:
        if self._credential is None:
            self._credential = self._get_credential()
        return self._credential

    def _get_credential(self) -> Any:
        """Get Azure credential for SDK clients."""
        from azure.identity import DefaultAzureCredential, ClientSecretCredential

        if self.config.uses_service_principal:
            logger.debug("Authenticating with service principal credentials")
            return ClientSecretCredential(
                tenant_id=self.config.tenant_id,
                client_id=self.config.client_id,
                client_secret=self.config.client_secret,
                authority=self.config.authority_host,
            )

        logger.debug("Authenticating with DefaultAzureCredential")
        return DefaultAzureCredential(authority=self.config.authority_host)

    def options(self) -> ClientOptions:
        endpoint = self.config.resource_manager_endpoint
        return ClientOptions(
            credential=self.credential,
            subscription_id=self.config.subscription_id,
            resource_manager_endpoint=endpoint,
            credential_scopes=[f"{endpoint}.default"],
        )

    def client(self, name: str) -> Any:
        """
        Get (building on first use) the SDK client for a service.

        Raises:
            KeyError: If the service name is unknown
        """
        if name not in self._clients:
            if name not in _BUILDERS:
                raise KeyError(f"Unknown service client '{name}'. Available: {sorted(_BUILDERS)}")
            logger.debug(f"Building {name} client")
            self._clients[name] = _BUILDERS[name](self.options())
        return self._clients[name]

    @property
    def clients(self) -> Dict[str, Any]:
        """Dictionary of every service client, built on access."""
        return {name: self.client(name) for name in _BUILDERS}

    @property
    def network(self) -> Any:
        return self.client("network")

    @property
    def privatedns(self) -> Any:
        return self.client("privatedns")

    @property
    def portal(self) -> Any:
        return self.client("portal")

    @property
    def advisor(self) -> Any:
        return self.client("advisor")

    @property
    def netapp(self) -> Any:
        return self.client("netapp")
