"""
Provider configuration and handler context.

Instead of reaching for globals, every resource handler receives a
ProviderContext ("meta") that carries the parsed configuration and the
initialized Azure SDK clients.

Lifecycle:
    1. ProviderConfig is loaded from config_credentials.json and ARM_* env vars
    2. Provider.configure() builds the ArmClient and wraps both in a ProviderContext
    3. The context is passed to every Create/Read/Update/Delete handler
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

import azurerm.constants as CONSTANTS

if TYPE_CHECKING:
    from azurerm.clients.client import ArmClient


@dataclass
class Features:
    """
    Behavioural feature flags.

    Attributes:
        resources_be_imported: When True, creating a resource that already
            exists fails with ImportAsExistsError instead of adopting it.
    """

    resources_be_imported: bool = False


@dataclass
class ProviderConfig:
    """
    Parsed provider configuration.

    Attributes:
        subscription_id: Azure subscription GUID (required)
        tenant_id: Azure AD tenant for service principal auth
        client_id: Service principal client ID
        client_secret: Service principal secret
        environment: Cloud environment name (public, usgovernment, china, german)
        location: Default region, used by acceptance tests
        skip_provider_registration: Skip resource provider registration checks
        features: Feature flags
        debug: Enable debug logging
    """

    subscription_id: str
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    environment: str = CONSTANTS.DEFAULT_ENVIRONMENT
    location: str = ""
    skip_provider_registration: bool = False
    features: Features = field(default_factory=Features)
    debug: bool = False

    @property
    def uses_service_principal(self) -> bool:
        return bool(self.client_id and self.client_secret and self.tenant_id)

    @property
    def resource_manager_endpoint(self) -> str:
        return CONSTANTS.ENVIRONMENTS[self.environment]["resource_manager"]

    @property
    def authority_host(self) -> str:
        return CONSTANTS.ENVIRONMENTS[self.environment]["authority_host"]


@dataclass
class ProviderContext:
    """
    Everything a resource handler needs besides its ResourceData.

    Attributes:
        config: Parsed ProviderConfig
        client: Initialized ArmClient with lazily built service clients
    """

    config: ProviderConfig
    client: Optional["ArmClient"] = None

    @property
    def features(self) -> Features:
        return self.config.features

    @property
    def subscription_id(self) -> str:
        return self.config.subscription_id
