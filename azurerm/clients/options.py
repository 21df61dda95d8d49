from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class ClientOptions:
    """Settings shared by every service client builder."""

    credential: Any
    subscription_id: str
    resource_manager_endpoint: str
    credential_scopes: List[str] = field(default_factory=list)

    def client_kwargs(self) -> dict:
        return {
            "credential": self.credential,
            "subscription_id": self.subscription_id,
            "base_url": self.resource_manager_endpoint,
            "credential_scopes": self.credential_scopes,
        }
