"""
Typed parsers for the network resource IDs used in this package.

Each parser checks the ID is well formed and that the expected segment is
present, and returns the resource group and name alongside the full parse.
"""

from dataclasses import dataclass

from azurerm.helpers.azure import ResourceID, parse_azure_resource_id


@dataclass
class NetworkResourceID:
    base: ResourceID
    name: str

    @property
    def resource_group(self) -> str:
        return self.base.resource_group


class PrivateLinkServiceResourceID(NetworkResourceID):
    pass


class PrivateEndpointResourceID(NetworkResourceID):
    pass


class NetworkInterfaceResourceID(NetworkResourceID):
    pass


class PointToSiteVPNGatewayResourceID(NetworkResourceID):
    pass


def _parse(input_id: str, segment: str, cls):
    parsed = parse_azure_resource_id(input_id)
    name = parsed.pop_segment(segment)
    parsed.validate_no_empty_segments(input_id)
    return cls(base=parsed, name=name)


def parse_private_link_service_id(input_id: str) -> PrivateLinkServiceResourceID:
    return _parse(input_id, "privateLinkServices", PrivateLinkServiceResourceID)


def parse_private_endpoint_id(input_id: str) -> PrivateEndpointResourceID:
    return _parse(input_id, "privateEndpoints", PrivateEndpointResourceID)


def parse_network_interface_id(input_id: str) -> NetworkInterfaceResourceID:
    return _parse(input_id, "networkInterfaces", NetworkInterfaceResourceID)


def parse_point_to_site_vpn_gateway_id(input_id: str) -> PointToSiteVPNGatewayResourceID:
    """
    Parse a Point-to-Site VPN Gateway ID.

    Raises:
        ResourceIDError: If the ID is malformed or has no p2sVpnGateways segment
    """
    return _parse(input_id, "p2sVpnGateways", PointToSiteVPNGatewayResourceID)
