"""
Acceptance tests for azurerm_private_link_service and the
azurerm_private_link_endpoint_connection data source.

The fixtures build the network a Private Link Service needs: a virtual
network whose subnet has private link service network policies disabled,
and a Standard internal load balancer fronted by that subnet.
"""

import pytest
from azure.mgmt.network import models

import azurerm.runner as runner


@pytest.fixture
def network(acc_meta, resource_group, location, ri):
    client = acc_meta.client.network

    vnet = client.virtual_networks.begin_create_or_update(resource_group, f"acctestvnet-{ri}", models.VirtualNetwork(
        location=location,
        address_space=models.AddressSpace(address_prefixes=["10.5.0.0/16"]),
        subnets=[
            models.Subnet(
                name=f"acctestsnet-{ri}",
                address_prefix="10.5.1.0/24",
                private_link_service_network_policies="Disabled",
                private_endpoint_network_policies="Disabled",
            ),
        ],
    )).result()
    subnet_id = vnet.subnets[0].id

    lb = client.load_balancers.begin_create_or_update(resource_group, f"acctestlb-{ri}", models.LoadBalancer(
        location=location,
        sku=models.LoadBalancerSku(name="Standard"),
        frontend_ip_configurations=[
            models.FrontendIPConfiguration(
                name=f"acctestlbfe-{ri}",
                subnet=models.Subnet(id=subnet_id),
                private_ip_allocation_method="Dynamic",
            ),
        ],
    )).result()

    return {"subnet_id": subnet_id, "frontend_id": lb.frontend_ip_configurations[0].id}


@pytest.fixture
def resource(provider):
    return provider.resource("azurerm_private_link_service")


@pytest.fixture
def config(network, resource_group, location, acc_meta, ri):
    return {
        "name": f"acctestpls-{ri}",
        "location": location,
        "resource_group_name": resource_group,
        "auto_approval_subscription_ids": [acc_meta.subscription_id],
        "visibility_subscription_ids": [acc_meta.subscription_id],
        "nat_ip_configuration": [
            {
                "name": "primaryIpConfiguration",
                "subnet_id": network["subnet_id"],
                "primary": True,
            },
        ],
        "load_balancer_frontend_ip_configuration_ids": [network["frontend_id"]],
    }


@pytest.mark.live
class TestAccPrivateLinkService:

    def test_basic(self, resource, config, acc_meta):
        state = runner.apply(resource, config, acc_meta)

        assert state["alias"]
        assert len(state["network_interface_ids"]) == 1
        assert runner.import_resource(resource, state["id"], acc_meta) == [state]

        runner.destroy(resource, state, acc_meta)
        assert runner.refresh(resource, state, acc_meta) is None

    def test_static_ip_and_tags_update(self, resource, config, acc_meta):
        config["nat_ip_configuration"][0]["private_ip_address"] = "10.5.1.30"
        state = runner.apply(resource, config, acc_meta)
        assert state["nat_ip_configuration"][0]["private_ip_address"] == "10.5.1.30"

        config["tags"] = {"env": "test"}
        state = runner.apply(resource, config, acc_meta, state=state)
        assert state["tags"] == {"env": "test"}

        runner.destroy(resource, state, acc_meta)

    def test_endpoint_connection(self, resource, config, network, acc_meta, provider, resource_group, location, ri):
        service = runner.apply(resource, config, acc_meta)
        endpoint_name = f"acctestpe-{ri}"
        try:
            acc_meta.client.network.private_endpoints.begin_create_or_update(resource_group, endpoint_name, models.PrivateEndpoint(
                location=location,
                subnet=models.Subnet(id=network["subnet_id"]),
                private_link_service_connections=[
                    models.PrivateLinkServiceConnection(
                        name=f"acctestconnection-{ri}",
                        private_link_service_id=service["id"],
                    ),
                ],
            )).result()

            data_source = provider.data_source("azurerm_private_link_endpoint_connection")
            state = runner.read_data_source(
                data_source, {"name": endpoint_name, "resource_group_name": resource_group}, acc_meta
            )

            connection = state["private_service_connection"][0]
            assert connection["status"] == "Approved"
            assert connection["private_ip_address"].startswith("10.5.1.")
        finally:
            acc_meta.client.network.private_endpoints.begin_delete(resource_group, endpoint_name).result()
            runner.destroy(resource, service, acc_meta)
