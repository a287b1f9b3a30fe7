"""Tests for network selection."""

from unittest.mock import Mock, patch

import pytest

from ecsk.core.errors import NoResourceError
from ecsk.features.network.network import NetworkService
from ecsk.features.network.ui import NetworkUI


@pytest.fixture
def vpc_id(ec2_client):
    vpc = ec2_client.create_vpc(CidrBlock="10.10.0.0/16")["Vpc"]
    ec2_client.create_tags(Resources=[vpc["VpcId"]], Tags=[{"Key": "Name", "Value": "ecsk-test"}])
    subnet = ec2_client.create_subnet(VpcId=vpc["VpcId"], CidrBlock="10.10.1.0/24")["Subnet"]
    ec2_client.create_tags(Resources=[subnet["SubnetId"]], Tags=[{"Key": "Name", "Value": "private-a"}])
    ec2_client.create_subnet(VpcId=vpc["VpcId"], CidrBlock="10.10.2.0/24")
    ec2_client.create_security_group(GroupName="web", Description="d" * 40, VpcId=vpc["VpcId"])
    return vpc["VpcId"]


def test_get_subnets_filtered_by_vpc(ec2_client, vpc_id):
    subnets = NetworkService(ec2_client).get_subnets(vpc_id)

    assert len(subnets) == 2
    assert {subnet["VpcId"] for subnet in subnets} == {vpc_id}


@patch("ecsk.core.base.select_one")
def test_ask_vpc(mock_select, ec2_client, vpc_id):
    mock_select.return_value = vpc_id

    assert NetworkUI(NetworkService(ec2_client)).ask_vpc(can_go_back=True) == vpc_id

    choices = mock_select.call_args[0][1]
    ours = next(choice for choice in choices if choice["value"] == vpc_id)
    assert ours["name"].startswith(f"{vpc_id} | 10.10.0.0/16")
    assert ours["name"].endswith("ecsk-test")


@patch("ecsk.core.base.select_many")
def test_ask_subnets(mock_select_many, ec2_client, vpc_id):
    mock_select_many.return_value = []

    assert NetworkUI(NetworkService(ec2_client)).ask_subnets(vpc_id) == []

    names = [choice["name"] for choice in mock_select_many.call_args[0][1]]
    assert len(names) == 2
    assert any(name.endswith("private-a") for name in names)
    assert any(name.endswith("-") for name in names)


@patch("ecsk.core.base.select_many")
def test_ask_security_groups_truncates_description(mock_select_many, ec2_client, vpc_id):
    mock_select_many.return_value = ["sg-1"]

    assert NetworkUI(NetworkService(ec2_client)).ask_security_groups(vpc_id) == ["sg-1"]

    names = [choice["name"] for choice in mock_select_many.call_args[0][1]]
    web = next(name for name in names if " | web " in name)
    assert "d" * 30 + "..." in web


@pytest.mark.parametrize(
    ("method", "args", "message"),
    [
        ("ask_vpc", (), "No VPC exists."),
        ("ask_subnets", ("vpc-1",), "No Subnet exists."),
        ("ask_security_groups", ("vpc-1",), "No Security Group exists."),
    ],
)
@patch("ecsk.core.base.select_many")
@patch("ecsk.core.base.select_one")
def test_no_network_resources(mock_select, mock_select_many, method, args, message):
    network_service = Mock()
    network_service.get_vpcs.return_value = []
    network_service.get_subnets.return_value = []
    network_service.get_security_groups.return_value = []

    with pytest.raises(NoResourceError, match=message):
        getattr(NetworkUI(network_service), method)(*args)

    mock_select.assert_not_called()
    mock_select_many.assert_not_called()
