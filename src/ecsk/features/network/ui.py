"""UI components for network selection."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.errors import NoResourceError
from ...core.utils import format_columns, get_tag_name, show_spinner, truncate
from .network import NetworkService


def _choices(rows: list[list[str]], values: list[str]) -> list[dict[str, str]]:
    return [{"name": line, "value": value} for line, value in zip(format_columns(rows), values)]


class NetworkUI(BaseUIComponent):
    """UI component for VPC, subnet and security group selection."""

    def __init__(self, network_service: NetworkService) -> None:
        super().__init__()
        self.network_service = network_service

    def ask_vpc(self, can_go_back: bool = False) -> str:
        with show_spinner():
            vpcs = self.network_service.get_vpcs()

        if not vpcs:
            raise NoResourceError("VPC")

        rows = [[vpc["VpcId"], vpc.get("CidrBlock", "-"), truncate(get_tag_name(vpc.get("Tags")))] for vpc in vpcs]
        return self.select("Choose VPC:", _choices(rows, [vpc["VpcId"] for vpc in vpcs]), can_go_back)

    def ask_subnets(self, vpc_id: str) -> list[str]:
        with show_spinner():
            subnets = self.network_service.get_subnets(vpc_id)

        if not subnets:
            raise NoResourceError("Subnet")

        rows = [
            [subnet["SubnetId"], subnet.get("CidrBlock", "-"), truncate(get_tag_name(subnet.get("Tags")))]
            for subnet in subnets
        ]
        choices = _choices(rows, [subnet["SubnetId"] for subnet in subnets])
        return self.select_multiple("Choose Subnets (Already filtered by VPC):", choices)

    def ask_security_groups(self, vpc_id: str) -> list[str]:
        with show_spinner():
            groups = self.network_service.get_security_groups(vpc_id)

        if not groups:
            raise NoResourceError("Security Group")

        rows = [
            [
                group["GroupId"],
                truncate(group.get("GroupName", "-")),
                truncate(group.get("Description", "-")),
                truncate(get_tag_name(group.get("Tags"))),
            ]
            for group in groups
        ]
        choices = _choices(rows, [group["GroupId"] for group in groups])
        return self.select_multiple("Choose Security Groups (Already filtered by VPC):", choices)
