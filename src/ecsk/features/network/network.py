"""VPC, subnet and security group lookups for awsvpc networking."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.utils import paginate_aws_list

if TYPE_CHECKING:
    from mypy_boto3_ec2.client import EC2Client
    from mypy_boto3_ec2.type_defs import SecurityGroupTypeDef, SubnetTypeDef, VpcTypeDef


class NetworkService(BaseAWSService):
    """Service for EC2 network lookups."""

    def __init__(self, ec2_client: EC2Client) -> None:
        super().__init__(ec2_client)

    def get_vpcs(self) -> list[VpcTypeDef]:
        return paginate_aws_list(self.client, "describe_vpcs", "Vpcs")

    def get_subnets(self, vpc_id: str) -> list[SubnetTypeDef]:
        return paginate_aws_list(
            self.client, "describe_subnets", "Subnets", Filters=[{"Name": "vpc-id", "Values": [vpc_id]}]
        )

    def get_security_groups(self, vpc_id: str) -> list[SecurityGroupTypeDef]:
        return paginate_aws_list(
            self.client,
            "describe_security_groups",
            "SecurityGroups",
            Filters=[{"Name": "vpc-id", "Values": [vpc_id]}],
        )
