"""Security group and classic link VPC queries."""

from typing import Any, Optional

from asg_deployer.domain.deployment.value_objects import ClassicLinkVpc, SecurityGroupSummary
from asg_deployer.providers.aws.exceptions.aws_exceptions import AWSEntityNotFoundError
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler


class SecurityGroupService(AWSHandler):
    """EC2 security group lookups for one region."""

    def describe_classic_link_vpcs(self) -> list[ClassicLinkVpc]:
        response = self._call(
            self.aws_client.ec2_client.describe_vpc_classic_link, "describe_vpc_classic_link"
        )
        return [
            ClassicLinkVpc(vpc_id=vpc["VpcId"], classic_link_enabled=bool(vpc.get("ClassicLinkEnabled")))
            for vpc in response.get("Vpcs", [])
        ]

    def describe_security_groups(self, group_ids: list[str]) -> list[SecurityGroupSummary]:
        """Describe groups by id; unknown ids yield an empty list."""
        if not group_ids:
            return []
        try:
            groups = self._paginate(
                self.aws_client.ec2_client,
                "describe_security_groups",
                "SecurityGroups",
                GroupIds=list(group_ids),
            )
        except AWSEntityNotFoundError:
            self._logger.debug("Security groups %s not found in %s", group_ids, self.region)
            return []
        return [self._to_summary(group) for group in groups]

    def get_security_group_ids(self, group_names: list[str], vpc_id: Optional[str]) -> dict[str, str]:
        """
        Map security group names to ids.

        Args:
            group_names: Names to look up
            vpc_id: VPC the groups must belong to; None matches groups of any VPC

        Returns:
            name -> id for every group that exists; missing names are omitted
        """
        if not group_names:
            return {}
        filters = [{"Name": "group-name", "Values": list(group_names)}]
        if vpc_id:
            filters.append({"Name": "vpc-id", "Values": [vpc_id]})

        groups = self._paginate(
            self.aws_client.ec2_client, "describe_security_groups", "SecurityGroups", Filters=filters
        )
        return {group["GroupName"]: group["GroupId"] for group in groups if group["GroupName"] in group_names}

    @staticmethod
    def _to_summary(group: dict[str, Any]) -> SecurityGroupSummary:
        return SecurityGroupSummary(
            group_id=group["GroupId"],
            group_name=group["GroupName"],
            vpc_id=group.get("VpcId"),
        )
