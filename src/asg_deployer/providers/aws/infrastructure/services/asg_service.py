"""Auto Scaling Group and launch configuration queries."""

from typing import Optional

from asg_deployer.domain.deployment.value_objects import (
    AutoScalingGroupDescription,
    BlockDevice,
    LaunchConfigurationDescription,
)
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler


class AutoScalingGroupService(AWSHandler):
    """Describes existing groups and their launch configurations."""

    def describe_auto_scaling_group(self, asg_name: str) -> Optional[AutoScalingGroupDescription]:
        response = self._call(
            self.aws_client.autoscaling_client.describe_auto_scaling_groups,
            "describe_auto_scaling_groups",
            AutoScalingGroupNames=[asg_name],
        )
        groups = response.get("AutoScalingGroups", [])
        if not groups:
            return None
        group = groups[0]
        return AutoScalingGroupDescription(
            name=group["AutoScalingGroupName"],
            min_size=group.get("MinSize", 0),
            max_size=group.get("MaxSize", 0),
            desired_capacity=group.get("DesiredCapacity", 0),
            launch_configuration_name=group.get("LaunchConfigurationName"),
        )

    def get_launch_configuration(
        self, launch_configuration_name: str
    ) -> Optional[LaunchConfigurationDescription]:
        response = self._call(
            self.aws_client.autoscaling_client.describe_launch_configurations,
            "describe_launch_configurations",
            LaunchConfigurationNames=[launch_configuration_name],
        )
        configurations = response.get("LaunchConfigurations", [])
        if not configurations:
            return None
        configuration = configurations[0]
        return LaunchConfigurationDescription(
            name=configuration["LaunchConfigurationName"],
            instance_type=configuration.get("InstanceType"),
            image_id=configuration.get("ImageId"),
            block_device_mappings=BlockDevice.from_aws_mappings(
                configuration.get("BlockDeviceMappings", [])
            ),
            spot_price=configuration.get("SpotPrice"),
        )

    def list_auto_scaling_group_names(self) -> list[str]:
        """Names of every group in the region."""
        return [
            group["AutoScalingGroupName"]
            for group in self._paginate(
                self.aws_client.autoscaling_client,
                "describe_auto_scaling_groups",
                "AutoScalingGroups",
            )
        ]
