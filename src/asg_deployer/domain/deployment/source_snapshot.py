"""Resolved view of the group a deployment clones from."""

from dataclasses import dataclass
from typing import Optional

from asg_deployer.domain.base.ports.provider_port import RegionScopedProviderPort
from asg_deployer.domain.deployment.deploy_request import SourceRef
from asg_deployer.domain.deployment.value_objects import (
    AutoScalingGroupDescription,
    Capacity,
    LaunchConfigurationDescription,
)


@dataclass(frozen=True)
class SourceSnapshot:
    """
    The ancestor group, its launch configuration and the provider they came from.

    Resolved once per deployment; the ancestor does not change between
    target regions.
    """

    source: SourceRef
    provider: RegionScopedProviderPort
    auto_scaling_group: AutoScalingGroupDescription
    launch_configuration: Optional[LaunchConfigurationDescription] = None

    @property
    def asg_name(self) -> str:
        return self.auto_scaling_group.name

    @property
    def capacity(self) -> Capacity:
        return Capacity(
            min=self.auto_scaling_group.min_size,
            max=self.auto_scaling_group.max_size,
            desired=self.auto_scaling_group.desired_capacity,
        )

    @property
    def spot_price(self) -> Optional[str]:
        return self.launch_configuration.spot_price if self.launch_configuration else None
