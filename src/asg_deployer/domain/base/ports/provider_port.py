"""Domain ports for region-scoped provider access."""

from abc import ABC, abstractmethod
from typing import Optional

from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.ports.provisioning_port import (
    AsgReferenceCopierPort,
    LifecycleHookWorkerPort,
    ProvisioningWorkerPort,
)
from asg_deployer.domain.deployment.value_objects import (
    AutoScalingGroupDescription,
    ClassicLinkVpc,
    LaunchConfigurationDescription,
    LoadBalancerLookupResult,
    ResolvedImage,
    SecurityGroupSummary,
)


class RegionScopedProviderPort(ABC):
    """Provider queries and collaborators bound to one account and region."""

    region: str

    @abstractmethod
    def describe_classic_link_vpcs(self) -> list[ClassicLinkVpc]:
        """List VPCs in the region with their classic link status."""

    @abstractmethod
    def describe_security_groups(self, group_ids: list[str]) -> list[SecurityGroupSummary]:
        """Describe security groups by id."""

    @abstractmethod
    def get_security_group_ids(self, group_names: list[str], vpc_id: Optional[str]) -> dict[str, str]:
        """Map the given group names to ids; names that do not exist are omitted."""

    @abstractmethod
    def get_load_balancers_by_name(self, names: list[str]) -> LoadBalancerLookupResult:
        """Resolve load balancer names to classic load balancers and target groups."""

    @abstractmethod
    def resolve_image(self, image_name: str, account_id: Optional[str]) -> Optional[ResolvedImage]:
        """Resolve an image id or name; None when nothing matches."""

    @abstractmethod
    def describe_auto_scaling_group(self, asg_name: str) -> Optional[AutoScalingGroupDescription]:
        """Describe a group by name; None when it does not exist."""

    @abstractmethod
    def get_launch_configuration(
        self, launch_configuration_name: str
    ) -> Optional[LaunchConfigurationDescription]:
        """Describe a launch configuration by name; None when it does not exist."""

    @property
    @abstractmethod
    def provisioning_worker(self) -> ProvisioningWorkerPort:
        """Worker creating groups in this region."""

    @property
    @abstractmethod
    def lifecycle_hook_worker(self) -> LifecycleHookWorkerPort:
        """Worker attaching lifecycle hooks in this region."""

    @abstractmethod
    def get_asg_reference_copier(
        self, target_credentials: AccountCredentials, target_region: str
    ) -> AsgReferenceCopierPort:
        """Copier from groups in this region to groups in the target account and region."""


class RegionScopedProviderFactoryPort(ABC):
    """Builds region-scoped providers."""

    @abstractmethod
    def for_region(self, credentials: AccountCredentials, region: str) -> RegionScopedProviderPort:
        """Provider bound to ``credentials`` in ``region``."""
