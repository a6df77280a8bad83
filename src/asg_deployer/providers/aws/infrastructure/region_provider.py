"""Region-scoped AWS provider and its factory."""

from typing import Optional

from asg_deployer.config.schemas import AWSProviderConfig
from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.ports import (
    AsgReferenceCopierPort,
    LifecycleHookWorkerPort,
    LoggingPort,
    ProvisioningWorkerPort,
    RegionScopedProviderFactoryPort,
    RegionScopedProviderPort,
)
from asg_deployer.domain.deployment.value_objects import (
    AutoScalingGroupDescription,
    ClassicLinkVpc,
    LaunchConfigurationDescription,
    LoadBalancerLookupResult,
    ResolvedImage,
    SecurityGroupSummary,
)
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient
from asg_deployer.providers.aws.infrastructure.handlers.auto_scaling_worker import AutoScalingWorker
from asg_deployer.providers.aws.infrastructure.handlers.lifecycle_hook_worker import (
    AsgLifecycleHookWorker,
)
from asg_deployer.providers.aws.infrastructure.handlers.reference_copier import AsgReferenceCopier
from asg_deployer.providers.aws.infrastructure.services.asg_service import AutoScalingGroupService
from asg_deployer.providers.aws.infrastructure.services.image_lookup import ImageLookupService
from asg_deployer.providers.aws.infrastructure.services.load_balancer_lookup import (
    LoadBalancerLookupService,
)
from asg_deployer.providers.aws.infrastructure.services.security_group_service import (
    SecurityGroupService,
)


class AWSRegionScopedProvider(RegionScopedProviderPort):
    """Bundles the AWS services and workers of one account and region."""

    def __init__(
        self,
        aws_client: AWSClient,
        logger: LoggingPort,
        factory: "AWSRegionScopedProviderFactory",
    ) -> None:
        self.aws_client = aws_client
        self.region = aws_client.region_name
        self._logger = logger
        self._factory = factory

        self._security_groups = SecurityGroupService(aws_client, logger)
        self._load_balancers = LoadBalancerLookupService(aws_client, logger)
        self._images = ImageLookupService(aws_client, logger)
        self._asgs = AutoScalingGroupService(aws_client, logger)
        self._provisioning_worker = AutoScalingWorker(
            aws_client,
            logger,
            asg_service=self._asgs,
            security_group_service=self._security_groups,
        )
        self._lifecycle_hook_worker = AsgLifecycleHookWorker(aws_client, logger)

    def describe_classic_link_vpcs(self) -> list[ClassicLinkVpc]:
        return self._security_groups.describe_classic_link_vpcs()

    def describe_security_groups(self, group_ids: list[str]) -> list[SecurityGroupSummary]:
        return self._security_groups.describe_security_groups(group_ids)

    def get_security_group_ids(self, group_names: list[str], vpc_id: Optional[str]) -> dict[str, str]:
        return self._security_groups.get_security_group_ids(group_names, vpc_id)

    def get_load_balancers_by_name(self, names: list[str]) -> LoadBalancerLookupResult:
        return self._load_balancers.get_load_balancers_by_name(names)

    def resolve_image(self, image_name: str, account_id: Optional[str]) -> Optional[ResolvedImage]:
        return self._images.resolve(image_name, account_id)

    def describe_auto_scaling_group(self, asg_name: str) -> Optional[AutoScalingGroupDescription]:
        return self._asgs.describe_auto_scaling_group(asg_name)

    def get_launch_configuration(
        self, launch_configuration_name: str
    ) -> Optional[LaunchConfigurationDescription]:
        return self._asgs.get_launch_configuration(launch_configuration_name)

    @property
    def provisioning_worker(self) -> ProvisioningWorkerPort:
        return self._provisioning_worker

    @property
    def lifecycle_hook_worker(self) -> LifecycleHookWorkerPort:
        return self._lifecycle_hook_worker

    def get_asg_reference_copier(
        self, target_credentials: AccountCredentials, target_region: str
    ) -> AsgReferenceCopierPort:
        target_client = self._factory.client_for(target_credentials, target_region)
        return AsgReferenceCopier(self.aws_client, target_client, self._logger)


class AWSRegionScopedProviderFactory(RegionScopedProviderFactoryPort):
    """
    Creates region-scoped providers, one per account and region.

    Clients and providers are cached for the lifetime of the factory so a
    deployment touching the same account and region twice (source and
    target, or several lookups) reuses one boto3 session.
    """

    def __init__(self, logger: LoggingPort, aws_config: Optional[AWSProviderConfig] = None) -> None:
        self._logger = logger
        self._aws_config = aws_config or AWSProviderConfig()
        self._clients: dict[tuple[str, str], AWSClient] = {}
        self._providers: dict[tuple[str, str], AWSRegionScopedProvider] = {}

    def client_for(self, credentials: AccountCredentials, region: str) -> AWSClient:
        key = (credentials.name, region)
        if key not in self._clients:
            self._clients[key] = AWSClient(
                credentials, region, self._scoped_logger(credentials, region), self._aws_config
            )
        return self._clients[key]

    def for_region(self, credentials: AccountCredentials, region: str) -> AWSRegionScopedProvider:
        key = (credentials.name, region)
        if key not in self._providers:
            self._providers[key] = AWSRegionScopedProvider(
                self.client_for(credentials, region), self._scoped_logger(credentials, region), self
            )
        return self._providers[key]

    def _scoped_logger(self, credentials: AccountCredentials, region: str) -> LoggingPort:
        return self._logger.bind(account=credentials.name, region=region)
