"""Copies settings from a source group into a deploy request."""

from typing import Optional

from asg_deployer.application.services.block_device_resolver import BlockDeviceResolver
from asg_deployer.application.services.phases import BASE_PHASE
from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.base.exceptions import ArgumentError, PreconditionError
from asg_deployer.domain.base.ports import (
    AccountLookupPort,
    LoggingPort,
    RegionScopedProviderFactoryPort,
    TaskPort,
)
from asg_deployer.domain.deployment.deploy_request import DeployRequest, SourceRef
from asg_deployer.domain.deployment.source_snapshot import SourceSnapshot


class SourceAttributeCopier:
    """Resolves the source group of a clone and applies its settings to requests."""

    def __init__(
        self,
        accounts: AccountLookupPort,
        provider_factory: RegionScopedProviderFactoryPort,
        deploy_defaults: DeployDefaults,
        task: TaskPort,
        logger: LoggingPort,
        block_device_resolver: Optional[BlockDeviceResolver] = None,
    ) -> None:
        self._accounts = accounts
        self._provider_factory = provider_factory
        self._deploy_defaults = deploy_defaults
        self._task = task
        self._logger = logger
        self._block_device_resolver = block_device_resolver or BlockDeviceResolver()

    def snapshot(self, source: SourceRef) -> Optional[SourceSnapshot]:
        """
        Look up the source group and its launch configuration.

        Args:
            source: Source reference of the request

        Returns:
            The snapshot, or None when the reference is incomplete or the
            group does not exist

        Raises:
            ArgumentError: If the source account is unknown
        """
        if not source.is_complete:
            return None

        credentials = self._accounts.get_by_name(source.account)
        if credentials is None:
            raise ArgumentError(f"Unknown source account {source.account}", {"source": str(source)})

        provider = self._provider_factory.for_region(credentials, source.region)
        auto_scaling_group = provider.describe_auto_scaling_group(source.asg_name)
        if auto_scaling_group is None:
            self._task.update_status(BASE_PHASE, f"Unable to locate source asg ({source})")
            return None

        launch_configuration = None
        if auto_scaling_group.launch_configuration_name:
            launch_configuration = provider.get_launch_configuration(
                auto_scaling_group.launch_configuration_name
            )

        self._logger.debug(
            "Resolved source group %s (launch configuration: %s)",
            source,
            auto_scaling_group.launch_configuration_name,
        )
        return SourceSnapshot(
            source=source,
            provider=provider,
            auto_scaling_group=auto_scaling_group,
            launch_configuration=launch_configuration,
        )

    def apply(self, snapshot: Optional[SourceSnapshot], request: DeployRequest) -> DeployRequest:
        """
        Derive a request carrying the source group's capacity, block devices and spot price.

        The given request is never modified.

        Raises:
            PreconditionError: If source capacity is requested but there is no usable source
        """
        use_source_capacity = request.source.use_source_capacity

        if snapshot is None:
            if use_source_capacity:
                raise PreconditionError("useSourceCapacity requested, but no source available")
            return request

        launch_configuration = snapshot.launch_configuration
        if launch_configuration is None:
            if use_source_capacity:
                raise PreconditionError(
                    "useSourceCapacity requested, but no source ASG found",
                    {"source": str(snapshot.source)},
                )
            return request

        updates = {
            "block_devices": self._block_device_resolver.resolve(
                self._deploy_defaults, request, launch_configuration
            ),
            "spot_price": request.spot_price or snapshot.spot_price,
        }
        if use_source_capacity:
            updates["capacity"] = snapshot.capacity

        return request.model_copy(update=updates)

    def resolve(self, source: SourceRef, request: DeployRequest) -> DeployRequest:
        """Snapshot the source and apply it in one step."""
        return self.apply(self.snapshot(source), request)
