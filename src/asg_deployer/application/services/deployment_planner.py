"""Deployment planner - turns a deploy request into created server groups."""

from collections.abc import Sequence
from typing import Any, Optional

from asg_deployer.application.services.artifact_copier import PostCreationArtifactCopier
from asg_deployer.application.services.block_device_resolver import BlockDeviceResolver
from asg_deployer.application.services.classic_link_resolver import ClassicLinkResolver
from asg_deployer.application.services.image_resolver import ImageResolver
from asg_deployer.application.services.phases import BASE_PHASE
from asg_deployer.application.services.source_attribute_copier import SourceAttributeCopier
from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.exceptions import ArgumentError, StateError
from asg_deployer.domain.base.ports import (
    AccountLookupPort,
    LoggingPort,
    RegionScopedProviderFactoryPort,
    RegionScopedProviderPort,
    TaskPort,
)
from asg_deployer.domain.deployment.deploy_request import DeployRequest
from asg_deployer.domain.deployment.deployment_result import DeploymentResult
from asg_deployer.domain.deployment.provision_spec import ProvisionSpec
from asg_deployer.domain.deployment.source_snapshot import SourceSnapshot
from asg_deployer.domain.deployment.value_objects import (
    ClassicLinkPlan,
    LoadBalancerLookupResult,
    ResolvedImage,
    UpsertLoadBalancerResult,
)

APPLICATION_PLACEHOLDER = "{{application}}"


class DeploymentPlanner:
    """
    Orchestrates a deployment across the regions of a request.

    Regions are processed strictly in request order. Every region works on
    its own request derived from the caller's request, so settings resolved
    for one region (load balancers, block devices, capacity) never leak
    into the next. A failure stops the deployment; groups already created
    in earlier regions are kept and nothing is rolled back.
    """

    def __init__(
        self,
        accounts: AccountLookupPort,
        provider_factory: RegionScopedProviderFactoryPort,
        deploy_defaults: DeployDefaults,
        task: TaskPort,
        logger: LoggingPort,
        source_copier: Optional[SourceAttributeCopier] = None,
        classic_link_resolver: Optional[ClassicLinkResolver] = None,
        image_resolver: Optional[ImageResolver] = None,
        artifact_copier: Optional[PostCreationArtifactCopier] = None,
        block_device_resolver: Optional[BlockDeviceResolver] = None,
    ) -> None:
        self._accounts = accounts
        self._provider_factory = provider_factory
        self._deploy_defaults = deploy_defaults
        self._task = task
        self._logger = logger
        self._block_device_resolver = block_device_resolver or BlockDeviceResolver()
        self._source_copier = source_copier or SourceAttributeCopier(
            accounts,
            provider_factory,
            deploy_defaults,
            task,
            logger,
            block_device_resolver=self._block_device_resolver,
        )
        self._classic_link_resolver = classic_link_resolver or ClassicLinkResolver(
            deploy_defaults, task, logger
        )
        self._image_resolver = image_resolver or ImageResolver(logger)
        self._artifact_copier = artifact_copier or PostCreationArtifactCopier(task, logger)

    def deploy(self, request: DeployRequest, prior_outputs: Sequence[Any] = ()) -> DeploymentResult:
        """
        Deploy a server group into every region of the request.

        Args:
            request: Deploy request; never modified
            prior_outputs: Outputs of earlier pipeline steps (resolved images,
                upserted load balancers)

        Returns:
            The groups created, in region order

        Raises:
            ArgumentError: Unknown accounts, unresolvable images, incompatible
                instance types or unsupported credentials
            PreconditionError: If source capacity is requested without a usable source
            StateError: If load balancers cannot be found
            ResolutionError: If classic link security group ids cannot be resolved
        """
        self._task.update_status(BASE_PHASE, "Initializing handler...")
        result = DeploymentResult()
        self._task.update_status(
            BASE_PHASE, f"Preparing deployment to {dict(request.availability_zones)}..."
        )

        credentials = self._accounts.get_by_name(request.credentials)
        if credentials is None:
            raise ArgumentError(
                f"Unknown account {request.credentials}", {"credentials": request.credentials}
            )

        source_snapshot = self._source_copier.snapshot(request.source)

        for region, availability_zones in request.availability_zones.items():
            server_group_name = self._deploy_region(
                region,
                list(availability_zones),
                request,
                credentials,
                source_snapshot,
                prior_outputs,
            )
            result.add(region, server_group_name)
            self._logger.info("Deployed %s in %s", server_group_name, region)

        return result

    def _deploy_region(
        self,
        region: str,
        availability_zones: list[str],
        original_request: DeployRequest,
        credentials: AccountCredentials,
        source_snapshot: Optional[SourceSnapshot],
        prior_outputs: Sequence[Any],
    ) -> str:
        request = self._source_copier.apply(source_snapshot, original_request)
        provider = self._provider_factory.for_region(credentials, region)

        load_balancers = self._resolve_load_balancers(region, request, prior_outputs, provider)

        classic_link = self._classic_link_resolver.resolve(
            region, request.subnet_type, request, provider, source_snapshot
        )

        block_devices = (
            self._block_device_resolver.for_instance_type(self._deploy_defaults, request.instance_type)
            if request.block_devices is None
            else list(request.block_devices)
        )
        block_devices_from_defaults = original_request.block_devices is None and (
            self._block_device_resolver.is_default_layout(
                self._deploy_defaults, request.instance_type, block_devices
            )
        )

        image = self._image_resolver.resolve_image(
            region, request.ami_name, prior_outputs, credentials.account_id, provider
        )
        self._image_resolver.validate_instance_type(image, request.instance_type)

        if not credentials.supports_deployment:
            raise ArgumentError(
                f"Unsupported account type {type(credentials).__name__} for this operation",
                {"credentials": credentials.name, "account_type": credentials.account_type},
            )

        # explicit and custom inherited mappings win over the image's own mappings
        if request.use_ami_block_device_mappings and block_devices_from_defaults:
            block_devices = list(image.block_device_mappings)

        spec = self._build_spec(
            region,
            availability_zones,
            request,
            credentials,
            image,
            block_devices,
            classic_link,
            load_balancers,
        )
        server_group_name = provider.provisioning_worker.deploy(spec)

        if request.copy_source_scaling_policies_and_actions:
            self._artifact_copier.copy_policies_and_schedules(
                source_snapshot,
                credentials,
                source_snapshot.asg_name if source_snapshot else None,
                region,
                server_group_name,
            )

        hooks = self._artifact_copier.lifecycle_hooks_for(credentials, request)
        self._artifact_copier.attach_lifecycle_hooks(provider, hooks, server_group_name)
        return server_group_name

    @staticmethod
    def _resolve_load_balancers(
        region: str,
        request: DeployRequest,
        prior_outputs: Sequence[Any],
        provider: RegionScopedProviderPort,
    ) -> LoadBalancerLookupResult:
        supplied = [
            load_balancer.name
            for output in prior_outputs
            if isinstance(output, UpsertLoadBalancerResult)
            for load_balancer in output.load_balancers.get(region, [])
        ]
        names = list(dict.fromkeys([*request.load_balancers, *supplied]))
        if not names:
            return LoadBalancerLookupResult()

        lookup = provider.get_load_balancers_by_name(names)
        if lookup.unknown_load_balancers:
            raise StateError(
                f"Unable to find load balancers named {lookup.unknown_load_balancers}",
                {"region": region, "unknown_load_balancers": lookup.unknown_load_balancers},
            )
        return lookup

    def _build_spec(
        self,
        region: str,
        availability_zones: list[str],
        request: DeployRequest,
        credentials: AccountCredentials,
        image: ResolvedImage,
        block_devices: list,
        classic_link: ClassicLinkPlan,
        load_balancers: LoadBalancerLookupResult,
    ) -> ProvisionSpec:
        capacity = request.capacity
        return ProvisionSpec(
            application=request.application,
            stack=request.stack,
            free_form_details=request.free_form_details,
            region=region,
            credentials=credentials.name,
            image_id=image.image_id,
            instance_type=request.instance_type,
            key_pair=request.key_pair or credentials.default_key_pair,
            security_groups=list(request.security_groups),
            iam_role=self.iam_role(request, self._deploy_defaults),
            block_devices=block_devices,
            classic_link=classic_link,
            min_instances=capacity.min if capacity.min is not None else 0,
            max_instances=capacity.max if capacity.max is not None else 0,
            desired_instances=capacity.desired if capacity.desired is not None else 0,
            availability_zones=availability_zones,
            subnet_type=request.subnet_type,
            classic_load_balancers=list(load_balancers.classic_load_balancers),
            target_group_arns=list(load_balancers.target_group_arns),
            sequence=request.sequence,
            ignore_sequence=request.ignore_sequence,
            start_disabled=request.start_disabled,
            associate_public_ip_address=request.associate_public_ip_address,
            cooldown=request.cooldown,
            health_check_grace_period=request.health_check_grace_period,
            health_check_type=request.health_check_type,
            termination_policies=list(request.termination_policies),
            suspended_processes=list(request.suspended_processes),
            spot_price=request.spot_price,
            kernel_id=request.kernel_id,
            ramdisk_id=request.ramdisk_id,
            instance_monitoring=request.instance_monitoring,
            ebs_optimized=request.ebs_optimized,
            base64_user_data=request.base64_user_data,
            tags=dict(request.tags),
        )

    @staticmethod
    def iam_role(request: DeployRequest, defaults: DeployDefaults) -> str:
        """IAM role of the request (or the default role) with the application substituted."""
        role = request.iam_role or defaults.iam_role
        if request.application:
            return role.replace(APPLICATION_PLACEHOLDER, request.application)
        return role
