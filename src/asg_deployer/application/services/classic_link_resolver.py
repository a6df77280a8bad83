"""Classic link security group resolution."""

import re
from typing import Optional

from asg_deployer.application.services.phases import BASE_PHASE
from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.base.exceptions import ArgumentError, ResolutionError
from asg_deployer.domain.base.ports import LoggingPort, RegionScopedProviderPort, TaskPort
from asg_deployer.domain.deployment.deploy_request import DeployRequest
from asg_deployer.domain.deployment.names import ServerGroupName, cluster_name
from asg_deployer.domain.deployment.source_snapshot import SourceSnapshot
from asg_deployer.domain.deployment.value_objects import ClassicLinkPlan

SECURITY_GROUP_ID_PATTERN = re.compile(r"^sg-[0-9a-f]+$")


class ClassicLinkResolver:
    """
    Computes the classic link VPC and security groups for a non-VPC deployment.

    Groups come from three places: the request, the account-wide default
    group and, when enabled, the groups named after the application, its
    stack and its cluster. The result never holds more groups than
    ``DeployDefaults.max_classic_link_security_groups``.
    """

    def __init__(self, deploy_defaults: DeployDefaults, task: TaskPort, logger: LoggingPort) -> None:
        self._deploy_defaults = deploy_defaults
        self._task = task
        self._logger = logger

    def resolve(
        self,
        region: str,
        subnet_type: Optional[str],
        request: DeployRequest,
        provider: RegionScopedProviderPort,
        source_snapshot: Optional[SourceSnapshot] = None,
    ) -> ClassicLinkPlan:
        """
        Resolve the classic link plan for one region.

        Args:
            region: Target region
            subnet_type: Subnet type of the deployment; VPC deployments get an empty plan
            request: Request being planned
            provider: Provider for the target account and region
            source_snapshot: Source group of a clone, if any

        Returns:
            The classic link VPC and ordered security group names

        Raises:
            ResolutionError: If security group ids cannot be mapped back to names
            ArgumentError: If the declared groups alone exceed the configured maximum
        """
        if subnet_type:
            return ClassicLinkPlan.empty()

        vpc_id = next(
            (vpc.vpc_id for vpc in provider.describe_classic_link_vpcs() if vpc.classic_link_enabled),
            None,
        )
        if not vpc_id:
            self._logger.debug("No classic link enabled VPC in %s", region)
            return ClassicLinkPlan.empty()

        # dict keys keep insertion order and drop duplicates
        group_names: dict[str, None] = dict.fromkeys(request.classic_link_vpc_security_groups)
        if self._deploy_defaults.classic_link_security_group_name:
            group_names.setdefault(self._deploy_defaults.classic_link_security_group_name)

        if request.classic_link_vpc_id and request.classic_link_vpc_security_groups:
            lookup_provider = source_snapshot.provider if source_snapshot else provider
            self._replace_group_ids_with_names(group_names, request.classic_link_vpc_id, lookup_provider)

        max_groups = self._deploy_defaults.max_classic_link_security_groups
        if self._deploy_defaults.add_app_groups_to_classic_link:
            if request.source.asg_name:
                self._discard_source_cluster_groups(group_names, request)
            self._add_application_groups(group_names, request, provider, vpc_id, max_groups)

        if len(group_names) > max_groups:
            raise ArgumentError(
                f"Too many classic link security groups {list(group_names)}, at most {max_groups} allowed",
                {"region": region, "max_classic_link_security_groups": max_groups},
            )

        security_groups = tuple(group_names)
        self._task.update_status(
            BASE_PHASE, f"Attaching {list(security_groups)} as classicLinkVpcSecurityGroups"
        )
        return ClassicLinkPlan(vpc_id=vpc_id, security_groups=security_groups)

    def _replace_group_ids_with_names(
        self,
        group_names: dict[str, None],
        classic_link_vpc_id: str,
        provider: RegionScopedProviderPort,
    ) -> None:
        # groups cloned from another region arrive as ids of the source region
        group_ids = [name for name in group_names if SECURITY_GROUP_ID_PATTERN.match(name)]
        if not group_ids:
            return

        for group_id in group_ids:
            del group_names[group_id]

        resolved_names = [
            group.group_name
            for group in provider.describe_security_groups(group_ids)
            if group.vpc_id == classic_link_vpc_id and group.group_id in group_ids
        ]
        if len(resolved_names) != len(group_ids):
            raise ResolutionError(
                f"failed to look up classic link security groups, had {group_ids} found {resolved_names}",
                {"group_ids": group_ids, "resolved_names": resolved_names},
            )
        group_names.update(dict.fromkeys(resolved_names))

    @staticmethod
    def _discard_source_cluster_groups(group_names: dict[str, None], request: DeployRequest) -> None:
        # cloning into another cluster must not carry the old cluster's groups along
        source_name = ServerGroupName.parse(request.source.asg_name)
        mismatch = False
        if source_name.app != request.application:
            group_names.pop(source_name.app, None)
            mismatch = True
        if source_name.stack and (mismatch or source_name.stack != request.stack):
            group_names.pop(cluster_name(source_name.app, source_name.stack), None)
            mismatch = True
        if source_name.detail and (mismatch or source_name.detail != request.free_form_details):
            group_names.pop(cluster_name(source_name.app, source_name.stack, source_name.detail), None)

    def _add_application_groups(
        self,
        group_names: dict[str, None],
        request: DeployRequest,
        provider: RegionScopedProviderPort,
        vpc_id: str,
        max_groups: int,
    ) -> None:
        candidates = [request.application]
        if request.stack:
            candidates.append(cluster_name(request.application, request.stack))
        if request.free_form_details:
            candidates.append(
                cluster_name(request.application, request.stack, request.free_form_details)
            )

        names_to_look_up = [name for name in candidates if name not in group_names]
        if not names_to_look_up:
            return

        existing_groups = provider.get_security_group_ids(names_to_look_up, vpc_id)
        for name in names_to_look_up:
            if name not in existing_groups:
                continue
            if len(group_names) < max_groups:
                group_names[name] = None
            else:
                self._task.update_status(
                    BASE_PHASE,
                    f"Not adding {name} to classicLinkVpcSecurityGroups, already have {max_groups} groups",
                )
