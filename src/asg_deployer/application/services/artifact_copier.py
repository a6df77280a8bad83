"""Post-creation artifacts: scaling policies, scheduled actions and lifecycle hooks."""

from typing import Optional

from asg_deployer.application.services.phases import BASE_PHASE
from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.ports import LoggingPort, RegionScopedProviderPort, TaskPort
from asg_deployer.domain.deployment.deploy_request import DeployRequest
from asg_deployer.domain.deployment.source_snapshot import SourceSnapshot
from asg_deployer.domain.deployment.value_objects import (
    LifecycleDefaultResult,
    LifecycleHook,
    LifecycleTransition,
)


class PostCreationArtifactCopier:
    """Applies artifacts to a group after the provisioning worker created it."""

    def __init__(self, task: TaskPort, logger: LoggingPort) -> None:
        self._task = task
        self._logger = logger

    def copy_policies_and_schedules(
        self,
        source_snapshot: Optional[SourceSnapshot],
        target_credentials: AccountCredentials,
        source_asg_name: Optional[str],
        target_region: str,
        target_asg_name: str,
    ) -> None:
        """Copy scaling policies (with alarms) and scheduled actions from the source group."""
        if source_snapshot is None or not source_asg_name:
            return

        self._task.update_status(
            BASE_PHASE,
            f"Copying scaling policies and scheduled actions from {source_asg_name} to {target_asg_name}",
        )
        reference_copier = source_snapshot.provider.get_asg_reference_copier(
            target_credentials, target_region
        )
        reference_copier.copy_scaling_policies_with_alarms(self._task, source_asg_name, target_asg_name)
        reference_copier.copy_scheduled_actions_for_asg(self._task, source_asg_name, target_asg_name)

    def attach_lifecycle_hooks(
        self,
        provider: RegionScopedProviderPort,
        hooks: list[LifecycleHook],
        target_asg_name: str,
    ) -> None:
        """Attach ``hooks`` to the target group; nothing happens for an empty list."""
        if not hooks:
            return
        self._logger.debug("Attaching %d lifecycle hooks to %s", len(hooks), target_asg_name)
        provider.lifecycle_hook_worker.attach(self._task, hooks, target_asg_name)

    @staticmethod
    def lifecycle_hooks_for(
        credentials: AccountCredentials, request: DeployRequest
    ) -> list[LifecycleHook]:
        """
        Explicit hooks of the request followed by the account's hooks, when included.

        Raises:
            ArgumentError: If an account hook names an unknown transition or default result
        """
        hooks = list(request.lifecycle_hooks)
        if request.include_account_lifecycle_hooks:
            for account_hook in credentials.lifecycle_hooks:
                hooks.append(
                    LifecycleHook(
                        role_arn=account_hook.role_arn,
                        notification_target_arn=account_hook.notification_target_arn,
                        lifecycle_transition=LifecycleTransition.parse(account_hook.lifecycle_transition),
                        heartbeat_timeout=account_hook.heartbeat_timeout,
                        default_result=(
                            LifecycleDefaultResult.parse(account_hook.default_result)
                            if account_hook.default_result
                            else None
                        ),
                    )
                )
        return hooks
