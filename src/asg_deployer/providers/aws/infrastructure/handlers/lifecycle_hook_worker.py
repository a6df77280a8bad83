"""Attaches lifecycle hooks to Auto Scaling Groups."""

import uuid

from asg_deployer.domain.base.ports import LifecycleHookWorkerPort, TaskPort
from asg_deployer.domain.deployment.value_objects import LifecycleHook
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler

PHASE = "LIFECYCLE_HOOKS"


class AsgLifecycleHookWorker(AWSHandler, LifecycleHookWorkerPort):
    """Creates one lifecycle hook per entry, each with a unique name."""

    def attach(self, task: TaskPort, hooks: list[LifecycleHook], target_asg_name: str) -> None:
        for hook in hooks:
            hook_name = f"{target_asg_name}-lifecycle-{uuid.uuid4()}"
            params = {
                "RoleARN": hook.role_arn,
                "NotificationTargetARN": hook.notification_target_arn,
                "HeartbeatTimeout": hook.heartbeat_timeout,
                "DefaultResult": hook.default_result.value if hook.default_result else None,
            }
            task.update_status(PHASE, f"Creating lifecycle hook ({hook_name}) on {target_asg_name}")
            self._call(
                self.aws_client.autoscaling_client.put_lifecycle_hook,
                "put_lifecycle_hook",
                AutoScalingGroupName=target_asg_name,
                LifecycleHookName=hook_name,
                LifecycleTransition=hook.lifecycle_transition.value,
                **{key: value for key, value in params.items() if value is not None},
            )
