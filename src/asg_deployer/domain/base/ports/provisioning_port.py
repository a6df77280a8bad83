"""Domain ports for collaborators that change provider state."""

from abc import ABC, abstractmethod

from asg_deployer.domain.base.ports.task_port import TaskPort
from asg_deployer.domain.deployment.provision_spec import ProvisionSpec
from asg_deployer.domain.deployment.value_objects import LifecycleHook


class ProvisioningWorkerPort(ABC):
    """Creates a server group from a fully resolved spec."""

    @abstractmethod
    def deploy(self, spec: ProvisionSpec) -> str:
        """
        Create the group and block until the provider accepted it.

        Returns:
            The name of the created group
        """


class AsgReferenceCopierPort(ABC):
    """Copies artifacts that reference a group from a source group to a target group."""

    @abstractmethod
    def copy_scaling_policies_with_alarms(
        self, task: TaskPort, source_asg_name: str, target_asg_name: str
    ) -> None:
        """Copy scaling policies and the alarms that trigger them."""

    @abstractmethod
    def copy_scheduled_actions_for_asg(
        self, task: TaskPort, source_asg_name: str, target_asg_name: str
    ) -> None:
        """Copy scheduled scaling actions."""


class LifecycleHookWorkerPort(ABC):
    """Attaches lifecycle hooks to a group."""

    @abstractmethod
    def attach(self, task: TaskPort, hooks: list[LifecycleHook], target_asg_name: str) -> None:
        """Attach every hook in ``hooks`` to ``target_asg_name``."""
