"""Domain ports - interfaces implemented by infrastructure and provider adapters."""

from asg_deployer.domain.base.ports.account_port import AccountLookupPort
from asg_deployer.domain.base.ports.logging_port import LoggingPort
from asg_deployer.domain.base.ports.provider_port import (
    RegionScopedProviderFactoryPort,
    RegionScopedProviderPort,
)
from asg_deployer.domain.base.ports.provisioning_port import (
    AsgReferenceCopierPort,
    LifecycleHookWorkerPort,
    ProvisioningWorkerPort,
)
from asg_deployer.domain.base.ports.task_port import TaskPort

__all__: list[str] = [
    "AccountLookupPort",
    "AsgReferenceCopierPort",
    "LifecycleHookWorkerPort",
    "LoggingPort",
    "ProvisioningWorkerPort",
    "RegionScopedProviderFactoryPort",
    "RegionScopedProviderPort",
    "TaskPort",
]
