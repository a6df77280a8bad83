"""Wires configuration, logging, accounts and the AWS provider into a planner."""

from typing import Optional

from asg_deployer.application.services.deployment_planner import DeploymentPlanner
from asg_deployer.config.manager import ConfigurationManager
from asg_deployer.domain.base.ports import TaskPort
from asg_deployer.infrastructure.accounts.account_repository import InMemoryAccountRepository
from asg_deployer.infrastructure.adapters.logging_adapter import LoggingAdapter
from asg_deployer.infrastructure.adapters.task_adapter import InMemoryTask
from asg_deployer.infrastructure.logging.logger import setup_logging
from asg_deployer.providers.aws.infrastructure.region_provider import AWSRegionScopedProviderFactory


def create_deployment_planner(
    config_manager: Optional[ConfigurationManager] = None,
    task: Optional[TaskPort] = None,
) -> DeploymentPlanner:
    """
    Build a DeploymentPlanner backed by AWS.

    Args:
        config_manager: Configuration source; ``$ASG_DEPLOYER_CONFDIR/config.yml`` when omitted
        task: Status sink; an in-memory task when omitted

    Returns:
        A planner ready to deploy into the configured accounts

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    config_manager = config_manager or ConfigurationManager()
    setup_logging(config_manager.get_logging_config())

    logger = LoggingAdapter("deployment")
    task = task or InMemoryTask(logger=LoggingAdapter("task"))
    accounts = InMemoryAccountRepository(config_manager.load().accounts)

    logger.debug("Configured accounts: %s", accounts.names())
    return DeploymentPlanner(
        accounts=accounts,
        provider_factory=AWSRegionScopedProviderFactory(
            LoggingAdapter("aws"), config_manager.get_aws_config()
        ),
        deploy_defaults=config_manager.get_deploy_defaults(),
        task=task,
        logger=logger,
    )
