"""Configuration schemas and loading."""

from asg_deployer.config.manager import ConfigurationManager
from asg_deployer.config.schemas import AppConfig, AWSProviderConfig, DeployDefaults, LoggingConfig

__all__: list[str] = [
    "AWSProviderConfig",
    "AppConfig",
    "ConfigurationManager",
    "DeployDefaults",
    "LoggingConfig",
]
