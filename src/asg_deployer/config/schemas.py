"""Configuration schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from asg_deployer.domain.account.credentials import AmazonAccountCredentials
from asg_deployer.domain.deployment.value_objects import BlockDevice


class DeployDefaults(BaseModel):
    """Deployment defaults applied when a request leaves a setting open."""

    iam_role: str = Field("BaseIAMRole", description="IAM role template, may contain {{application}}")
    classic_link_security_group_name: Optional[str] = Field(
        None, description="Security group every classic linked group joins"
    )
    add_app_groups_to_classic_link: bool = Field(
        False, description="Classic link the app, app-stack and app-stack-detail groups when present"
    )
    max_classic_link_security_groups: int = Field(
        5, ge=0, description="Maximum number of classic link security groups per group"
    )
    unknown_instance_type_block_device: Optional[BlockDevice] = Field(
        None, description="Block device used for instance types missing from the default table"
    )
    default_block_device_type: Optional[str] = Field(
        "standard", description="Volume type of generated EBS block devices"
    )


class AWSProviderConfig(BaseModel):
    """botocore client settings."""

    max_retries: int = Field(3, ge=0, description="Maximum botocore retry attempts")
    connect_timeout: int = Field(5, gt=0, description="Connect timeout in seconds")
    read_timeout: int = Field(10, gt=0, description="Read timeout in seconds")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level for the package")
    file_path: Optional[str] = Field(None, description="Log file; file logging is off when unset")
    console_enabled: bool = Field(True, description="Log to stderr")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.Formatter format string",
    )


class AppConfig(BaseModel):
    """Top level configuration."""

    deploy_defaults: DeployDefaults = Field(default_factory=DeployDefaults)
    aws: AWSProviderConfig = Field(default_factory=AWSProviderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    accounts: list[AmazonAccountCredentials] = Field(default_factory=list)
