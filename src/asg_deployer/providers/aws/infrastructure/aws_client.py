"""AWS client wrapper bound to one account and region."""

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from asg_deployer.config.schemas import AWSProviderConfig
from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.ports import LoggingPort
from asg_deployer.providers.aws.exceptions.aws_exceptions import AWSConfigurationError


class AWSClient:
    """Wrapper for the AWS service clients a deployment needs in one region."""

    def __init__(
        self,
        credentials: AccountCredentials,
        region: str,
        logger: LoggingPort,
        aws_config: Optional[AWSProviderConfig] = None,
    ) -> None:
        """
        Initialize the session; service clients are created on first use.

        Args:
            credentials: Account whose profile and endpoint the session uses
            region: AWS region of every client
            logger: Logger for logging messages
            aws_config: botocore retry and timeout settings

        Raises:
            AWSConfigurationError: If the session cannot be created, e.g. for an unknown profile
        """
        self._logger = logger
        self.region_name = region
        self.credentials = credentials
        self.profile_name: Optional[str] = getattr(credentials, "profile", None)
        self.endpoint_url: Optional[str] = getattr(credentials, "endpoint_url", None)
        aws_config = aws_config or AWSProviderConfig()

        self.boto_config = Config(
            region_name=region,
            retries={
                "max_attempts": aws_config.max_retries,
                "mode": "adaptive",
            },
            connect_timeout=aws_config.connect_timeout,
            read_timeout=aws_config.read_timeout,
        )

        try:
            self.session = boto3.Session(region_name=region, profile_name=self.profile_name)
        except BotoCoreError as e:
            raise AWSConfigurationError(
                f"AWS client initialization failed: {e}",
                {"account": credentials.name, "region": region},
            ) from e

        self._clients: dict[str, Any] = {}

        self._logger.debug(
            "AWS client initialized for account %s in %s (profile: %s, retries: %d)",
            credentials.name,
            region,
            self.profile_name or "default",
            aws_config.max_retries,
        )

    def _client(self, service_name: str) -> Any:
        if service_name not in self._clients:
            self._logger.debug("Initializing %s client on first use", service_name)
            kwargs: dict[str, Any] = {"config": self.boto_config}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url
            self._clients[service_name] = self.session.client(service_name, **kwargs)
        return self._clients[service_name]

    @property
    def ec2_client(self):
        """Lazy initialization of EC2 client."""
        return self._client("ec2")

    @property
    def autoscaling_client(self):
        """Lazy initialization of Auto Scaling client."""
        return self._client("autoscaling")

    @property
    def elb_client(self):
        """Lazy initialization of classic Elastic Load Balancing client."""
        return self._client("elb")

    @property
    def elbv2_client(self):
        """Lazy initialization of Elastic Load Balancing v2 client."""
        return self._client("elbv2")

    @property
    def cloudwatch_client(self):
        """Lazy initialization of CloudWatch client."""
        return self._client("cloudwatch")
