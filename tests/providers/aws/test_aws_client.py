"""Tests for AWSClient."""

from unittest.mock import Mock

import pytest
from moto import mock_aws

from asg_deployer.config.schemas import AWSProviderConfig
from asg_deployer.domain.account.credentials import AmazonAccountCredentials
from asg_deployer.domain.base.ports import LoggingPort
from asg_deployer.providers.aws.exceptions.aws_exceptions import AWSConfigurationError
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient


@pytest.mark.aws
class TestAWSClient:
    """Test session setup and lazy client creation."""

    @pytest.fixture(autouse=True)
    def _setup_client(self, aws_credentials):
        self.logger = Mock(spec=LoggingPort)
        self.credentials = AmazonAccountCredentials(name="test", account_id="123456789012")

    @mock_aws
    def test_clients_are_created_lazily_and_cached(self):
        client = AWSClient(self.credentials, "us-west-2", self.logger)

        assert client._clients == {}
        ec2 = client.ec2_client

        assert client.ec2_client is ec2
        assert list(client._clients) == ["ec2"]
        assert ec2.meta.region_name == "us-west-2"

    @mock_aws
    def test_every_service_client_is_available(self):
        client = AWSClient(self.credentials, "us-east-1", self.logger)

        assert client.autoscaling_client.meta.service_model.service_name == "autoscaling"
        assert client.elb_client.meta.service_model.service_name == "elb"
        assert client.elbv2_client.meta.service_model.service_name == "elbv2"
        assert client.cloudwatch_client.meta.service_model.service_name == "cloudwatch"

    def test_retry_and_timeout_settings(self):
        config = AWSProviderConfig(max_retries=7, connect_timeout=2, read_timeout=30)

        client = AWSClient(self.credentials, "us-east-1", self.logger, config)

        assert client.boto_config.retries == {"max_attempts": 7, "mode": "adaptive"}
        assert client.boto_config.connect_timeout == 2
        assert client.boto_config.read_timeout == 30

    def test_endpoint_url_is_passed_to_clients(self):
        credentials = AmazonAccountCredentials(name="local", endpoint_url="http://localhost:4566")

        client = AWSClient(credentials, "us-east-1", self.logger)

        assert client.ec2_client.meta.endpoint_url == "http://localhost:4566"

    def test_unknown_profile_raises_configuration_error(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
        monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
        credentials = AmazonAccountCredentials(name="test", profile="does-not-exist")

        with pytest.raises(AWSConfigurationError) as exc_info:
            AWSClient(credentials, "us-east-1", self.logger)

        assert exc_info.value.details == {"account": "test", "region": "us-east-1"}
