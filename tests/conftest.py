"""Global test configuration and fixtures."""

import sys
from pathlib import Path
from typing import Optional
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.account.credentials import AmazonAccountCredentials
from asg_deployer.domain.base.ports import (
    LifecycleHookWorkerPort,
    LoggingPort,
    ProvisioningWorkerPort,
    RegionScopedProviderFactoryPort,
    RegionScopedProviderPort,
)
from asg_deployer.domain.deployment.value_objects import LoadBalancerLookupResult, ResolvedImage
from asg_deployer.infrastructure.accounts.account_repository import InMemoryAccountRepository
from asg_deployer.infrastructure.adapters.task_adapter import InMemoryTask


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def logger():
    """Mock logger."""
    return Mock(spec=LoggingPort)


@pytest.fixture
def task():
    """In-memory task recording status messages."""
    return InMemoryTask()


@pytest.fixture
def deploy_defaults():
    """Deploy defaults with classic link settings used across tests."""
    return DeployDefaults(
        iam_role="BaseIAMRole",
        classic_link_security_group_name="nf-classiclink",
        add_app_groups_to_classic_link=False,
        max_classic_link_security_groups=5,
    )


@pytest.fixture
def test_account():
    """Target account credentials."""
    return AmazonAccountCredentials(
        name="test",
        account_id="123456789012",
        default_key_pair="nf-test-keypair-a",
    )


@pytest.fixture
def prod_account():
    """Second account used as a clone source."""
    return AmazonAccountCredentials(name="prod", account_id="210987654321")


@pytest.fixture
def accounts(test_account, prod_account):
    """Account repository holding the test and prod accounts."""
    return InMemoryAccountRepository([test_account, prod_account])


def make_provider(region: str = "us-east-1", image: Optional[ResolvedImage] = None) -> Mock:
    """
    Mock region-scoped provider with benign defaults.

    No classic link VPC, every load balancer known, a single hvm image and a
    provisioning worker returning ``app-v000``.
    """
    provider = Mock(spec=RegionScopedProviderPort)
    provider.region = region
    provider.describe_classic_link_vpcs.return_value = []
    provider.get_security_group_ids.return_value = {}
    provider.get_load_balancers_by_name.side_effect = lambda names: LoadBalancerLookupResult(
        classic_load_balancers=list(names)
    )
    provider.resolve_image.return_value = image or ResolvedImage(
        image_id="ami-12345678",
        image_name="foo",
        region=region,
        virtualization_type="hvm",
    )
    provider.describe_auto_scaling_group.return_value = None
    provider.provisioning_worker = Mock(spec=ProvisioningWorkerPort)
    provider.provisioning_worker.deploy.return_value = "app-v000"
    provider.lifecycle_hook_worker = Mock(spec=LifecycleHookWorkerPort)
    return provider


@pytest.fixture
def provider():
    """Mock provider for us-east-1."""
    return make_provider()


@pytest.fixture
def provider_factory(provider):
    """Factory returning the same mock provider for every account and region."""
    factory = Mock(spec=RegionScopedProviderFactoryPort)
    factory.for_region.return_value = provider
    return factory
