"""Tests for ClassicLinkResolver."""

from unittest.mock import Mock

import pytest

from asg_deployer.application.services.classic_link_resolver import ClassicLinkResolver
from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.base.exceptions import ArgumentError, ResolutionError
from asg_deployer.domain.base.ports import LoggingPort
from asg_deployer.domain.deployment.deploy_request import DeployRequest, SourceRef
from asg_deployer.domain.deployment.source_snapshot import SourceSnapshot
from asg_deployer.domain.deployment.value_objects import (
    AutoScalingGroupDescription,
    ClassicLinkPlan,
    ClassicLinkVpc,
    SecurityGroupSummary,
)
from asg_deployer.infrastructure.adapters.task_adapter import InMemoryTask
from conftest import make_provider


@pytest.mark.unit
class TestClassicLinkResolver:
    """Test classic link security group resolution."""

    def setup_method(self):
        """Set up test fixtures."""
        self.task = InMemoryTask()
        self.defaults = DeployDefaults(classic_link_security_group_name="nf-classiclink")
        self.provider = make_provider()
        self.provider.describe_classic_link_vpcs.return_value = [
            ClassicLinkVpc(vpc_id="vpc-disabled", classic_link_enabled=False),
            ClassicLinkVpc(vpc_id="vpc-123", classic_link_enabled=True),
        ]

    def _resolver(self, **defaults):
        deploy_defaults = self.defaults.model_copy(update=defaults)
        return ClassicLinkResolver(deploy_defaults, self.task, Mock(spec=LoggingPort))

    def _request(self, **kwargs):
        kwargs.setdefault("application", "foo")
        return DeployRequest(credentials="test", **kwargs)

    def test_vpc_deployment_gets_empty_plan(self):
        plan = self._resolver().resolve("us-east-1", "internal", self._request(), self.provider)

        assert plan == ClassicLinkPlan.empty()
        self.provider.describe_classic_link_vpcs.assert_not_called()

    def test_region_without_classic_link_vpc_gets_empty_plan(self):
        self.provider.describe_classic_link_vpcs.return_value = [
            ClassicLinkVpc(vpc_id="vpc-disabled", classic_link_enabled=False)
        ]

        plan = self._resolver().resolve("us-east-1", None, self._request(), self.provider)

        assert plan.vpc_id is None
        assert plan.security_groups == ()
        assert self.task.statuses() == []

    def test_explicit_groups_and_account_default_are_attached(self):
        request = self._request(classic_link_vpc_security_groups=["explicit", "nf-classiclink"])

        plan = self._resolver().resolve("us-east-1", None, request, self.provider)

        assert plan.vpc_id == "vpc-123"
        assert plan.security_groups == ("explicit", "nf-classiclink")
        assert self.task.statuses() == [
            "Attaching ['explicit', 'nf-classiclink'] as classicLinkVpcSecurityGroups"
        ]

    def test_group_ids_are_resolved_to_names(self):
        self.provider.describe_security_groups.return_value = [
            SecurityGroupSummary(group_id="sg-12345678", group_name="resolved", vpc_id="vpc-123"),
        ]
        request = self._request(
            classic_link_vpc_id="vpc-123",
            classic_link_vpc_security_groups=["sg-12345678", "named"],
        )

        plan = self._resolver().resolve("us-east-1", None, request, self.provider)

        assert plan.security_groups == ("named", "nf-classiclink", "resolved")
        self.provider.describe_security_groups.assert_called_once_with(["sg-12345678"])

    def test_group_ids_are_resolved_through_source_provider(self):
        source_provider = make_provider("us-west-1")
        source_provider.describe_security_groups.return_value = [
            SecurityGroupSummary(group_id="sg-abcdef12", group_name="from-source", vpc_id="vpc-src"),
        ]
        snapshot = SourceSnapshot(
            source=SourceRef(account="prod", region="us-west-1", asg_name="foo-v001"),
            provider=source_provider,
            auto_scaling_group=AutoScalingGroupDescription(name="foo-v001"),
        )
        request = self._request(
            classic_link_vpc_id="vpc-src", classic_link_vpc_security_groups=["sg-abcdef12"]
        )

        plan = self._resolver().resolve("us-east-1", None, request, self.provider, snapshot)

        assert plan.security_groups == ("nf-classiclink", "from-source")
        self.provider.describe_security_groups.assert_not_called()

    def test_unresolvable_group_ids_raise(self):
        self.provider.describe_security_groups.return_value = [
            SecurityGroupSummary(group_id="sg-12345678", group_name="other-vpc", vpc_id="vpc-999"),
        ]
        request = self._request(
            classic_link_vpc_id="vpc-123", classic_link_vpc_security_groups=["sg-12345678"]
        )

        with pytest.raises(ResolutionError, match="failed to look up classic link security groups"):
            self._resolver().resolve("us-east-1", None, request, self.provider)

    def test_app_groups_are_added_up_to_the_maximum(self):
        self.provider.get_security_group_ids.return_value = {
            "foo": "sg-1",
            "foo-bar": "sg-2",
            "foo-bar-baz": "sg-3",
        }
        request = self._request(stack="bar", free_form_details="baz")
        resolver = self._resolver(add_app_groups_to_classic_link=True, max_classic_link_security_groups=3)

        plan = resolver.resolve("us-east-1", None, request, self.provider)

        assert plan.security_groups == ("nf-classiclink", "foo", "foo-bar")
        self.provider.get_security_group_ids.assert_called_once_with(
            ["foo", "foo-bar", "foo-bar-baz"], "vpc-123"
        )
        assert (
            "Not adding foo-bar-baz to classicLinkVpcSecurityGroups, already have 3 groups"
            in self.task.statuses()
        )

    def test_missing_app_groups_are_skipped(self):
        self.provider.get_security_group_ids.return_value = {"foo-bar": "sg-2"}
        request = self._request(stack="bar")
        resolver = self._resolver(add_app_groups_to_classic_link=True)

        plan = resolver.resolve("us-east-1", None, request, self.provider)

        assert plan.security_groups == ("nf-classiclink", "foo-bar")

    def test_stale_source_cluster_groups_are_dropped(self):
        request = self._request(
            classic_link_vpc_security_groups=["oldapp", "oldapp-oldstack", "keep"],
            source=SourceRef(account="prod", region="us-east-1", asg_name="oldapp-oldstack-v001"),
        )
        resolver = self._resolver(add_app_groups_to_classic_link=True)

        plan = resolver.resolve("us-east-1", None, request, self.provider)

        assert plan.security_groups == ("keep", "nf-classiclink")

    def test_matching_source_cluster_groups_are_kept(self):
        self.provider.get_security_group_ids.return_value = {}
        request = self._request(
            stack="bar",
            classic_link_vpc_security_groups=["foo", "foo-bar"],
            source=SourceRef(account="prod", region="us-east-1", asg_name="foo-bar-v001"),
        )
        resolver = self._resolver(add_app_groups_to_classic_link=True)

        plan = resolver.resolve("us-east-1", None, request, self.provider)

        assert plan.security_groups == ("foo", "foo-bar", "nf-classiclink")

    def test_too_many_declared_groups_raise(self):
        request = self._request(classic_link_vpc_security_groups=["a", "b"])

        with pytest.raises(ArgumentError, match="Too many classic link security groups"):
            self._resolver(max_classic_link_security_groups=2).resolve(
                "us-east-1", None, request, self.provider
            )

    def test_resolution_is_idempotent(self):
        self.provider.get_security_group_ids.return_value = {"foo": "sg-1"}
        request = self._request(classic_link_vpc_security_groups=["explicit"])
        resolver = self._resolver(add_app_groups_to_classic_link=True)

        first = resolver.resolve("us-east-1", None, request, self.provider)
        second = resolver.resolve("us-east-1", None, request, self.provider)

        assert first == second
        assert len(first.security_groups) <= self.defaults.max_classic_link_security_groups
