"""Tests for AsgReferenceCopier."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from asg_deployer.domain.account.credentials import AmazonAccountCredentials
from asg_deployer.domain.base.ports import LoggingPort
from asg_deployer.infrastructure.adapters.task_adapter import InMemoryTask
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient
from asg_deployer.providers.aws.infrastructure.handlers.reference_copier import (
    PHASE,
    AsgReferenceCopier,
)


def _paginated(client: Mock, pages: dict) -> None:
    client.get_paginator.side_effect = lambda operation: Mock(
        paginate=Mock(return_value=[pages[operation]])
    )


@pytest.mark.unit
class TestAsgReferenceCopierWithMocks:
    """Test field filtering and retargeting with stubbed clients."""

    def setup_method(self):
        """Set up test fixtures."""
        self.source = Mock(spec=AWSClient)
        self.source.region_name = "us-east-1"
        self.target = Mock(spec=AWSClient)
        self.target.region_name = "us-west-2"
        self.task = InMemoryTask()
        self.copier = AsgReferenceCopier(self.source, self.target, Mock(spec=LoggingPort))

    def test_policies_and_alarms_are_retargeted(self):
        source_policy_arn = "arn:aws:autoscaling:us-east-1:123456789012:scalingPolicy:source"
        _paginated(
            self.source.autoscaling_client,
            {
                "describe_policies": {
                    "ScalingPolicies": [
                        {
                            "PolicyName": "scale-up",
                            "PolicyARN": source_policy_arn,
                            "PolicyType": "SimpleScaling",
                            "AdjustmentType": "ChangeInCapacity",
                            "ScalingAdjustment": 1,
                            "Cooldown": 300,
                            "StepAdjustments": [],
                            "MinAdjustmentMagnitude": None,
                            "Alarms": [{"AlarmName": "cpu-high", "AlarmARN": "arn:alarm"}],
                        }
                    ]
                }
            },
        )
        _paginated(
            self.source.cloudwatch_client,
            {
                "describe_alarms": {
                    "MetricAlarms": [
                        {
                            "AlarmName": "cpu-high",
                            "MetricName": "CPUUtilization",
                            "Namespace": "AWS/EC2",
                            "Statistic": "Average",
                            "Period": 60,
                            "EvaluationPeriods": 2,
                            "Threshold": 80.0,
                            "ComparisonOperator": "GreaterThanThreshold",
                            "Dimensions": [
                                {"Name": "AutoScalingGroupName", "Value": "app-v001"},
                                {"Name": "Other", "Value": "x"},
                            ],
                            "AlarmActions": [source_policy_arn, "arn:sns:topic"],
                        }
                    ]
                }
            },
        )
        self.target.autoscaling_client.put_scaling_policy.return_value = {"PolicyARN": "arn:target-policy"}

        self.copier.copy_scaling_policies_with_alarms(self.task, "app-v001", "app-v002")

        policy_kwargs = self.target.autoscaling_client.put_scaling_policy.call_args.kwargs
        assert policy_kwargs["AutoScalingGroupName"] == "app-v002"
        assert policy_kwargs["PolicyName"].startswith("app-v002-policy-")
        assert policy_kwargs["ScalingAdjustment"] == 1
        assert "StepAdjustments" not in policy_kwargs
        assert "MinAdjustmentMagnitude" not in policy_kwargs

        alarm_kwargs = self.target.cloudwatch_client.put_metric_alarm.call_args.kwargs
        assert alarm_kwargs["AlarmName"].startswith("app-v002-alarm-")
        assert alarm_kwargs["Dimensions"] == [
            {"Name": "AutoScalingGroupName", "Value": "app-v002"},
            {"Name": "Other", "Value": "x"},
        ]
        assert alarm_kwargs["AlarmActions"] == ["arn:target-policy", "arn:sns:topic"]
        assert alarm_kwargs["OKActions"] == []
        assert len(self.task.statuses(PHASE)) == 2
        self.source.autoscaling_client.put_scaling_policy.assert_not_called()

    def test_policy_without_alarms_skips_alarm_lookup(self):
        _paginated(
            self.source.autoscaling_client,
            {
                "describe_policies": {
                    "ScalingPolicies": [
                        {"PolicyName": "p", "PolicyARN": "arn:p", "AdjustmentType": "ChangeInCapacity"}
                    ]
                }
            },
        )
        self.target.autoscaling_client.put_scaling_policy.return_value = {"PolicyARN": "arn:new"}

        self.copier.copy_scaling_policies_with_alarms(self.task, "app-v001", "app-v002")

        self.source.cloudwatch_client.get_paginator.assert_not_called()

    def test_scheduled_actions_drop_past_times(self):
        now = datetime.now(timezone.utc)
        _paginated(
            self.source.autoscaling_client,
            {
                "describe_scheduled_actions": {
                    "ScheduledUpdateGroupActions": [
                        {
                            "ScheduledActionName": "nightly",
                            "Recurrence": "0 2 * * *",
                            "MinSize": 0,
                            "MaxSize": 4,
                            "DesiredCapacity": None,
                            "StartTime": now - timedelta(days=1),
                            "EndTime": now + timedelta(days=30),
                        }
                    ]
                }
            },
        )

        self.copier.copy_scheduled_actions_for_asg(self.task, "app-v001", "app-v002")

        kwargs = self.target.autoscaling_client.put_scheduled_update_group_action.call_args.kwargs
        assert kwargs["ScheduledActionName"].startswith("app-v002-schedule-")
        assert kwargs["Recurrence"] == "0 2 * * *"
        assert kwargs["MinSize"] == 0
        assert "DesiredCapacity" not in kwargs
        assert "StartTime" not in kwargs
        assert kwargs["EndTime"] == now + timedelta(days=30)


@pytest.mark.aws
class TestAsgReferenceCopierWithMoto:
    """Test copying scheduled actions between moto-backed groups."""

    @mock_aws
    def test_scheduled_actions_are_copied(self, aws_credentials):
        autoscaling = boto3.client("autoscaling", region_name="us-east-1")
        autoscaling.put_scheduled_update_group_action(
            AutoScalingGroupName="app-v001",
            ScheduledActionName="nightly",
            Recurrence="0 2 * * *",
            MinSize=0,
            MaxSize=4,
        )
        credentials = AmazonAccountCredentials(name="test", account_id="123456789012")
        client = AWSClient(credentials, "us-east-1", Mock(spec=LoggingPort))
        task = InMemoryTask()

        AsgReferenceCopier(client, client, Mock(spec=LoggingPort)).copy_scheduled_actions_for_asg(
            task, "app-v001", "app-v002"
        )

        actions = autoscaling.describe_scheduled_actions(AutoScalingGroupName="app-v002")[
            "ScheduledUpdateGroupActions"
        ]
        assert len(actions) == 1
        assert actions[0]["ScheduledActionName"].startswith("app-v002-schedule-")
        assert actions[0]["Recurrence"] == "0 2 * * *"
        assert task.statuses(PHASE)[0].startswith("Creating scheduled action (app-v002-schedule-")
