"""Copies scaling policies, alarms and scheduled actions between groups."""

import uuid
from datetime import datetime, timezone
from typing import Any

from asg_deployer.domain.base.ports import AsgReferenceCopierPort, LoggingPort, TaskPort
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler

PHASE = "COPY_ASG_REFERENCES"

_POLICY_FIELDS = (
    "PolicyType",
    "AdjustmentType",
    "MinAdjustmentStep",
    "MinAdjustmentMagnitude",
    "ScalingAdjustment",
    "Cooldown",
    "MetricAggregationType",
    "StepAdjustments",
    "EstimatedInstanceWarmup",
    "TargetTrackingConfiguration",
)

_ALARM_FIELDS = (
    "AlarmDescription",
    "ActionsEnabled",
    "MetricName",
    "Namespace",
    "Statistic",
    "ExtendedStatistic",
    "Period",
    "Unit",
    "EvaluationPeriods",
    "DatapointsToAlarm",
    "Threshold",
    "ComparisonOperator",
    "TreatMissingData",
)


class AsgReferenceCopier(AWSHandler, AsgReferenceCopierPort):
    """
    Copies artifacts referencing a source group onto a target group.

    The source side is read with the source account's client, the target
    side is written with the target account's client, so groups may live in
    different accounts and regions.
    """

    def __init__(self, source_client: AWSClient, target_client: AWSClient, logger: LoggingPort) -> None:
        super().__init__(source_client, logger)
        self.target_client = target_client

    def copy_scaling_policies_with_alarms(
        self, task: TaskPort, source_asg_name: str, target_asg_name: str
    ) -> None:
        policies = self._paginate(
            self.aws_client.autoscaling_client,
            "describe_policies",
            "ScalingPolicies",
            AutoScalingGroupName=source_asg_name,
        )
        for policy in policies:
            new_policy_name = f"{target_asg_name}-policy-{uuid.uuid4()}"
            params = {
                field: policy[field]
                for field in _POLICY_FIELDS
                if policy.get(field) not in (None, [], {})
            }
            task.update_status(
                PHASE,
                f"Creating scaling policy ({new_policy_name}) on {target_asg_name} from {source_asg_name}...",
            )
            response = self._call(
                self.target_client.autoscaling_client.put_scaling_policy,
                "put_scaling_policy",
                AutoScalingGroupName=target_asg_name,
                PolicyName=new_policy_name,
                **params,
            )
            alarm_names = [alarm["AlarmName"] for alarm in policy.get("Alarms", [])]
            if alarm_names:
                self._copy_alarms(
                    task,
                    alarm_names,
                    policy["PolicyARN"],
                    response["PolicyARN"],
                    source_asg_name,
                    target_asg_name,
                )

    def _copy_alarms(
        self,
        task: TaskPort,
        alarm_names: list[str],
        source_policy_arn: str,
        target_policy_arn: str,
        source_asg_name: str,
        target_asg_name: str,
    ) -> None:
        alarms = self._paginate(
            self.aws_client.cloudwatch_client,
            "describe_alarms",
            "MetricAlarms",
            AlarmNames=alarm_names,
        )
        for alarm in alarms:
            new_alarm_name = f"{target_asg_name}-alarm-{uuid.uuid4()}"
            params = {field: alarm[field] for field in _ALARM_FIELDS if alarm.get(field) is not None}
            params["Dimensions"] = [
                self._retarget_dimension(dimension, source_asg_name, target_asg_name)
                for dimension in alarm.get("Dimensions", [])
            ]
            for actions_key in ("AlarmActions", "OKActions", "InsufficientDataActions"):
                params[actions_key] = [
                    target_policy_arn if action == source_policy_arn else action
                    for action in alarm.get(actions_key, [])
                ]
            task.update_status(
                PHASE, f"Creating alarm ({new_alarm_name}) on {target_asg_name} from {alarm['AlarmName']}..."
            )
            self._call(
                self.target_client.cloudwatch_client.put_metric_alarm,
                "put_metric_alarm",
                AlarmName=new_alarm_name,
                **params,
            )

    @staticmethod
    def _retarget_dimension(
        dimension: dict[str, Any], source_asg_name: str, target_asg_name: str
    ) -> dict[str, Any]:
        if dimension.get("Name") == "AutoScalingGroupName" and dimension.get("Value") == source_asg_name:
            return {"Name": "AutoScalingGroupName", "Value": target_asg_name}
        return {"Name": dimension["Name"], "Value": dimension["Value"]}

    def copy_scheduled_actions_for_asg(
        self, task: TaskPort, source_asg_name: str, target_asg_name: str
    ) -> None:
        actions = self._paginate(
            self.aws_client.autoscaling_client,
            "describe_scheduled_actions",
            "ScheduledUpdateGroupActions",
            AutoScalingGroupName=source_asg_name,
        )
        now = datetime.now(timezone.utc)
        for action in actions:
            new_action_name = f"{target_asg_name}-schedule-{uuid.uuid4()}"
            params: dict[str, Any] = {
                key: action[key]
                for key in ("Recurrence", "MinSize", "MaxSize", "DesiredCapacity")
                if action.get(key) is not None
            }
            # AWS rejects start and end times in the past
            for key in ("StartTime", "EndTime"):
                value = action.get(key)
                if value is not None and value > now:
                    params[key] = value

            task.update_status(
                PHASE,
                f"Creating scheduled action ({new_action_name}) on {target_asg_name} from {source_asg_name}...",
            )
            self._call(
                self.target_client.autoscaling_client.put_scheduled_update_group_action,
                "put_scheduled_update_group_action",
                AutoScalingGroupName=target_asg_name,
                ScheduledActionName=new_action_name,
                **params,
            )
