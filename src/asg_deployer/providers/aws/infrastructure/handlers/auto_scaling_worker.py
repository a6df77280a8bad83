"""
Provisioning worker creating Auto Scaling Groups.

A group is created in three calls: a launch configuration named after the
group, the group itself, and optionally a suspend call for processes that
must not run yet. Group names follow ``app[-stack][-detail]-vNNN``; the
sequence continues from the highest sequence of the cluster in the region.
"""

import base64
import binascii
import json
import re
from datetime import datetime, timezone
from typing import Any, Optional

from asg_deployer.domain.base.exceptions import ArgumentError, StateError
from asg_deployer.domain.base.ports import LoggingPort, ProvisioningWorkerPort
from asg_deployer.domain.deployment.names import ServerGroupName, cluster_name, server_group_name
from asg_deployer.domain.deployment.provision_spec import ProvisionSpec
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler
from asg_deployer.providers.aws.infrastructure.services.asg_service import AutoScalingGroupService
from asg_deployer.providers.aws.infrastructure.services.security_group_service import (
    SecurityGroupService,
)

SECURITY_GROUP_ID_PATTERN = re.compile(r"^sg-[0-9a-f]+$")
SUBNET_METADATA_TAG = "immutable_metadata"
DISABLED_PROCESSES = ("Launch", "Terminate", "AddToLoadBalancer")


class AutoScalingWorker(AWSHandler, ProvisioningWorkerPort):
    """Creates a launch configuration and an Auto Scaling Group from a ProvisionSpec."""

    def __init__(
        self,
        aws_client: AWSClient,
        logger: LoggingPort,
        asg_service: Optional[AutoScalingGroupService] = None,
        security_group_service: Optional[SecurityGroupService] = None,
    ) -> None:
        super().__init__(aws_client, logger)
        self._asg_service = asg_service or AutoScalingGroupService(aws_client, logger)
        self._security_group_service = security_group_service or SecurityGroupService(
            aws_client, logger
        )

    def deploy(self, spec: ProvisionSpec) -> str:
        """
        Create the group described by ``spec``.

        Args:
            spec: Fully resolved provisioning input

        Returns:
            Name of the created group

        Raises:
            StateError: If the requested subnets or security groups cannot be found
            InfrastructureError: If an AWS call fails
        """
        asg_name = self._group_name(spec)
        subnets = self._subnets_for(spec) if spec.subnet_type else []
        vpc_id = subnets[0]["VpcId"] if subnets else None

        launch_configuration_name = self._create_launch_configuration(asg_name, spec, vpc_id)
        self._create_auto_scaling_group(asg_name, launch_configuration_name, spec, subnets)

        processes = list(dict.fromkeys(spec.suspended_processes))
        if spec.start_disabled:
            processes.extend(process for process in DISABLED_PROCESSES if process not in processes)
        if processes:
            self._call(
                self.aws_client.autoscaling_client.suspend_processes,
                "suspend_processes",
                AutoScalingGroupName=asg_name,
                ScalingProcesses=processes,
            )

        self._logger.info("Created Auto Scaling Group %s in %s", asg_name, self.region)
        return asg_name

    def _group_name(self, spec: ProvisionSpec) -> str:
        if spec.ignore_sequence:
            return cluster_name(spec.application, spec.stack, spec.free_form_details)
        sequence = spec.sequence if spec.sequence is not None else self._next_sequence(spec)
        return server_group_name(spec.application, spec.stack, spec.free_form_details, sequence)

    def _next_sequence(self, spec: ProvisionSpec) -> int:
        cluster = cluster_name(spec.application, spec.stack, spec.free_form_details)
        sequences = []
        for name in self._asg_service.list_auto_scaling_group_names():
            parsed = ServerGroupName.parse(name)
            if parsed.sequence is not None and parsed.cluster == cluster:
                sequences.append(parsed.sequence)
        if not sequences:
            return 0
        return (max(sequences) + 1) % 1000

    def _subnets_for(self, spec: ProvisionSpec) -> list[dict[str, Any]]:
        filters = [{"Name": "tag-key", "Values": [SUBNET_METADATA_TAG]}]
        if spec.availability_zones:
            filters.append({"Name": "availability-zone", "Values": list(spec.availability_zones)})

        subnets = [
            subnet
            for subnet in self._paginate(
                self.aws_client.ec2_client, "describe_subnets", "Subnets", Filters=filters
            )
            if self._subnet_purpose(subnet) == spec.subnet_type
        ]
        if not subnets:
            raise StateError(
                f"No subnets found for subnet type {spec.subnet_type} in {spec.availability_zones}",
                {"region": self.region, "subnet_type": spec.subnet_type},
            )
        return sorted(subnets, key=lambda subnet: subnet["SubnetId"])

    @staticmethod
    def _subnet_purpose(subnet: dict[str, Any]) -> Optional[str]:
        for tag in subnet.get("Tags", []):
            if tag.get("Key") != SUBNET_METADATA_TAG:
                continue
            try:
                return json.loads(tag.get("Value") or "{}").get("purpose")
            except (ValueError, AttributeError):
                return None
        return None

    def _security_group_ids(self, names_or_ids: list[str], vpc_id: Optional[str]) -> list[str]:
        names = [entry for entry in names_or_ids if not SECURITY_GROUP_ID_PATTERN.match(entry)]
        ids_by_name = self._security_group_service.get_security_group_ids(names, vpc_id) if names else {}
        missing = [name for name in names if name not in ids_by_name]
        if missing:
            raise StateError(
                f"Unable to find security groups named {missing}",
                {"region": self.region, "vpc_id": vpc_id},
            )
        return [
            entry if SECURITY_GROUP_ID_PATTERN.match(entry) else ids_by_name[entry]
            for entry in names_or_ids
        ]

    def _create_launch_configuration(
        self, asg_name: str, spec: ProvisionSpec, vpc_id: Optional[str]
    ) -> str:
        name = f"{asg_name}-{datetime.now(timezone.utc).strftime('%m%d%Y%H%M%S')}"
        params: dict[str, Any] = {
            "LaunchConfigurationName": name,
            "ImageId": spec.image_id,
            "InstanceType": spec.instance_type,
            "SecurityGroups": self._security_group_ids(spec.security_groups, vpc_id),
            "BlockDeviceMappings": [device.to_aws_dict() for device in spec.block_devices],
        }
        optional = {
            "KeyName": spec.key_pair,
            "IamInstanceProfile": spec.iam_role,
            "SpotPrice": spec.spot_price,
            "KernelId": spec.kernel_id,
            "RamdiskId": spec.ramdisk_id,
            "EbsOptimized": spec.ebs_optimized,
            "AssociatePublicIpAddress": spec.associate_public_ip_address,
            "UserData": self._decode_user_data(spec.base64_user_data),
        }
        params.update({key: value for key, value in optional.items() if value is not None})
        if spec.instance_monitoring is not None:
            params["InstanceMonitoring"] = {"Enabled": spec.instance_monitoring}

        classic_link = spec.classic_link
        if classic_link.vpc_id and not spec.subnet_type:
            params["ClassicLinkVPCId"] = classic_link.vpc_id
            if classic_link.security_groups:
                params["ClassicLinkVPCSecurityGroups"] = self._security_group_ids(
                    list(classic_link.security_groups), classic_link.vpc_id
                )

        self._call(
            self.aws_client.autoscaling_client.create_launch_configuration,
            "create_launch_configuration",
            **params,
        )
        return name

    @staticmethod
    def _decode_user_data(base64_user_data: Optional[str]) -> Optional[str]:
        # botocore base64-encodes UserData for this operation itself
        if not base64_user_data:
            return None
        try:
            return base64.b64decode(base64_user_data, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ArgumentError(f"User data is not valid base64: {e}") from e

    def _create_auto_scaling_group(
        self,
        asg_name: str,
        launch_configuration_name: str,
        spec: ProvisionSpec,
        subnets: list[dict[str, Any]],
    ) -> None:
        params: dict[str, Any] = {
            "AutoScalingGroupName": asg_name,
            "LaunchConfigurationName": launch_configuration_name,
            "MinSize": spec.min_instances,
            "MaxSize": spec.max_instances,
            "DesiredCapacity": spec.desired_instances,
        }
        if subnets:
            params["VPCZoneIdentifier"] = ",".join(subnet["SubnetId"] for subnet in subnets)
        else:
            params["AvailabilityZones"] = list(spec.availability_zones)

        optional = {
            "DefaultCooldown": spec.cooldown,
            "HealthCheckGracePeriod": spec.health_check_grace_period,
            "HealthCheckType": spec.health_check_type,
        }
        params.update({key: value for key, value in optional.items() if value is not None})
        if spec.classic_load_balancers:
            params["LoadBalancerNames"] = list(spec.classic_load_balancers)
        if spec.target_group_arns:
            params["TargetGroupARNs"] = list(spec.target_group_arns)
        if spec.termination_policies:
            params["TerminationPolicies"] = list(spec.termination_policies)
        if spec.tags:
            params["Tags"] = [
                {
                    "Key": key,
                    "Value": value,
                    "PropagateAtLaunch": True,
                    "ResourceId": asg_name,
                    "ResourceType": "auto-scaling-group",
                }
                for key, value in spec.tags.items()
            ]

        self._call(
            self.aws_client.autoscaling_client.create_auto_scaling_group,
            "create_auto_scaling_group",
            **params,
        )
