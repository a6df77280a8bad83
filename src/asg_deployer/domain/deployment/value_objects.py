"""Deployment value objects."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from asg_deployer.domain.base.exceptions import ArgumentError


class BlockDevice(BaseModel):
    """A block device mapping, either ephemeral (virtual name) or EBS backed."""

    model_config = ConfigDict(frozen=True)

    device_name: str
    virtual_name: Optional[str] = None
    size: Optional[int] = None
    iops: Optional[int] = None
    volume_type: Optional[str] = None
    delete_on_termination: Optional[bool] = None
    snapshot_id: Optional[str] = None
    encrypted: Optional[bool] = None

    @property
    def is_ephemeral(self) -> bool:
        return self.virtual_name is not None

    def geometry(self) -> tuple[str, Optional[str], Optional[int]]:
        """Device name, virtual name and size, the fields that make up a default layout."""
        return (self.device_name, self.virtual_name, self.size)

    def to_aws_dict(self) -> dict[str, Any]:
        """Serialize to the AWS BlockDeviceMapping shape."""
        mapping: dict[str, Any] = {"DeviceName": self.device_name}
        if self.virtual_name:
            mapping["VirtualName"] = self.virtual_name
            return mapping

        ebs = {
            "VolumeSize": self.size,
            "Iops": self.iops,
            "VolumeType": self.volume_type,
            "DeleteOnTermination": self.delete_on_termination,
            "SnapshotId": self.snapshot_id,
            "Encrypted": self.encrypted,
        }
        mapping["Ebs"] = {key: value for key, value in ebs.items() if value is not None}
        return mapping

    @classmethod
    def from_aws_dict(cls, mapping: dict[str, Any]) -> "BlockDevice":
        """Build from an AWS BlockDeviceMapping of an image or launch configuration."""
        ebs = mapping.get("Ebs") or {}
        return cls(
            device_name=mapping["DeviceName"],
            virtual_name=mapping.get("VirtualName"),
            size=ebs.get("VolumeSize"),
            iops=ebs.get("Iops"),
            volume_type=ebs.get("VolumeType"),
            delete_on_termination=ebs.get("DeleteOnTermination"),
            snapshot_id=ebs.get("SnapshotId"),
            encrypted=ebs.get("Encrypted"),
        )

    @classmethod
    def from_aws_mappings(cls, mappings: list[dict[str, Any]]) -> list["BlockDevice"]:
        """Convert the mappings of an image or launch configuration, skipping suppressed devices."""
        return [cls.from_aws_dict(mapping) for mapping in mappings if "NoDevice" not in mapping]


class Capacity(BaseModel):
    """Requested group capacity; unset values are filled in at provisioning time."""

    model_config = ConfigDict(frozen=True)

    min: Optional[int] = None
    max: Optional[int] = None
    desired: Optional[int] = None


class ResolvedImage(BaseModel):
    """An image resolved to a concrete id in one region."""

    model_config = ConfigDict(frozen=True)

    image_id: str
    image_name: Optional[str] = None
    region: Optional[str] = None
    virtualization_type: Optional[str] = None
    owner_id: Optional[str] = None
    block_device_mappings: list[BlockDevice] = Field(default_factory=list)


class ClassicLinkPlan(BaseModel):
    """Classic link VPC and the ordered security group names to attach."""

    model_config = ConfigDict(frozen=True)

    vpc_id: Optional[str] = None
    security_groups: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ClassicLinkPlan":
        return cls()


class LifecycleTransition(str, Enum):
    """Lifecycle transitions a hook can be attached to."""

    EC2_INSTANCE_LAUNCHING = "autoscaling:EC2_INSTANCE_LAUNCHING"
    EC2_INSTANCE_TERMINATING = "autoscaling:EC2_INSTANCE_TERMINATING"
    EC2_INSTANCE_LAUNCH_ERROR = "autoscaling:EC2_INSTANCE_LAUNCH_ERROR"
    EC2_INSTANCE_TERMINATE_ERROR = "autoscaling:EC2_INSTANCE_TERMINATE_ERROR"

    @classmethod
    def parse(cls, value: Any) -> "LifecycleTransition":
        """
        Parse a transition from its member name, short name or AWS literal.

        Accepts ``EC2_INSTANCE_LAUNCHING``, ``EC2InstanceLaunching`` and
        ``autoscaling:EC2_INSTANCE_LAUNCHING`` alike.

        Raises:
            ArgumentError: If the value names no known transition
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip()
            for member in cls:
                aliases = {
                    member.value,
                    member.name,
                    _camel_name(member.name),
                }
                if normalized in aliases:
                    return member
        raise ArgumentError(f"Unknown lifecycle transition: {value!r}")


class LifecycleDefaultResult(str, Enum):
    """Outcome applied when a lifecycle hook times out."""

    CONTINUE = "CONTINUE"
    ABANDON = "ABANDON"

    @classmethod
    def parse(cls, value: Any) -> "LifecycleDefaultResult":
        """
        Parse a default result, case-insensitively.

        Raises:
            ArgumentError: If the value is neither CONTINUE nor ABANDON
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ArgumentError(f"Unknown lifecycle default result: {value!r}")


def _camel_name(member_name: str) -> str:
    # EC2_INSTANCE_LAUNCHING -> EC2InstanceLaunching
    head, *rest = member_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class LifecycleHook(BaseModel):
    """A lifecycle hook to attach to a newly created group."""

    model_config = ConfigDict(frozen=True)

    role_arn: Optional[str] = None
    notification_target_arn: Optional[str] = None
    lifecycle_transition: LifecycleTransition
    heartbeat_timeout: Optional[int] = 3600
    default_result: Optional[LifecycleDefaultResult] = None


class SecurityGroupSummary(BaseModel):
    """Identity of a security group as returned by a describe call."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    group_name: str
    vpc_id: Optional[str] = None


class ClassicLinkVpc(BaseModel):
    """A VPC and whether classic link is enabled for it."""

    model_config = ConfigDict(frozen=True)

    vpc_id: str
    classic_link_enabled: bool = False


class AutoScalingGroupDescription(BaseModel):
    """The parts of an existing Auto Scaling Group that deployments inherit."""

    model_config = ConfigDict(frozen=True)

    name: str
    min_size: int = 0
    max_size: int = 0
    desired_capacity: int = 0
    launch_configuration_name: Optional[str] = None


class LaunchConfigurationDescription(BaseModel):
    """The parts of an existing launch configuration that deployments inherit."""

    model_config = ConfigDict(frozen=True)

    name: str
    instance_type: Optional[str] = None
    image_id: Optional[str] = None
    block_device_mappings: list[BlockDevice] = Field(default_factory=list)
    spot_price: Optional[str] = None


class LoadBalancerSummary(BaseModel):
    """A load balancer produced by an earlier pipeline step."""

    model_config = ConfigDict(frozen=True)

    name: str
    dns_name: Optional[str] = None


class UpsertLoadBalancerResult(BaseModel):
    """Prior pipeline output listing load balancers created per region."""

    model_config = ConfigDict(frozen=True)

    load_balancers: dict[str, list[LoadBalancerSummary]] = Field(default_factory=dict)


class LoadBalancerLookupResult(BaseModel):
    """Load balancer names resolved to classic ELBs and target groups."""

    model_config = ConfigDict(frozen=True)

    classic_load_balancers: list[str] = Field(default_factory=list)
    target_group_arns: list[str] = Field(default_factory=list)
    unknown_load_balancers: list[str] = Field(default_factory=list)
