"""Deploy request aggregate."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from asg_deployer.domain.deployment.value_objects import BlockDevice, Capacity, LifecycleHook


class SourceRef(BaseModel):
    """Identifies an existing group whose settings a deployment clones."""

    model_config = ConfigDict(frozen=True)

    account: Optional[str] = None
    region: Optional[str] = None
    asg_name: Optional[str] = None
    use_source_capacity: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.account and self.region and self.asg_name)

    def __str__(self) -> str:
        return f"{self.account}:{self.region}:{self.asg_name}"


class DeployRequest(BaseModel):
    """
    Declarative request to deploy a server group into one or more regions.

    The request is immutable. Planning derives a separate copy per region
    with ``model_copy(update=...)`` so that no region can see another
    region's resolved state.
    """

    model_config = ConfigDict(frozen=True)

    application: str
    stack: Optional[str] = None
    free_form_details: Optional[str] = None
    credentials: str

    # region -> availability zones, iterated in declaration order
    availability_zones: dict[str, list[str]] = Field(default_factory=dict)
    capacity: Capacity = Field(default_factory=Capacity)

    instance_type: Optional[str] = None
    ami_name: Optional[str] = None
    key_pair: Optional[str] = None
    security_groups: list[str] = Field(default_factory=list)
    load_balancers: list[str] = Field(default_factory=list)
    subnet_type: Optional[str] = None

    # None means "derive": from the source group, the image or the instance type table
    block_devices: Optional[list[BlockDevice]] = None
    use_ami_block_device_mappings: bool = False

    classic_link_vpc_id: Optional[str] = None
    classic_link_vpc_security_groups: list[str] = Field(default_factory=list)

    iam_role: Optional[str] = None
    lifecycle_hooks: list[LifecycleHook] = Field(default_factory=list)
    include_account_lifecycle_hooks: bool = True
    copy_source_scaling_policies_and_actions: bool = True
    source: SourceRef = Field(default_factory=SourceRef)

    sequence: Optional[int] = None
    ignore_sequence: bool = False
    start_disabled: bool = False
    associate_public_ip_address: Optional[bool] = None
    cooldown: Optional[int] = None
    health_check_grace_period: Optional[int] = None
    health_check_type: Optional[str] = None
    termination_policies: list[str] = Field(default_factory=list)
    suspended_processes: list[str] = Field(default_factory=list)
    spot_price: Optional[str] = None
    kernel_id: Optional[str] = None
    ramdisk_id: Optional[str] = None
    instance_monitoring: Optional[bool] = None
    ebs_optimized: Optional[bool] = None
    base64_user_data: Optional[str] = None
    tags: dict[str, str] = Field(default_factory=dict)
