"""Static instance type tables."""

from typing import Optional

from asg_deployer.domain.deployment.value_objects import BlockDevice

# Instance families each virtualization type is known to support.
KNOWN_VIRTUALIZATION_FAMILIES: dict[str, tuple[str, ...]] = {
    "paravirtual": ("c1", "c3", "hi1", "hs1", "m1", "m2", "m3", "t1"),
    "hvm": ("c3", "c4", "d2", "i2", "g2", "r3", "m3", "m4", "t2"),
}

EBS_ONLY_VOLUME_SIZE = 40


def instance_family(instance_type: Optional[str]) -> str:
    """Return the family of an instance type (``m3`` for ``m3.large``)."""
    if not instance_type or "." not in instance_type:
        return ""
    return instance_type.split(".", 1)[0]


def _ephemeral(count: int) -> tuple[BlockDevice, ...]:
    # /dev/sdb -> ephemeral0, /dev/sdc -> ephemeral1, ...
    return tuple(
        BlockDevice(device_name=f"/dev/sd{chr(ord('b') + index)}", virtual_name=f"ephemeral{index}")
        for index in range(count)
    )


def _ebs_only() -> tuple[BlockDevice, ...]:
    return (
        BlockDevice(device_name="/dev/sdb", size=EBS_ONLY_VOLUME_SIZE),
        BlockDevice(device_name="/dev/sdc", size=EBS_ONLY_VOLUME_SIZE),
    )


BLOCK_DEVICES_BY_INSTANCE_TYPE: dict[str, tuple[BlockDevice, ...]] = {
    "c1.medium": _ephemeral(1),
    "c1.xlarge": _ephemeral(4),
    "c3.large": _ephemeral(2),
    "c3.xlarge": _ephemeral(2),
    "c3.2xlarge": _ephemeral(2),
    "c3.4xlarge": _ephemeral(2),
    "c3.8xlarge": _ephemeral(2),
    "c4.large": _ebs_only(),
    "c4.xlarge": _ebs_only(),
    "c4.2xlarge": _ebs_only(),
    "c4.4xlarge": _ebs_only(),
    "c4.8xlarge": _ebs_only(),
    "d2.xlarge": _ephemeral(3),
    "d2.2xlarge": _ephemeral(6),
    "d2.4xlarge": _ephemeral(12),
    "d2.8xlarge": _ephemeral(24),
    "g2.2xlarge": _ephemeral(1),
    "g2.8xlarge": _ephemeral(2),
    "hi1.4xlarge": _ephemeral(2),
    "hs1.8xlarge": _ephemeral(24),
    "i2.xlarge": _ephemeral(1),
    "i2.2xlarge": _ephemeral(2),
    "i2.4xlarge": _ephemeral(4),
    "i2.8xlarge": _ephemeral(8),
    "m1.small": _ephemeral(1),
    "m1.medium": _ephemeral(1),
    "m1.large": _ephemeral(2),
    "m1.xlarge": _ephemeral(4),
    "m2.xlarge": _ephemeral(1),
    "m2.2xlarge": _ephemeral(1),
    "m2.4xlarge": _ephemeral(2),
    "m3.medium": _ephemeral(1),
    "m3.large": _ephemeral(1),
    "m3.xlarge": _ephemeral(2),
    "m3.2xlarge": _ephemeral(2),
    "m4.large": _ebs_only(),
    "m4.xlarge": _ebs_only(),
    "m4.2xlarge": _ebs_only(),
    "m4.4xlarge": _ebs_only(),
    "m4.10xlarge": _ebs_only(),
    "r3.large": _ephemeral(1),
    "r3.xlarge": _ephemeral(1),
    "r3.2xlarge": _ephemeral(1),
    "r3.4xlarge": _ephemeral(1),
    "r3.8xlarge": _ephemeral(2),
    "t1.micro": (),
    "t2.nano": (),
    "t2.micro": (),
    "t2.small": (),
    "t2.medium": (),
    "t2.large": (),
}


def block_devices_for_instance_type(
    instance_type: Optional[str],
    unknown_instance_type_block_device: Optional[BlockDevice] = None,
    default_volume_type: Optional[str] = None,
) -> list[BlockDevice]:
    """
    Default block device layout for an instance type.

    Args:
        instance_type: Instance type such as ``m3.large``
        unknown_instance_type_block_device: Device used for types missing from the table
        default_volume_type: Volume type applied to generated EBS devices

    Returns:
        A new list of block devices; empty when nothing applies
    """
    devices = BLOCK_DEVICES_BY_INSTANCE_TYPE.get(instance_type or "")
    if devices is None:
        devices = (unknown_instance_type_block_device,) if unknown_instance_type_block_device else ()

    if default_volume_type:
        devices = tuple(
            device
            if device.is_ephemeral or device.volume_type
            else device.model_copy(update={"volume_type": default_volume_type})
            for device in devices
        )
    return list(devices)
