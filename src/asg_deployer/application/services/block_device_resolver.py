"""Block device resolution for new server groups."""

from collections.abc import Iterable
from typing import Optional

from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.deployment.deploy_request import DeployRequest
from asg_deployer.domain.deployment.instance_types import block_devices_for_instance_type
from asg_deployer.domain.deployment.value_objects import BlockDevice, LaunchConfigurationDescription


def _device_name(geometry: tuple[str, Optional[str], Optional[int]]) -> str:
    return geometry[0]


class BlockDeviceResolver:
    """Decides which block device mappings a new server group launches with."""

    @staticmethod
    def for_instance_type(defaults: DeployDefaults, instance_type: Optional[str]) -> list[BlockDevice]:
        """Default block devices for ``instance_type`` under the configured defaults."""
        return block_devices_for_instance_type(
            instance_type,
            unknown_instance_type_block_device=defaults.unknown_instance_type_block_device,
            default_volume_type=defaults.default_block_device_type,
        )

    def is_default_layout(
        self,
        defaults: DeployDefaults,
        instance_type: Optional[str],
        devices: Iterable[BlockDevice],
    ) -> bool:
        """True when ``devices`` have the default layout of ``instance_type``."""
        layout = sorted((device.geometry() for device in devices), key=_device_name)
        default_layout = sorted(
            (device.geometry() for device in self.for_instance_type(defaults, instance_type)),
            key=_device_name,
        )
        return layout == default_layout

    def resolve(
        self,
        defaults: DeployDefaults,
        request: DeployRequest,
        source_launch_configuration: LaunchConfigurationDescription,
    ) -> list[BlockDevice]:
        """
        Determine block devices when cloning from a source launch configuration.

        Explicitly declared block devices are always used. If the instance
        type changed and the source was launched with the default layout of
        its own instance type, the defaults of the new instance type are
        generated instead. In every other case the source mappings are
        copied as-is.

        Args:
            defaults: Deployment defaults
            request: Request being planned
            source_launch_configuration: Launch configuration of the source group

        Returns:
            Block devices for the new group
        """
        if request.block_devices is not None:
            return list(request.block_devices)

        source_instance_type = source_launch_configuration.instance_type
        source_devices = source_launch_configuration.block_device_mappings

        if source_instance_type != request.instance_type and self.is_default_layout(
            defaults, source_instance_type, source_devices
        ):
            return self.for_instance_type(defaults, request.instance_type)

        return list(source_devices)
