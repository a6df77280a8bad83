"""Tests for BlockDeviceResolver."""

import pytest

from asg_deployer.application.services.block_device_resolver import BlockDeviceResolver
from asg_deployer.config.schemas import DeployDefaults
from asg_deployer.domain.deployment.deploy_request import DeployRequest
from asg_deployer.domain.deployment.value_objects import BlockDevice, LaunchConfigurationDescription


@pytest.mark.unit
class TestBlockDeviceResolver:
    """Test block device selection when cloning."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = BlockDeviceResolver()
        self.defaults = DeployDefaults()

    def _request(self, **kwargs):
        return DeployRequest(application="app", credentials="test", **kwargs)

    def test_explicit_block_devices_win(self):
        explicit = [BlockDevice(device_name="/dev/sdd", size=125)]
        source = LaunchConfigurationDescription(
            name="lc",
            instance_type="m3.medium",
            block_device_mappings=[BlockDevice(device_name="/dev/sdb", virtual_name="ephemeral0")],
        )

        result = self.resolver.resolve(
            self.defaults, self._request(instance_type="c4.large", block_devices=explicit), source
        )

        assert result == explicit

    def test_default_layout_is_regenerated_for_new_instance_type(self):
        source = LaunchConfigurationDescription(
            name="lc",
            instance_type="m3.medium",
            block_device_mappings=[BlockDevice(device_name="/dev/sdb", virtual_name="ephemeral0")],
        )

        result = self.resolver.resolve(self.defaults, self._request(instance_type="c4.large"), source)

        assert result == BlockDeviceResolver.for_instance_type(self.defaults, "c4.large")
        assert [device.device_name for device in result] == ["/dev/sdb", "/dev/sdc"]

    def test_default_layout_comparison_ignores_order_and_volume_type(self):
        source = LaunchConfigurationDescription(
            name="lc",
            instance_type="c4.large",
            block_device_mappings=[
                BlockDevice(device_name="/dev/sdc", size=40, volume_type="gp2"),
                BlockDevice(device_name="/dev/sdb", size=40, volume_type="gp2"),
            ],
        )

        result = self.resolver.resolve(self.defaults, self._request(instance_type="m3.large"), source)

        assert result == [BlockDevice(device_name="/dev/sdb", virtual_name="ephemeral0")]

    def test_custom_layout_is_copied_on_instance_type_change(self):
        custom = [
            BlockDevice(device_name="/dev/sdb", size=125, volume_type="io1", iops=500, encrypted=True)
        ]
        source = LaunchConfigurationDescription(
            name="lc", instance_type="m3.medium", block_device_mappings=custom
        )

        result = self.resolver.resolve(self.defaults, self._request(instance_type="m3.large"), source)

        assert result == custom

    def test_same_instance_type_copies_source_layout(self):
        source_devices = [BlockDevice(device_name="/dev/sdb", virtual_name="ephemeral0")]
        source = LaunchConfigurationDescription(
            name="lc", instance_type="m3.large", block_device_mappings=source_devices
        )

        result = self.resolver.resolve(self.defaults, self._request(instance_type="m3.large"), source)

        assert result == source_devices
        assert result is not source.block_device_mappings

    def test_is_default_layout_matches_table_devices(self):
        defaults_for_m3 = self.resolver.for_instance_type(self.defaults, "m3.large")

        assert self.resolver.is_default_layout(self.defaults, "m3.large", list(reversed(defaults_for_m3)))
        assert not self.resolver.is_default_layout(
            self.defaults, "m3.large", [BlockDevice(device_name="/dev/sdf", size=500)]
        )
        assert not self.resolver.is_default_layout(self.defaults, "m4.large", defaults_for_m3)
