"""Image resolution and instance type compatibility."""

from collections.abc import Sequence
from typing import Any, Optional

from asg_deployer.domain.base.exceptions import NotFoundError, ValidationError
from asg_deployer.domain.base.ports import LoggingPort, RegionScopedProviderPort
from asg_deployer.domain.deployment.instance_types import KNOWN_VIRTUALIZATION_FAMILIES, instance_family
from asg_deployer.domain.deployment.value_objects import ResolvedImage


class ImageResolver:
    """Resolves the image of a deployment and checks it against the instance type."""

    def __init__(self, logger: LoggingPort) -> None:
        self._logger = logger

    def resolve_image(
        self,
        region: str,
        image_name: Optional[str],
        prior_outputs: Sequence[Any],
        account_id: Optional[str],
        provider: RegionScopedProviderPort,
    ) -> ResolvedImage:
        """
        Resolve an image, preferring one already resolved by an earlier pipeline step.

        Raises:
            NotFoundError: If no image matches in the region
        """
        for output in prior_outputs:
            if (
                isinstance(output, ResolvedImage)
                and output.region == region
                and output.image_name == image_name
            ):
                self._logger.debug("Using image %s resolved by a prior step", output.image_id)
                return output

        image = provider.resolve_image(image_name, account_id) if image_name else None
        if image is None:
            raise NotFoundError(
                f"unable to resolve AMI imageId from {image_name}",
                {"region": region, "image_name": image_name},
            )
        return image

    @staticmethod
    def validate_instance_type(image: ResolvedImage, instance_type: Optional[str]) -> None:
        """
        Reject instance types whose family cannot run the image's virtualization type.

        Only families known to the virtualization table are checked; unknown
        virtualization types and unknown families pass.

        Raises:
            ValidationError: If the instance family does not support the virtualization type
        """
        supported_families = KNOWN_VIRTUALIZATION_FAMILIES.get(image.virtualization_type or "")
        if supported_families is None:
            return

        family = instance_family(instance_type)
        family_is_known = any(family in families for families in KNOWN_VIRTUALIZATION_FAMILIES.values())
        if family_is_known and family not in supported_families:
            raise ValidationError(
                f"Instance type {instance_type} does not support virtualization type "
                f"{image.virtualization_type}. Please select a different image or instance type.",
                {"instance_type": instance_type, "virtualization_type": image.virtualization_type},
            )
