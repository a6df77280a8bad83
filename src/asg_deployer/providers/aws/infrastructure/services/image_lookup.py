"""AMI lookup by id or name."""

import re
from typing import Any, Optional

from asg_deployer.domain.deployment.value_objects import BlockDevice, ResolvedImage
from asg_deployer.providers.aws.exceptions.aws_exceptions import AWSEntityNotFoundError
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler

AMI_ID_PATTERN = re.compile(r"^ami-[0-9a-f]+$")


class ImageLookupService(AWSHandler):
    """Resolves image ids and names to a single image in the client's region."""

    def resolve(self, image_name: str, account_id: Optional[str]) -> Optional[ResolvedImage]:
        """
        Resolve an image id or name.

        Names are looked up among images the account may launch, then images
        it owns, then any image with the name. The newest match wins.

        Args:
            image_name: ``ami-...`` identifier or image name
            account_id: Account used to scope name lookups

        Returns:
            The resolved image, or None when nothing matches
        """
        if AMI_ID_PATTERN.match(image_name):
            try:
                images = self._describe_images(ImageIds=[image_name])
            except AWSEntityNotFoundError:
                images = []
            return self._to_resolved_image(images, image_name)

        name_filter = [{"Name": "name", "Values": [image_name]}]
        attempts: list[dict[str, Any]] = []
        if account_id:
            attempts.append({"ExecutableUsers": [account_id]})
            attempts.append({"Owners": [account_id]})
        attempts.append({})

        for scope in attempts:
            images = self._describe_images(Filters=name_filter, **scope)
            if images:
                return self._to_resolved_image(images, image_name)

        self._logger.debug("No image named %s in %s", image_name, self.region)
        return None

    def _describe_images(self, **kwargs: Any) -> list[dict[str, Any]]:
        response = self._call(self.aws_client.ec2_client.describe_images, "describe_images", **kwargs)
        return response.get("Images", [])

    def _to_resolved_image(self, images: list[dict[str, Any]], image_name: str) -> Optional[ResolvedImage]:
        if not images:
            return None
        image = max(images, key=lambda candidate: candidate.get("CreationDate") or "")
        return ResolvedImage(
            image_id=image["ImageId"],
            image_name=image_name,
            region=self.region,
            virtualization_type=image.get("VirtualizationType"),
            owner_id=image.get("OwnerId"),
            block_device_mappings=BlockDevice.from_aws_mappings(
                image.get("BlockDeviceMappings", [])
            ),
        )
