"""Application services implementing the deployment workflow."""

from asg_deployer.application.services.artifact_copier import PostCreationArtifactCopier
from asg_deployer.application.services.block_device_resolver import BlockDeviceResolver
from asg_deployer.application.services.classic_link_resolver import ClassicLinkResolver
from asg_deployer.application.services.deployment_planner import DeploymentPlanner
from asg_deployer.application.services.image_resolver import ImageResolver
from asg_deployer.application.services.source_attribute_copier import SourceAttributeCopier

__all__: list[str] = [
    "BlockDeviceResolver",
    "ClassicLinkResolver",
    "DeploymentPlanner",
    "ImageResolver",
    "PostCreationArtifactCopier",
    "SourceAttributeCopier",
]
