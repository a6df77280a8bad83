"""Deployment result accumulated across regions."""

from pydantic import BaseModel, Field


class DeploymentResult(BaseModel):
    """Server groups created by a deployment, in region order."""

    server_group_names: list[str] = Field(default_factory=list)
    server_group_name_by_region: dict[str, str] = Field(default_factory=dict)

    def add(self, region: str, server_group_name: str) -> None:
        """Record a created group. Entries are never removed."""
        self.server_group_names.append(f"{region}:{server_group_name}")
        self.server_group_name_by_region[region] = server_group_name
