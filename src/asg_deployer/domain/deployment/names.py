"""Server group naming: ``app[-stack][-detail][-vNNN]``."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

_PUSH_PATTERN = re.compile(r"^(?P<cluster>.+)-v(?P<sequence>\d{3})$")


class ServerGroupName(BaseModel):
    """Parsed components of a server group name."""

    model_config = ConfigDict(frozen=True)

    app: str
    stack: Optional[str] = None
    detail: Optional[str] = None
    sequence: Optional[int] = None

    @classmethod
    def parse(cls, name: str) -> "ServerGroupName":
        """
        Parse a server group or cluster name.

        Args:
            name: e.g. ``myapp-prod-canary-v003`` or ``myapp--canary``

        Returns:
            The parsed name; missing components are None
        """
        cluster = name
        sequence = None
        match = _PUSH_PATTERN.match(name)
        if match:
            cluster = match.group("cluster")
            sequence = int(match.group("sequence"))

        parts = cluster.split("-", 2)
        return cls(
            app=parts[0],
            stack=parts[1] if len(parts) > 1 and parts[1] else None,
            detail=parts[2] if len(parts) > 2 and parts[2] else None,
            sequence=sequence,
        )

    @property
    def cluster(self) -> str:
        return cluster_name(self.app, self.stack, self.detail)


def cluster_name(app: str, stack: Optional[str] = None, detail: Optional[str] = None) -> str:
    """Combine application, stack and detail into a cluster name."""
    if detail:
        return f"{app}-{stack or ''}-{detail}"
    if stack:
        return f"{app}-{stack}"
    return app


def server_group_name(
    app: str,
    stack: Optional[str] = None,
    detail: Optional[str] = None,
    sequence: Optional[int] = None,
) -> str:
    """Cluster name with the ``-vNNN`` push suffix when a sequence is given."""
    name = cluster_name(app, stack, detail)
    if sequence is None:
        return name
    return f"{name}-v{sequence % 1000:03d}"
