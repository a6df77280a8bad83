"""Domain port for the task status sink."""

from abc import ABC, abstractmethod


class TaskPort(ABC):
    """Append-only, human readable progress messages for the running deployment."""

    @abstractmethod
    def update_status(self, phase: str, status: str) -> None:
        """Record a status message under a phase label."""
