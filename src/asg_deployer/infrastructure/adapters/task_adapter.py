"""In-memory task status sink."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from asg_deployer.domain.base.ports.logging_port import LoggingPort
from asg_deployer.domain.base.ports.task_port import TaskPort


@dataclass(frozen=True)
class TaskStatus:
    """One recorded status message."""

    phase: str
    status: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryTask(TaskPort):
    """Keeps the status history of one deployment and mirrors it to the log."""

    def __init__(self, task_id: str = "deploy", logger: Optional[LoggingPort] = None) -> None:
        self.task_id = task_id
        self._logger = logger
        self._history: list[TaskStatus] = []

    def update_status(self, phase: str, status: str) -> None:
        self._history.append(TaskStatus(phase=phase, status=status))
        if self._logger:
            self._logger.info("[%s] %s: %s", self.task_id, phase, status)

    @property
    def history(self) -> list[TaskStatus]:
        return list(self._history)

    def statuses(self, phase: Optional[str] = None) -> list[str]:
        """Status messages in order, optionally only those of one phase."""
        return [entry.status for entry in self._history if phase is None or entry.phase == phase]
