"""Domain port for logging."""

from abc import ABC, abstractmethod
from typing import Any


class LoggingPort(ABC):
    """Logging interface the domain and application layers depend on."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message."""

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message."""

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message."""

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message."""

    @abstractmethod
    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log exception with traceback."""

    def bind(self, **context: Any) -> "LoggingPort":
        """Logger that adds ``context`` (e.g. account and region) to every message."""
        return self
