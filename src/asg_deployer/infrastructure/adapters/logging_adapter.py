"""Logging adapter implementing LoggingPort."""

import logging
from typing import Any, Optional

from asg_deployer.domain.base.ports.logging_port import LoggingPort
from asg_deployer.infrastructure.logging.logger import get_logger


class LoggingAdapter(LoggingPort):
    """
    LoggingPort backed by a package logger.

    An adapter may carry bound context, rendered as ``[key=value ...]`` in
    front of each message, so log lines of region-scoped components show
    which account and region they belong to.
    """

    def __init__(self, name: str = "deployment", context: Optional[dict[str, Any]] = None) -> None:
        self._name = name
        self._logger = get_logger(name)
        self._context = dict(context or {})
        self._prefix = " ".join(f"{key}={value}" for key, value in self._context.items())

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, **context: Any) -> "LoggingAdapter":
        return LoggingAdapter(self._name, {**self._context, **context})

    def _log(self, level: int, message: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        # caller -> debug/info/... -> _log -> Logger.log
        kwargs.setdefault("stacklevel", 3)
        if self._prefix:
            message = f"[{self._prefix}] {message}"
        self._logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, args, kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, args, kwargs)
