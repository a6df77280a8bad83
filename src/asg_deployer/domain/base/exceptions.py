"""Domain exceptions raised while planning and executing a deployment."""

from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all deployment errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ArgumentError(DomainException):
    """Input is malformed or references something that cannot be used."""


class NotFoundError(ArgumentError):
    """A referenced entity (image, account) could not be resolved."""


class ValidationError(ArgumentError):
    """Input violates a business rule, e.g. instance type vs virtualization."""


class PreconditionError(DomainException):
    """An operation was requested without the state it depends on."""


class ResolutionError(DomainException):
    """Identifiers could not be reconciled back to names."""


class StateError(DomainException):
    """A referenced resource is not in the expected state or does not exist."""


class ConfigurationError(DomainException):
    """Configuration could not be loaded or is invalid."""


class InfrastructureError(DomainException):
    """A provider call failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.error_code = error_code
