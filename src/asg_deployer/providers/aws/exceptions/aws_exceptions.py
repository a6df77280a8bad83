"""AWS-specific exceptions and ClientError translation."""

from botocore.exceptions import ClientError

from asg_deployer.domain.base.exceptions import InfrastructureError


class AWSValidationError(InfrastructureError):
    """AWS rejected the request parameters."""


class QuotaExceededError(InfrastructureError):
    """An account or service limit was reached."""


class ResourceInUseError(InfrastructureError):
    """The resource is in use and cannot be changed."""


class AuthorizationError(InfrastructureError):
    """The credentials are not allowed to perform the operation."""


class RateLimitError(InfrastructureError):
    """AWS throttled the request."""


class AWSEntityNotFoundError(InfrastructureError):
    """The referenced AWS resource does not exist."""


class NetworkError(InfrastructureError):
    """AWS could not be reached or timed out."""


class AWSConfigurationError(InfrastructureError):
    """The AWS session could not be set up."""


def convert_client_error(error: ClientError, operation_name: str = "unknown") -> InfrastructureError:
    """Convert an AWS ClientError to a domain exception."""
    error_code = error.response.get("Error", {}).get("Code", "Unknown")
    error_message = error.response.get("Error", {}).get("Message", str(error))
    details = {"operation": operation_name}

    if error_code in ["ValidationError", "InvalidParameterValue"]:
        return AWSValidationError(error_message, details, error_code)
    elif error_code in ["LimitExceeded", "InstanceLimitExceeded"]:
        return QuotaExceededError(error_message, details, error_code)
    elif error_code in ["ResourceInUse", "ResourceInUseFault"]:
        return ResourceInUseError(error_message, details, error_code)
    elif error_code in ["UnauthorizedOperation", "AccessDenied"]:
        return AuthorizationError(error_message, details, error_code)
    elif error_code in ["RequestLimitExceeded", "Throttling"]:
        return RateLimitError(error_message, details, error_code)
    elif error_code in ["ResourceNotFound", "InvalidGroup.NotFound", "InvalidAMIID.NotFound"]:
        return AWSEntityNotFoundError(error_message, details, error_code)
    elif error_code in ["RequestTimeout", "ServiceUnavailable"]:
        return NetworkError(error_message, details, error_code)
    else:
        return InfrastructureError(f"AWS Error: {error_code} - {error_message}", details, error_code)
