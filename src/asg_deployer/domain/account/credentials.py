"""Account credentials exposed to the deployment planner."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountLifecycleHook(BaseModel):
    """Lifecycle hook configured on an account, stored as raw strings."""

    model_config = ConfigDict(frozen=True)

    role_arn: Optional[str] = None
    notification_target_arn: Optional[str] = None
    lifecycle_transition: str
    heartbeat_timeout: Optional[int] = 3600
    default_result: Optional[str] = None


class AccountCredentials(BaseModel):
    """
    Credentials for a named account.

    Every credential variant exposes the same fields the planner reads
    (account id, default key pair, lifecycle hooks) so no caller needs to
    branch on the concrete type. ``supports_deployment`` tells the planner
    whether server groups may be deployed with these credentials.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    account_id: Optional[str] = None
    account_type: str = "generic"
    default_key_pair: Optional[str] = None
    lifecycle_hooks: list[AccountLifecycleHook] = Field(default_factory=list)

    @property
    def supports_deployment(self) -> bool:
        return False


class AmazonAccountCredentials(AccountCredentials):
    """Credentials for an AWS account that server groups can be deployed into."""

    account_type: str = "aws"
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None
    regions: list[str] = Field(default_factory=list)

    @property
    def supports_deployment(self) -> bool:
        return True
