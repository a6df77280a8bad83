"""Domain port for account lookups."""

from abc import ABC, abstractmethod
from typing import Optional

from asg_deployer.domain.account.credentials import AccountCredentials


class AccountLookupPort(ABC):
    """Read-only view of the account/credentials store."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[AccountCredentials]:
        """Return the credentials registered under ``name``, or None."""
