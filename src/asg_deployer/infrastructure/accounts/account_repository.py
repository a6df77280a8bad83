"""Account repository backed by configuration."""

from collections.abc import Iterable
from typing import Optional

from asg_deployer.domain.account.credentials import AccountCredentials
from asg_deployer.domain.base.ports.account_port import AccountLookupPort


class InMemoryAccountRepository(AccountLookupPort):
    """Read-only account lookup over a fixed set of credentials."""

    def __init__(self, accounts: Iterable[AccountCredentials] = ()) -> None:
        self._accounts: dict[str, AccountCredentials] = {}
        for account in accounts:
            self._accounts[account.name] = account

    def get_by_name(self, name: str) -> Optional[AccountCredentials]:
        return self._accounts.get(name)

    def names(self) -> list[str]:
        return sorted(self._accounts)
