"""Port definition for AccountRepository."""

from typing import Protocol

from domain.model.account import Account, PublicAccount
from domain.model.account_update import AccountUpdate


class StorageError(Exception):
    """The account store could not complete the request."""


class AccountRepository(Protocol):
    """Protocol defining the interface for account data access.

    Unique-key violations raise DuplicateError; any other storage failure
    raises StorageError. Missing records are reported as None.
    """

    def create(self, account: Account) -> Account:
        """Insert a new account. Raise DuplicateError if a unique key is taken."""
        ...

    def get_by_id(self, account_id: str) -> Account | None: ...

    def get_public_by_external_identity(self, external_identity_id: str) -> PublicAccount | None:
        """Find an account by external identity, reading only public fields."""
        ...

    def find_public_by_ids(self, account_ids: list[str]) -> list[PublicAccount]: ...

    def slug_exists(self, slug: str) -> bool: ...

    def apply_update(self, account_id: str, update: AccountUpdate) -> Account | None:
        """Apply one field-scoped update atomically. Return the updated Account or None if missing."""
        ...
