"""In-memory implementation of AccountRepository for testing."""

import copy
from dataclasses import replace

from domain.model.account import Account, IdentityToken, PublicAccount
from domain.model.account_update import AccountUpdate
from domain.model.errors import DuplicateError

UNIQUE_KEYS = ('external_identity_id', 'email', 'slug')


class FakeAccountRepository:
    def __init__(self):
        self.store: dict[str, Account] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, account: Account) -> Account:
        for key in UNIQUE_KEYS:
            self._check_unique(key, getattr(account, key))
        if account.id in self.store:
            raise DuplicateError("Duplicate key: id", key='id')

        self.store[account.id] = copy.deepcopy(account)
        return copy.deepcopy(account)

    def apply_update(self, account_id: str, update: AccountUpdate) -> Account | None:
        account = self.store.get(account_id)
        if not account:
            return None

        changes = update.changes()
        if 'slug' in changes and changes['slug'] != account.slug:
            self._check_unique('slug', changes['slug'])

        for path, value in changes.items():
            if path.startswith('identity_token.'):
                token_field = path.split('.', 1)[1]
                account.identity_token = replace(account.identity_token, **{token_field: value})
            else:
                setattr(account, path, value)
        return copy.deepcopy(account)

    def _check_unique(self, key: str, value) -> None:
        if any(getattr(a, key) == value for a in self.store.values()):
            raise DuplicateError(f"Duplicate key: {key}", key=key)

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, account_id: str) -> Account | None:
        account = self.store.get(account_id)
        return copy.deepcopy(account) if account else None

    def get_public_by_external_identity(self, external_identity_id: str) -> PublicAccount | None:
        for account in self.store.values():
            if account.external_identity_id == external_identity_id:
                return PublicAccount.from_account(account)
        return None

    def find_public_by_ids(self, account_ids: list[str]) -> list[PublicAccount]:
        return [
            PublicAccount.from_account(a)
            for a in self.store.values()
            if a.id in account_ids
        ]

    def slug_exists(self, slug: str) -> bool:
        return any(a.slug == slug for a in self.store.values())

    # ── test helpers ─────────────────────────────────────────

    def token_of(self, account_id: str) -> IdentityToken:
        return copy.deepcopy(self.store[account_id].identity_token)
