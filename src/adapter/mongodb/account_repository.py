"""MongoDB implementation of AccountRepository."""

from dataclasses import asdict, is_dataclass
from logging import getLogger
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import ACCOUNTS_COLLECTION_NAME
from domain.model.account import (
    PUBLIC_FIELDS,
    Account,
    IdentityToken,
    PaymentMethod,
    PaymentProfile,
    PublicAccount,
)
from domain.model.account_update import AccountUpdate
from domain.model.errors import DuplicateError
from port.account_repository import StorageError

logger = getLogger(__name__)

PUBLIC_PROJECTION = {('_id' if f == 'id' else f): 1 for f in PUBLIC_FIELDS}


def _duplicate_key(error: DuplicateKeyError) -> str | None:
    """Name of the unique key that was violated, if the server reported it."""
    key_pattern = (error.details or {}).get('keyPattern') or {}
    return next(iter(key_pattern), None)


class MongoAccountRepository:
    def __init__(self, db: Database):
        self.collection = db[ACCOUNTS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for accounts collection.

        The unique indexes are what settle concurrent sign-ups and slug
        allocations; the service-level existence checks are best-effort.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('external_identity_id', 1)], 'idx_accounts_external_identity', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_accounts_email', unique=True)
            create_index_safe(self.collection, [('slug', 1)], 'idx_accounts_slug', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_accounts_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create accounts indexes", extra={"error": str(e)})
            return False

    # ── document mapping ─────────────────────────────────────

    def _to_domain(self, doc: dict) -> Account:
        """Convert MongoDB document to Account domain model."""
        token = doc.get('identity_token') or {}
        profile = doc.get('payment_profile')
        method = doc.get('payment_method')
        return Account(
            id=doc['_id'],
            external_identity_id=doc['external_identity_id'],
            email=doc['email'],
            slug=doc['slug'],
            created_at=doc['created_at'],
            display_name=doc.get('display_name', ''),
            avatar_url=doc.get('avatar_url', ''),
            identity_token=IdentityToken(
                access_token=token.get('access_token'),
                refresh_token=token.get('refresh_token'),
            ),
            is_admin=doc.get('is_admin', False),
            is_github_connected=doc.get('is_github_connected', False),
            default_team_slug=doc.get('default_team_slug', ''),
            payment_profile=PaymentProfile(**profile) if profile else None,
            payment_method=PaymentMethod(**method) if method else None,
            has_payment_method=doc.get('has_payment_method', False),
        )

    def _to_public(self, doc: dict) -> PublicAccount:
        return PublicAccount(
            id=doc['_id'],
            display_name=doc.get('display_name', ''),
            email=doc['email'],
            avatar_url=doc.get('avatar_url', ''),
            slug=doc['slug'],
            is_github_connected=doc.get('is_github_connected', False),
            default_team_slug=doc.get('default_team_slug', ''),
        )

    def _to_document(self, account: Account) -> dict:
        doc = asdict(account)
        doc['_id'] = doc.pop('id')
        # Unset payment sub-documents stay absent until attachment
        for key in ('payment_profile', 'payment_method'):
            if doc[key] is None:
                del doc[key]
        return doc

    @staticmethod
    def _to_set(changes: dict[str, Any]) -> dict[str, Any]:
        return {
            path: asdict(value) if is_dataclass(value) else value
            for path, value in changes.items()
        }

    # ── write operations ─────────────────────────────────────

    def create(self, account: Account) -> Account:
        """Insert a new account document."""
        try:
            self.collection.insert_one(self._to_document(account))
        except DuplicateKeyError as e:
            key = _duplicate_key(e)
            logger.warning("Account creation failed: duplicate key", extra={
                "key": key, "externalIdentityId": account.external_identity_id,
            })
            raise DuplicateError(f"Duplicate key: {key}", key=key) from e
        except PyMongoError as e:
            logger.error("Failed to create account", extra={"error": str(e)})
            raise StorageError("Failed to create account") from e

        logger.debug("Account inserted", extra={"userId": account.id})
        return account

    def apply_update(self, account_id: str, update: AccountUpdate) -> Account | None:
        """Apply a field-scoped $set and return the updated account."""
        set_fields = self._to_set(update.changes())
        if not set_fields:
            return self.get_by_id(account_id)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': account_id},
                {'$set': set_fields},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            key = _duplicate_key(e)
            logger.warning("Account update failed: duplicate key", extra={"userId": account_id, "key": key})
            raise DuplicateError(f"Duplicate key: {key}", key=key) from e
        except PyMongoError as e:
            logger.error("Failed to update account", extra={
                "userId": account_id, "update": type(update).__name__, "error": str(e),
            })
            raise StorageError("Failed to update account") from e

        if not doc:
            return None
        return self._to_domain(doc)

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, account_id: str) -> Account | None:
        try:
            doc = self.collection.find_one({'_id': account_id})
        except PyMongoError as e:
            logger.error("Failed to get account by ID", extra={"userId": account_id, "error": str(e)})
            raise StorageError("Failed to read account") from e
        return self._to_domain(doc) if doc else None

    def get_public_by_external_identity(self, external_identity_id: str) -> PublicAccount | None:
        try:
            doc = self.collection.find_one(
                {'external_identity_id': external_identity_id},
                PUBLIC_PROJECTION,
            )
        except PyMongoError as e:
            logger.error("Failed to get account by external identity", extra={"error": str(e)})
            raise StorageError("Failed to read account") from e
        return self._to_public(doc) if doc else None

    def find_public_by_ids(self, account_ids: list[str]) -> list[PublicAccount]:
        if not account_ids:
            return []
        try:
            docs = self.collection.find({'_id': {'$in': list(account_ids)}}, PUBLIC_PROJECTION)
            return [self._to_public(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to find accounts", extra={"count": len(account_ids), "error": str(e)})
            raise StorageError("Failed to read accounts") from e

    def slug_exists(self, slug: str) -> bool:
        try:
            return self.collection.find_one({'slug': slug}, {'_id': 1}) is not None
        except PyMongoError as e:
            logger.error("Failed to check slug", extra={"slug": slug, "error": str(e)})
            raise StorageError("Failed to read accounts") from e
