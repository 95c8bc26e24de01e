"""MongoDB implementation of InvitationRepository (read-only)."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import INVITATIONS_COLLECTION_NAME
from port.account_repository import StorageError

logger = getLogger(__name__)


class MongoInvitationRepository:
    def __init__(self, db: Database):
        self.collection = db[INVITATIONS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_invitations_email')
            return True
        except PyMongoError as e:
            logger.error("Failed to create invitations indexes", extra={"error": str(e)})
            return False

    def count_pending(self, email: str) -> int:
        """Invitations are deleted once accepted, so every stored one is pending."""
        try:
            return self.collection.count_documents({'email': email})
        except PyMongoError as e:
            logger.error("Failed to count invitations", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to read invitations") from e
