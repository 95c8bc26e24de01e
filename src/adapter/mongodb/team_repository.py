"""MongoDB implementation of TeamRepository (read-only)."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import TEAMS_COLLECTION_NAME
from domain.model.team import Team
from port.account_repository import StorageError

logger = getLogger(__name__)


class MongoTeamRepository:
    def __init__(self, db: Database):
        self.collection = db[TEAMS_COLLECTION_NAME]

    def get_by_id(self, team_id: str) -> Team | None:
        """Find a team by ID. Return Team or None if not found."""
        try:
            doc = self.collection.find_one(
                {'_id': team_id},
                {'name': 1, 'slug': 1, 'member_ids': 1},
            )
        except PyMongoError as e:
            logger.error("Failed to get team by ID", extra={"teamId": team_id, "error": str(e)})
            raise StorageError("Failed to read team") from e

        if not doc:
            return None
        return Team(
            id=doc['_id'],
            name=doc.get('name', ''),
            slug=doc.get('slug', ''),
            member_ids=list(doc.get('member_ids') or []),
        )
