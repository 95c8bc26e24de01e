"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
"""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
_CONFLICT_CODES = {85, 86}


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an existing one that conflicts with it.

    A conflict is either the same name with a different key spec, or the
    same key spec under a different name / different options (e.g. an
    index that later became unique). The conflicting index is dropped and
    the desired one recreated.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in _CONFLICT_CODES:
            raise
        return _replace_conflicting(collection, keys, name, **kwargs)


def _replace_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    wanted_keys = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        if idx_name != name and dict(idx_info.get('key', [])) != wanted_keys:
            continue

        logger.warning("Dropping conflicting index", extra={
            "collection": collection.name, "index": idx_name,
        })
        collection.drop_index(idx_name)
        collection.create_index(keys, name=name, **kwargs)
        logger.info("Recreated index", extra={"collection": collection.name, "index": name})
        return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.account_repository import MongoAccountRepository
    from adapter.mongodb.invitation_repository import MongoInvitationRepository

    results = [
        MongoAccountRepository(db).ensure_indexes(),
        MongoInvitationRepository(db).ensure_indexes(),
    ]
    return all(results)
