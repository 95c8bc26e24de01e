"""Process-wide MongoDB client and collection names."""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'accounts')
ACCOUNTS_COLLECTION_NAME = 'accounts'
TEAMS_COLLECTION_NAME = 'teams'
INVITATIONS_COLLECTION_NAME = 'invitations'

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 20,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
    # created_at values come back as aware UTC datetimes
    'tz_aware': True,
}

_client_cache: MongoClient | None = None
_ever_connected = False
_config_failed = False


def reset_client() -> None:
    global _client_cache, _ever_connected, _config_failed
    _client_cache = None
    _ever_connected = False
    _config_failed = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a pinged, cached client, reconnecting if the cached one went stale.

    Returns None when MongoDB is unreachable. A missing MONGO_URL or a
    failing first connection is treated as configuration error and not
    retried until reset_client() is called.
    """
    global _client_cache, _ever_connected, _config_failed

    if _client_cache is not None:
        if _is_alive(_client_cache):
            return _client_cache
        logger.debug("Cached MongoDB client failed ping, reconnecting")
        _client_cache = None

    if _config_failed:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL not configured")
        _config_failed = True
        return None

    try:
        client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
    except PyMongoError as e:
        logger.error("Invalid MongoDB configuration", extra={"error": str(e)[:200]})
        _config_failed = True
        return None

    if not _is_alive(client):
        client.close()
        if not _ever_connected:
            logger.error("Initial MongoDB connection failed", extra={"database": DATABASE_NAME})
            _config_failed = True
        return None

    if not _ever_connected:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    _ever_connected = True
    _client_cache = client
    return client
