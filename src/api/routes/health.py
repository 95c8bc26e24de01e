"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client
from utils.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb() -> dict:
    client = get_mongodb_client()
    if not client:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        logger.warning("Health ping failed", extra={"error": str(e)[:200]})
        return {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}
    return {"status": "healthy", "message": "Connection successful"}


def _integrations() -> dict:
    """Which outbound integrations have credentials. Not reachability checks."""
    settings = get_settings()
    return {
        "google": bool(settings.google_client_id),
        "stripe": bool(settings.stripe_secret_key),
        "email": bool(settings.email_from_address),
        "mailchimp": bool(settings.mailchimp_api_key and settings.mailchimp_list_ids),
    }


@router.get("")
async def health():
    """MongoDB is the only hard dependency; payment and notification providers are reported as configured or not."""
    mongodb = _check_mongodb()
    healthy = mongodb["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {"mongodb": mongodb},
        "integrations": _integrations(),
    }
    return JSONResponse(
        content=body,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
