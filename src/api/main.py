"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time (api.security)
load_dotenv()

# main.py is at <root>/src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import accounts, health, teams
from utils.config import get_settings
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Account Service"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: ensure MongoDB indexes on startup."""
    client = get_mongodb_client()
    if client:
        if ensure_all_indexes(client[DATABASE_NAME]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    if not get_settings().email_from_address:
        logger.warning("EMAIL_SUPPORT_FROM_ADDRESS not set; welcome emails will be rejected")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Account lifecycle API: sign-in, profiles, payment profiles and team members",
    version=VERSION,
    lifespan=lifespan,
)

# Wildcard origins cannot be combined with credentials
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning("CORS configured with wildcard origin ('*'). Set CORS_ORIGINS for production.")
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts.router)
app.include_router(teams.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
