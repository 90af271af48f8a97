"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first (via ``python-dotenv``) so that local development does
not require exporting variables by hand.  Defaults are provided for
every field except the MongoDB connection string; without it the
store refuses to start and every request is rejected.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Social Development Events API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Connection string for MongoDB (``mongodb://`` or ``mongodb+srv://``).
    # Left empty by default so a missing value fails closed at startup.
    mongo_uri: str = os.getenv("MONGO_URI", "")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "social_events")
    # Server selection timeout handed to the pymongo client.  This bounds
    # how long a request waits when the cluster is unreachable.
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "http://localhost:5173"))
    )

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Serverless hosts (e.g. Vercel) import ``app`` and drive it per
    # invocation; in that mode ``run.py`` must not bind a socket.
    embedded: bool = bool(os.getenv("VERCEL"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
