"""Settings read from the environment (and a local .env file, if present)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    mongo_uri: str
    mongo_database: str
    api_url: str | None
    log_level: str


def get_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        mongo_database=os.getenv("MONGO_DATABASE", "standings"),
        api_url=os.getenv("STANDINGS_API_URL") or None,
        log_level=os.getenv("STANDINGS_LOG_LEVEL", "INFO").upper(),
    )
