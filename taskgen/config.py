"""Application settings loaded from the environment."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

BASE_DIR = Path(__file__).parent.parent

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_WEBHOOK_URL = "https://webhook.site/3afb15f6-03fd-463a-bbb1-ca67c8150fd9"
DEFAULT_STORAGE_SLOT = "ai-tasks"


class Settings(BaseModel):
    """Runtime configuration."""

    anthropic_api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = Field(0.7, ge=0.0, le=1.0)
    max_tokens: int = Field(1024, gt=0)
    webhook_url: str = DEFAULT_WEBHOOK_URL
    database_path: Path = BASE_DIR / "tasks.db"
    storage: Literal["sqlite", "memory"] = "sqlite"
    storage_slot: str = DEFAULT_STORAGE_SLOT
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file)."""
        load_dotenv()
        env = {
            "anthropic_api_key": os.getenv("ANTHROPIC_API_KEY"),
            "model": os.getenv("TASKGEN_MODEL"),
            "temperature": os.getenv("TASKGEN_TEMPERATURE"),
            "max_tokens": os.getenv("TASKGEN_MAX_TOKENS"),
            "webhook_url": os.getenv("WEBHOOK_URL"),
            "database_path": os.getenv("TASKGEN_DATABASE_PATH"),
            "storage": os.getenv("TASKGEN_STORAGE"),
            "storage_slot": os.getenv("TASKGEN_STORAGE_SLOT"),
            "log_level": os.getenv("LOG_LEVEL"),
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
        }
        return cls(**{key: value for key, value in env.items() if value})


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings."""
    return Settings.from_env()
