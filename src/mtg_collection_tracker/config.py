"""Configuration management for the application."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mtg_collection_tracker.collection import DEFAULT_COLLECTION_NAME

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings, read from MTG_TRACKER_* environment variables."""

    app_name: str = "MTG Card Collection Tracker"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Collection
    collection_name: str = Field(default=DEFAULT_COLLECTION_NAME, min_length=1)
    collection_file: Path = Field(default=Path("collection.csv"))
    seed_samples: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="MTG_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
