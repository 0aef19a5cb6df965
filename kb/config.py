"""
Centralized Configuration for the privacy knowledge-base service.

All runtime constants and paths shared across modules are defined here.
This avoids scattering magic values across the codebase.

Usage:
    from kb.config import settings
"""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables and defaults."""

    # --- Paths ---
    PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

    DATABASE_PATH: Path = Field(
        default=Path(__file__).resolve().parent.parent / "data" / "database.db",
        description="SQLite file holding the reference tables."
    )

    @property
    def LOCALE_DIR(self) -> Path:
        return self.PROJECT_ROOT / "locale"

    @property
    def DATASET_FILE(self) -> Path:
        return self.PROJECT_ROOT / "data" / "dataset.json"

    # --- Localization ---
    TEXT_DOMAIN: str = "kb"

    # --- Language Negotiation ---
    DEFAULT_LANGUAGE: str = "en"
    DIRECTORY_FALLBACK_LANGUAGE: str = "en"

    # --- Ingestion ---
    BATCH_SIZE: int = 500

    # --- Service ---
    API_TITLE: str = "Privacy Knowledge Base"
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
