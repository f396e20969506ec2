from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

# Load .env file explicitly
ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME
load_dotenv(env_path, override=False)

SUPPORTED_LOCALES = ("ja", "en", "zh")


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/harmonet.db"
    DEFAULT_LOCALE: str = "ja"
    API_BASE_URL: str = "http://localhost:3000"
    OVERLAY_TIMEOUT: float = 5.0  # seconds, per overlay request
    I18N_WARN_MISSING: bool = True

    @field_validator("DEFAULT_LOCALE", mode="before")
    @classmethod
    def check_locale(cls, v):  # type: ignore
        if v in (None, ""):
            return "ja"
        v = str(v).strip().lower()
        if v not in SUPPORTED_LOCALES:
            raise ValueError(f"DEFAULT_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}")
        return v

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings(
    DATABASE_URL=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/harmonet.db"),
    DEFAULT_LOCALE=os.getenv("DEFAULT_LOCALE", "ja"),
)
