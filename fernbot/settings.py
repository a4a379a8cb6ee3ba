# fernbot/settings.py
import logging
import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Fern & Nannam Bot")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")
    PORT: int = Field(default=3000)

    # LINE channel
    CHANNEL_ACCESS_TOKEN: Optional[str] = None
    CHANNEL_SECRET: Optional[str] = None

    # Firebase service account (Firestore store)
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_PRIVATE_KEY_ID: Optional[str] = None
    FIREBASE_PRIVATE_KEY: Optional[str] = None
    FIREBASE_CLIENT_EMAIL: Optional[str] = None
    FIREBASE_CLIENT_ID: Optional[str] = None
    FIREBASE_CLIENT_CERT_URL: Optional[str] = None

    # search
    COLLECTION_NAME: str = Field(default="audio_content")
    ENTRIES_PATH: str = Field(default="data/entries.yaml")
    SCORING_CONFIG: Optional[str] = None
    # Strict ">" comparison; see DESIGN.md for how -1000 was picked.
    ACCEPT_THRESHOLD: float = Field(default=-1000.0)
    SUGGESTION_LIMIT: int = Field(default=3)

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def line_configured(self) -> bool:
        return bool(self.CHANNEL_ACCESS_TOKEN)

    @property
    def firebase_configured(self) -> bool:
        return bool(self.FIREBASE_PROJECT_ID)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
