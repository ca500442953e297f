"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the IV-Planner backend application.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_DESTINATION_LENGTH = 100
MAX_INDUSTRY_LENGTH = 100
MIN_TRIP_DAYS = 1
MAX_TRIP_DAYS = 30
MIN_TRAVELERS = 1
MAX_TRAVELERS = 100

DEFAULT_CURRENCY = "INR"
LOCAL_STORE_KEY = "iv_planner_trips"
TRIPS_COLLECTION = "trips"

# Response constants
PLAN_GENERATION_ERROR = (
    "Something went wrong generating your trip. Please check your API key or try again."
)
TRIP_NOT_FOUND_ERROR = "Trip not found or link is invalid."

# AI Model Configuration
GEMINI_TEXT_MODEL = "gemini-2.5-flash"
GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image"

type PersistenceBackend = Literal["cloud", "local"]


@dataclass(frozen=True, slots=True)
class PersistenceConfig:
    """Explicit persistence backend selection, resolved once at startup."""

    backend: PersistenceBackend = "local"
    database_url: str | None = None
    database_echo: bool = False
    google_client_id: str | None = None
    local_store_path: Path = Path("data") / f"{LOCAL_STORE_KEY}.json"
    mock_delay: float = 0.0


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "IV-Planner Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # AI Configuration
    GEMINI_API_KEY: str | None = None
    GEMINI_TEXT_MODEL: str = GEMINI_TEXT_MODEL
    GEMINI_IMAGE_MODEL: str = GEMINI_IMAGE_MODEL
    AI_REQUEST_TIMEOUT: int = 60  # seconds

    # Logging and front end
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    LOG_LEVEL: str = "INFO"
    PUBLIC_BASE_URL: str = "http://localhost:3000"
    FRONTEND_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Persistence Configuration
    PERSISTENCE_BACKEND: PersistenceBackend = "local"
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False
    GOOGLE_CLIENT_ID: str | None = None
    LOCAL_STORE_FILE: Path = Path("data") / f"{LOCAL_STORE_KEY}.json"
    MOCK_NETWORK_DELAY: float = 0.5  # seconds

    def persistence_config(self) -> PersistenceConfig:
        """Build the persistence configuration from the environment."""
        return PersistenceConfig(
            backend=self.PERSISTENCE_BACKEND,
            database_url=self.DATABASE_URL,
            database_echo=self.DATABASE_ECHO,
            google_client_id=self.GOOGLE_CLIENT_ID,
            local_store_path=self.LOCAL_STORE_FILE,
            mock_delay=self.MOCK_NETWORK_DELAY,
        )


settings = Settings()
