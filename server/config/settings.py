"""Application configuration settings."""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List, Optional

# Get the server directory path
SERVER_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS: explicit list of allowed origins (the mobile app's dev servers)
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:19006",
        "http://localhost:8081",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 60

    # Proximity / recommendation defaults
    DEFAULT_NEARBY_RADIUS_METERS: float = 2000.0
    DEFAULT_TOUR_LIMIT: int = 5

    # Defaults applied to newly created users
    DEFAULT_LANGUAGES: List[str] = ["English"]
    DEFAULT_MAX_DISTANCE_METERS: int = 5000

    # Conversations
    CONVERSATION_HISTORY_LIMIT: int = 10

    # Chat assistant
    KNOWLEDGE_BASE_FILE: Optional[str] = None  # JSON override for the embedded fact tables
    RESPONSE_SEED: Optional[int] = None        # pin flavor text (demo / screenshots)

    @model_validator(mode="after")
    def _validate_defaults(self) -> "Settings":
        if self.DEFAULT_NEARBY_RADIUS_METERS < 0:
            raise ValueError("DEFAULT_NEARBY_RADIUS_METERS must not be negative")
        if self.DEFAULT_TOUR_LIMIT < 0:
            raise ValueError("DEFAULT_TOUR_LIMIT must not be negative")
        return self

    class Config:
        env_file = str(SERVER_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
