from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
import os


class Settings(BaseSettings):
    """Global app settings loaded from environment.
    - Keep defaults light for dev.
    - Override via .env or real env vars.
    """

    APP_NAME: str = "mentorship_gateway"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True

    PORT: int = 5000

    MONGODB_URI: str = "mongodb://localhost:27017/mentorship_db"

    # Attachment / message persistence service
    API_URL: str = "http://localhost:8000"
    API_TIMEOUT_SECONDS: float = 10.0
    # Extra attempts for chat message forwarding (0 = single attempt)
    MESSAGE_FORWARD_RETRIES: int = 0

    # When enabled, joining a room leaves the previously joined one
    CHAT_SINGLE_ROOM_MEMBERSHIP: bool = False

    # Raw CORS string from env (comma-separated); parsed via cors_origins property
    CORS_ORIGINS: str | None = None

    UPLOAD_DIR: str = "uploads"
    LOG_DIR: str = "logs"

    RATE_LIMIT_ENABLED: bool = True
    UPLOAD_RATE_LIMIT: str = "30/minute"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origins(self) -> List[str]:
        """Return CORS origins as a list, parsing comma-separated env string."""
        raw = self.CORS_ORIGINS or os.getenv("CORS_ORIGINS", "") or ""
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
