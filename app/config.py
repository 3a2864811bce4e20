"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List
import logging


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - PostgreSQL for production, SQLite for local
    DATABASE_URL: str = ""  # PostgreSQL connection string (production)
    DATABASE_PATH: str = "data/littlesteps.db"  # SQLite path (local fallback)
    USE_POSTGRES: bool = False  # Set to True to use PostgreSQL

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "LittleSteps Forecaster"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Forecast rules
    TREND_WINDOW_MONTHS: int = 12
    GRADUATING_SOON_MONTHS: int = 3
    GRADUATING_NEXT_MONTH: int = 1
    NEAR_CAPACITY_RATIO: float = 0.9
    HIGH_AVAILABILITY_RATIO: float = 0.6

    # Forecast slider range (months relative to today)
    MIN_OFFSET_MONTHS: int = -12
    MAX_OFFSET_MONTHS: int = 24

    @property
    def database_url(self) -> str:
        """Get database URL - PostgreSQL if configured, else SQLite."""
        if self.USE_POSTGRES and self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATABASE_PATH}"

    @property
    def is_postgres(self) -> bool:
        """Check if using PostgreSQL."""
        return self.USE_POSTGRES and bool(self.DATABASE_URL)

    @property
    def base_dir(self) -> Path:
        """Get base directory of the project."""
        return Path(__file__).parent.parent

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance
settings = Settings()


def setup_logging():
    """Configure root logging once for the whole application."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )


def ensure_directories():
    """Create the SQLite data directory if it doesn't exist."""
    if settings.is_postgres:
        return
    db_dir = Path(settings.DATABASE_PATH).parent
    db_dir.mkdir(parents=True, exist_ok=True)
