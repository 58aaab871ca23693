"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./rehab_tracker.db"

    # Credentials (JWT)
    jwt_secret_key: str = "dev-secret-key-change-in-prod"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Exercise media
    upload_dir: str = "uploads/videos"
    max_upload_bytes: int = 50 * 1024 * 1024  # 50MB

    # Frontend
    frontend_url: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # App settings
    app_name: str = "Rehab Tracker"
    debug: bool = True
    seed_default_trainer: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
