"""
Core configuration module for the application.
Handles environment variables and application settings.
"""

import logging
import secrets
from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

MIN_SECRET_KEY_LENGTH = 32


class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    PROJECT_NAME: str = "Profile Service"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database Settings
    DB_TYPE: str = "mysql"  # Options: mysql, sqlite
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "user"
    MYSQL_PASSWORD: str = "password"
    MYSQL_DB: str = "profile_service_db"
    SQLITE_DB: str = "profiles.db"  # SQLite database file name
    CREATE_TABLES: bool = True  # Create missing tables on startup

    # Token Settings
    SECRET_KEY: str = ""
    SECRET_KEY_FALLBACKS: List[str] = []  # Previous keys still accepted for verification
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600

    # Registration Settings
    ALLOW_ADMIN_REGISTRATION: bool = False

    # Object Storage Settings
    STORAGE_DIR: str = "media"
    STORAGE_BASE_URL: str = "/media"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the configured database backend."""
        if self.DB_TYPE == "sqlite":
            return f"sqlite:///{self.SQLITE_DB}"
        if self.DB_TYPE == "mysql":
            return (
                f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}@"
                f"{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
            )
        raise ValueError(f"Unsupported DB_TYPE: {self.DB_TYPE}")

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """
        Make sure tokens are never signed with a missing or weak key.

        In debug mode a random key is generated, so tokens do not survive a
        restart. Otherwise SECRET_KEY must be provided by the environment.
        """
        if not self.SECRET_KEY:
            if not self.DEBUG:
                raise ValueError(
                    "SECRET_KEY is required when DEBUG is off. "
                    "Set SECRET_KEY in the environment or .env file."
                )
            self.SECRET_KEY = secrets.token_hex(32)
            logger.warning("Using a generated SECRET_KEY; issued tokens will not survive a restart")
        for key in [self.SECRET_KEY, *self.SECRET_KEY_FALLBACKS]:
            if len(key) < MIN_SECRET_KEY_LENGTH:
                raise ValueError(f"Signing keys must be at least {MIN_SECRET_KEY_LENGTH} characters")
        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Export settings instance
settings = get_settings()
