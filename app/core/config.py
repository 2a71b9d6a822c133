"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Upload size ceiling accepted by the validator (1 GiB).
MAX_FILE_SIZE_LIMIT = 1024 * 1024 * 1024

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Storage: catalog and user records are flat JSON files under DATA_DIR.
    DATA_DIR: Path = Path(".")
    CATALOG_FILE: str = "content-data.json"
    USERS_FILE: str = "users.json"
    UPLOAD_DIR: Path = Path("uploads")
    UPLOADS_URL_PATH: str = "/uploads"
    MAX_FILE_SIZE: int = 5 * 1024 * 1024

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 24 * 60
    # Lower only for tests; bcrypt accepts 4-31.
    BCRYPT_ROUNDS: int = 12

    @property
    def catalog_path(self) -> Path:
        return self.DATA_DIR / self.CATALOG_FILE

    @property
    def users_path(self) -> Path:
        return self.DATA_DIR / self.USERS_FILE

    @field_validator("API_PREFIX", "UPLOADS_URL_PATH")
    @classmethod
    def validate_url_path(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith("/"):
            raise ValueError("URL paths must start with '/' (e.g. /api)")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("CATALOG_FILE", "USERS_FILE")
    @classmethod
    def validate_data_file(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Data file names must be set and non-empty")
        if not v.strip().endswith(".json"):
            raise ValueError("Data files must have a .json extension")
        return v.strip()

    @field_validator("MAX_FILE_SIZE")
    @classmethod
    def validate_max_file_size(cls, v: int) -> int:
        if v < 1 or v > MAX_FILE_SIZE_LIMIT:
            raise ValueError(
                "MAX_FILE_SIZE must be greater than 0 and at most 1073741824 (1 GiB)"
            )
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
