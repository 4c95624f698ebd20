"""Service settings, read from the environment or a ``.env`` file."""

from enum import Enum
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_DEFAULT_JWT_SECRET = "dev-insecure-key-change-me"
_DEFAULT_STORAGE_KEY = "minioadmin"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Settings are unsafe to run with in the current environment."""


class Settings(BaseSettings):
    """
    Every field maps to the upper-case environment variable of the same name,
    e.g. ``REDIS_URL`` or ``STORAGE_BUCKET``.
    """

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated browser origins allowed to call the API"
    )

    # Primary store
    database_url: str = Field(default="sqlite:///./petrohr.db")
    # Pool tuning, PostgreSQL only.
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_timeout: int = Field(default=30)
    db_pool_recycle: int = Field(default=1800)

    # Employee read cache and project live events
    redis_url: str = Field(default="redis://localhost:6379/0")
    employee_cache_ttl_seconds: int = Field(
        default=300,
        description="How long a cached employee read stays valid"
    )

    # Object store (MinIO or any S3-compatible endpoint)
    storage_endpoint: str = Field(default="localhost:9000", description="host:port")
    storage_access_key: str = Field(default=_DEFAULT_STORAGE_KEY)
    storage_secret_key: str = Field(default=_DEFAULT_STORAGE_KEY)
    storage_secure: bool = Field(default=False)
    storage_bucket: str = Field(default="petrohr-documents")
    storage_public_url: str = Field(
        default="",
        description="Base URL documents are served from; derived from the endpoint when empty"
    )
    purge_storage_on_folder_delete: bool = Field(
        default=False,
        description="Also delete the stored files of a deleted folder subtree"
    )
    upload_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Per-file upload limit"
    )

    # Bearer auth. With auth disabled every caller is an anonymous admin.
    auth_enabled: bool = Field(default=False)
    jwt_secret_key: str = Field(default=_DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="'json' or 'text'")

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator('employee_cache_ttl_seconds', 'upload_max_bytes')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Must be a positive integer")
        return v

    def get_cors_origins(self) -> List[str]:
        """Configured origins as a list. A ``*`` entry is refused."""
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            raise ValueError("CORS_ALLOWED_ORIGINS must list explicit origins, not '*'")
        return origins

    def get_storage_public_url(self) -> str:
        if self.storage_public_url:
            return self.storage_public_url.rstrip("/")
        scheme = "https" if self.storage_secure else "http"
        return f"{scheme}://{self.storage_endpoint}/{self.storage_bucket}"

    def uses_default_jwt_secret(self) -> bool:
        return self.jwt_secret_key == _DEFAULT_JWT_SECRET

    def insecure_settings(self) -> List[str]:
        """Human-readable list of settings that are only fine for local use."""
        problems = []
        if self.uses_default_jwt_secret():
            problems.append("JWT_SECRET_KEY is the built-in development key (generate one: openssl rand -hex 32)")
        if not self.auth_enabled:
            problems.append("AUTH_ENABLED is false, every endpoint is open")
        if _DEFAULT_STORAGE_KEY in (self.storage_access_key, self.storage_secret_key):
            problems.append("STORAGE_ACCESS_KEY / STORAGE_SECRET_KEY use the MinIO defaults")
        local = [o for o in self.get_cors_origins() if "localhost" in o or "127.0.0.1" in o]
        if local:
            problems.append(f"CORS_ALLOWED_ORIGINS includes local origins: {local}")
        return problems

    def validate_production_config(self) -> None:
        """Raise ConfigurationError in production if any insecure setting remains.

        Development tolerates them; main.py logs each one at startup.
        """
        problems = self.insecure_settings()
        if problems and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Refusing to start in production:\n  - " + "\n  - ".join(problems)
            )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
