"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "testdb"
    mongo_collection: str = "users"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    request_timeout_seconds: float = 5.0
    connect_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
