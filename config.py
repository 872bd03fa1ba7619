from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and `.env`."""

    # Service Info
    SERVICE_NAME: str = "islamic-hub-api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Document store
    DATABASE_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "islamic-hub"
    DATABASE_TIMEOUT_MS: int = 30000

    # Identity
    JWT_SECRET: str = "your-secret-key"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_COOKIE_NAME: str = "token"
    TOKEN_EXPIRE_DAYS: int = 7

    # Writes against an unreachable store answer with a synthetic record
    DEMO_WRITES: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
