"""Application settings module."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    STORE_URL: str = "http://localhost:8080/store"
    STORE_TIMEOUT_SECONDS: float = 30.0
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    TXN_PAGE_SIZE: int = 5
    SUMMARY_PAGE_SIZE: int = 10

    # Reports render instants in a fixed offset (IST); storage is always UTC
    DISPLAY_UTC_OFFSET_MINUTES: int = 330

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
