# ticketing/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    APP_NAME: str = "Ticketing API"
    APP_DESC: str = "Ticket management routes behind bearer auth"
    APP_VERSION: str = "1.0.0"

    # JWT
    JWT_SECRET: str | None = None  # required by the ticket plugin
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60

    TICKETS_PREFIX: str = "/tickets"
    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def config_from_settings(settings: Settings) -> dict:
    """Plugin options in the shape ``compose``/``register`` expect."""
    return {
        "auth": {
            "secret": settings.JWT_SECRET,
            "algorithm": settings.JWT_ALGORITHM,
            "expires_minutes": settings.JWT_EXPIRES_MINUTES,
        },
        "storage": {"url": settings.DATABASE_URL},
        "prefix": settings.TICKETS_PREFIX,
    }


__all__ = ["Settings", "get_settings", "config_from_settings"]
