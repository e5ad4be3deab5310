# minijira/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./minijira.db")
    APP_NAME: str = "Mini Jira API"
    APP_DESC: str = "Issue tracking for users, projects and tickets"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Auth
    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Free-text ticket search; False switches to case-insensitive matching
    SEARCH_CASE_SENSITIVE: bool = True

    SEED_DEFAULTS: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str = "*"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
