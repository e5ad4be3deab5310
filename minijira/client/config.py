# minijira/client/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    API_URL: str = "http://localhost:8000"
    API_PREFIX: str = "/api"
    TOKEN: str | None = None
    TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="MINIJIRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
