from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    tmdb_api_key: Optional[str] = None
    letterboxd_base_url: str = "https://letterboxd.com"
    user_agent: str = "Mozilla/5.0"
    request_timeout: float = 10.0
    poster_timeout: float = 5.0
    max_concurrency: Optional[int] = None  # None = every page at once
    default_username: str = "floxd"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("user_agent")
    @classmethod
    def _user_agent_not_blank(cls, value: str) -> str:
        # Letterboxd rejects requests with an empty agent.
        if not value.strip():
            raise ValueError("user_agent must not be empty")
        return value

    @field_validator("max_concurrency")
    @classmethod
    def _concurrency_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_concurrency must be at least 1")
        return value


settings = Settings()
