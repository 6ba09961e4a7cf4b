from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FLICKR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rest_url: str = "https://api.flickr.com/services/rest"
    api_key: str | None = None
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="flickr-photos/0.1", min_length=1)

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
