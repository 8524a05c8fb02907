"""Application configuration."""

import re
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "static"] = "static"
    auth_tokens: str = ""
    auth_realm: str = "Users"
    auth_scope: str | None = None
    storage_bucket: str = "emblem-art"
    storage_public_base_url: str | None = None

    model_config = SettingsConfigDict(env_prefix="EMBLEM_", extra="ignore")

    @property
    def scopes(self) -> tuple[str, ...]:
        if not self.auth_scope:
            return ()
        return tuple(part for part in re.split(r"[\s,]+", self.auth_scope) if part)

    @property
    def public_base_url(self) -> str:
        if self.storage_public_base_url:
            return self.storage_public_base_url
        return f"https://s3.amazonaws.com/{self.storage_bucket}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
