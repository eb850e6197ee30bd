from __future__ import annotations

from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    base_url: str
    token_url: str
    client_id: str
    client_secret: str
    quotes_path: str = "/quotes"
    user_agent: str = "shipping-quote-client/0.1"
    services: str = "1,2,17"
    origin_postal_code: str = ""
    timeout_seconds: float = 15.0
    cache_ttl_seconds: float = 60.0
    retry_attempts: int = 2
    retry_backoff_seconds: float = 0.3

    model_config = SettingsConfigDict(
        env_prefix="SHIPPING_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@cache
def config() -> AppSettings:
    return AppSettings()  # type: ignore[call-arg]
