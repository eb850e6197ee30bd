from __future__ import annotations

from dataclasses import dataclass, replace

from config import AppSettings

from .errors import ShippingConfigError

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_CACHE_TTL_SECONDS = 60.0
DEFAULT_RETRY_ATTEMPTS = 2
DEFAULT_RETRY_BACKOFF_SECONDS = 0.3
DEFAULT_QUOTES_PATH = "/quotes"


@dataclass(frozen=True)
class ShippingConfig:
    base_url: str
    token_url: str
    client_id: str
    client_secret: str
    quotes_path: str = DEFAULT_QUOTES_PATH
    user_agent: str = ""
    services: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS

    @classmethod
    def from_settings(cls, settings: AppSettings) -> ShippingConfig:
        return cls(
            base_url=settings.base_url,
            token_url=settings.token_url,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            quotes_path=settings.quotes_path,
            user_agent=settings.user_agent,
            services=settings.services,
            timeout_seconds=settings.timeout_seconds,
            cache_ttl_seconds=settings.cache_ttl_seconds,
            retry_attempts=settings.retry_attempts,
            retry_backoff_seconds=settings.retry_backoff_seconds,
        ).normalized()

    def normalized(self) -> ShippingConfig:
        """Return a copy with values trimmed and out-of-range numbers replaced by defaults."""
        return replace(
            self,
            base_url=self.base_url.strip().rstrip("/"),
            token_url=self.token_url.strip(),
            client_id=self.client_id.strip(),
            client_secret=_sanitize_secret(self.client_secret),
            quotes_path=normalize_quotes_path(self.quotes_path) or DEFAULT_QUOTES_PATH,
            user_agent=self.user_agent.strip(),
            services=self.services.strip(),
            timeout_seconds=self.timeout_seconds if self.timeout_seconds > 0 else DEFAULT_TIMEOUT_SECONDS,
            cache_ttl_seconds=self.cache_ttl_seconds if self.cache_ttl_seconds > 0 else DEFAULT_CACHE_TTL_SECONDS,
            retry_attempts=self.retry_attempts if self.retry_attempts >= 1 else DEFAULT_RETRY_ATTEMPTS,
            retry_backoff_seconds=(
                self.retry_backoff_seconds if self.retry_backoff_seconds > 0 else DEFAULT_RETRY_BACKOFF_SECONDS
            ),
        )

    def validate(self) -> None:
        missing = [
            name
            for name, value in (
                ("base_url", self.base_url),
                ("token_url", self.token_url),
                ("client_id", self.client_id),
                ("client_secret", self.client_secret),
            )
            if not value.strip()
        ]
        if missing:
            raise ShippingConfigError(f"shipping provider not fully configured, missing: {', '.join(missing)}")
        if self.client_secret.strip().startswith("REPLACE_WITH"):
            raise ShippingConfigError("shipping provider client secret is a placeholder; set a real value")


def normalize_quotes_path(path: str) -> str:
    path = path.strip()
    if not path:
        return ""
    return "/" + path.lstrip("/")


def _sanitize_secret(value: str) -> str:
    return value.strip(" \t\n\r\"'")


__all__ = ["ShippingConfig", "normalize_quotes_path"]
