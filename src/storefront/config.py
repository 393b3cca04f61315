"""Application settings loaded from the environment.

Persistence, broker and event store wiring lives in ``domain.toml``; this
module carries everything else the storefront needs at runtime.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from ``STOREFRONT_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Authentication
    jwt_secret_key: str = "CHANGE-ME-storefront-jwt-signing-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 120
    password_hash_rounds: int = 12

    # Payments (Stripe)
    stripe_secret_key: str = ""
    currency: str = "usd"

    # Fallback origin for checkout redirects when the request carries no Referer
    public_url: str = "http://localhost:3000"

    # Logging. An empty level picks one from PROTEAN_ENV.
    log_dir: str = "logs"
    log_level: str = ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
