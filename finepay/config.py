"""Application configuration via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finepay import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Fine Payment Bridge"
    app_version: str = __version__
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    workers: int = 1

    # CORS
    cors_origins: List[str] = ["*"]

    # Stripe (required)
    stripe_secret_key: str = Field(..., min_length=1)
    stripe_webhook_secret: str = Field(..., min_length=1)
    webhook_tolerance_seconds: int = Field(default=300, gt=0)

    # FastForex (required)
    fastforex_api_key: str = Field(..., min_length=1)
    fastforex_base_url: str = "https://api.fastforex.io"

    # Fine-management backend
    fine_backend_base_url: str = "https://tms-server-rosy.vercel.app"

    # Currency pair
    source_currency: str = "LKR"
    settlement_currency: str = "USD"

    # Checkout
    checkout_product_name: str = "Traffic Fine Payment"
    checkout_success_url: str = "https://tms-gamma-brown.vercel.app/#/payment-success"
    checkout_cancel_url: str = "https://tms-gamma-brown.vercel.app/#/payment-cancelled"
    checkout_idempotency_enabled: bool = False

    # Outbound calls
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator("source_currency", "settlement_currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("fine_backend_base_url", "fastforex_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises pydantic.ValidationError when a required secret is missing, which
    aborts application startup.
    """
    return Settings()
