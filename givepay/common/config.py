"""Environment-driven settings for the donations service.

The process entrypoint loads these once via `get_settings()` and hands them to
the components it builds (see `.env.example`).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class DonationSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "donations-api"
    log_level: str = "INFO"
    postgres_dsn: str
    api_prefix: str = "/api/v1"
    donations_collection: str = "donations"
    persist_mode: Literal["inline", "background"] = "inline"
    cors_allow_origins: list[str] = ["*"]
    braintree_environment: str = "sandbox"
    braintree_merchant_id: str
    braintree_public_key: str
    braintree_private_key: str
    otel_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> DonationSettings:
    return DonationSettings()
