"""
Shared configuration management for the Checkout Access Layer.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHECKOUT_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Security
    jwt_secret: str = Field(
        default="",
        validation_alias=AliasChoices("CHECKOUT_JWT_SECRET", "SUPABASE_JWT_SECRET"),
    )
    jwt_algorithm: str = "HS256"
    jwt_issuer: Optional[str] = None
    jwt_audience: Optional[str] = None

    # CORS
    cors_origins: List[str] = [
        "https://mubclean-web2.vercel.app",
        "http://localhost:4200",
    ]
    cors_methods: List[str] = ["GET", "POST", "OPTIONS"]
    cors_headers: List[str] = ["Content-Type", "Authorization"]


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str = "checkout"
    host: str = "0.0.0.0"
    port: int = 3000

    # Mercado Pago
    mercadopago_access_token: str = Field(
        default="",
        validation_alias=AliasChoices(
            "CHECKOUT_MERCADOPAGO_ACCESS_TOKEN", "MERCADOPAGO_ACCESS_TOKEN"
        ),
    )
    mercadopago_base_url: str = "https://api.mercadopago.com"
    # None waits on the provider indefinitely
    provider_timeout_seconds: Optional[float] = None

    # Preference defaults
    currency_id: str = "MXN"
    back_url_success: str = "tuapp://success"
    back_url_failure: str = "tuapp://failure"
    back_url_pending: str = "tuapp://pending"
    auto_return: str = "approved"


def get_config(service_name: str = "checkout", **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, **overrides)
