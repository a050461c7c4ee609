"""Configuration management using Pydantic Settings"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mpg_gateway.domain.models import (
    ACQUIRER_ID_PATTERN,
    CURRENCY_CODE_PATTERN,
    DEFAULT_GATEWAY_URL,
    MERCHANT_ID_PATTERN,
)


class Settings(BaseSettings):
    """Merchant configuration loaded from MPG_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="MPG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gateway
    gateway_url: str = DEFAULT_GATEWAY_URL
    version: str = "1.0.0"
    signature_method: str = "SHA1"

    # Merchant credentials (no defaults, must be provided)
    acquirer_id: str = Field(..., pattern=ACQUIRER_ID_PATTERN)
    merchant_id: str = Field(..., pattern=MERCHANT_ID_PATTERN)
    transaction_secret: SecretStr

    # Checkout
    return_url: str = Field(..., min_length=1)
    purchase_currency: str = Field("462", pattern=CURRENCY_CODE_PATTERN)  # MVR: 462, USD: 840
    purchase_currency_exponent: int = Field(2, ge=0, le=6)

    # Service
    service_name: str = "mpg-gateway"
    log_level: str = "INFO"

    @field_validator("transaction_secret")
    @classmethod
    def _secret_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("transaction_secret must not be empty")
        return value


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process"""
    return Settings()
