"""Client Settings using Pydantic.

Environment-based configuration with validation.
API credentials should be passed via environment variables.

Environment Variables:
    BFX_API_KEY: Bitfinex API access key
    BFX_API_SECRET: Bitfinex API secret key
    BFX_API_HOST: REST host (default: https://api.bitfinex.com)
    BFX_WITHDRAW_CONFIG_PATH: Path to the withdrawal config file
    BFX_LOG_FORMAT: json | console

Example .env file:
    BFX_API_KEY=your-access-key
    BFX_API_SECRET=your-secret-key
    BFX_WITHDRAW_CONFIG_PATH=/etc/bitfinex/withdraw.conf
    BFX_LOG_FORMAT=console
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings.

    All settings can be overridden via environment variables prefixed
    with ``BFX_`` (e.g., ``BFX_REQUEST_TIMEOUT=10``).
    """

    model_config = SettingsConfigDict(
        env_prefix="BFX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Core ====================
    app_name: str = "bitfinex-rest"
    environment: Literal["development", "staging", "production"] = "development"

    # ==================== Credentials ====================
    api_key: str = Field(default="", description="Bitfinex API access key")
    api_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Bitfinex API secret key (used only for HMAC signing)",
    )

    # ==================== Exchange API ====================
    api_host: str = Field(default="https://api.bitfinex.com")
    api_version: str = Field(default="v1", description="Versioned API prefix")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")

    # ==================== Resources ====================
    withdraw_config_path: str = Field(
        default="doc/withdraw.conf",
        description="key = value file consumed by the withdraw endpoint",
    )
    definitions_path: str | None = Field(
        default=None,
        description="JSON schema definitions document (bundled copy when unset)",
    )
    symbols_schema_ref: str = Field(default="definitions.json#/flatJsonSchema")

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ==================== Validators ====================

    @field_validator("api_host", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize host so paths can be appended directly."""
        return v.rstrip("/") if isinstance(v, str) else v

    @field_validator("api_version", mode="before")
    @classmethod
    def strip_version_slashes(cls, v):
        return v.strip("/") if isinstance(v, str) else v

    @property
    def base_url(self) -> str:
        """Versioned base URL, e.g. ``https://api.bitfinex.com/v1``."""
        return f"{self.api_host}/{self.api_version}"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings instance.
    """
    return Settings()
