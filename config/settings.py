"""
Central configuration using Pydantic BaseSettings.

Validates all env vars at first use (fail-fast). Credentials are optional
here; the API client raises AuthenticationError when it actually needs them.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    print(settings.megaport.resolved_base_url)

Lazy initialization: get_settings() creates the singleton on first call.
Tests can reset via get_settings.cache_clear().
"""

from functools import lru_cache
from typing import Optional

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings


API_ENDPOINTS = {
    "production": "https://api.megaport.com",
    "staging": "https://api-staging.megaport.com",
    "development": "https://api-mpone-dev.megaport.com",
}


# =============================================================================
# Nested Settings Groups
# =============================================================================


class MegaportSettings(BaseSettings):
    """API endpoint and credential configuration."""

    model_config = {"env_prefix": "MEGAPORT_", "extra": "ignore"}

    environment: str = "staging"
    base_url: Optional[str] = None  # Overrides environment when set

    username: str = ""
    password: SecretStr = SecretStr("")
    api_token: SecretStr = SecretStr("")  # Skips login when set

    request_timeout: int = 30

    # Login retry on connection failures
    login_attempts: int = 3
    login_backoff: float = 1.0

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in API_ENDPOINTS:
            raise ValueError(
                f"Unknown environment '{v}', expected one of {sorted(API_ENDPOINTS)}"
            )
        return v

    @property
    def resolved_base_url(self) -> str:
        """Base URL without trailing slash."""
        return (self.base_url or API_ENDPOINTS[self.environment]).rstrip("/")


class ProvisioningSettings(BaseSettings):
    """Provisioning wait budget."""

    model_config = {"env_prefix": "MCR_", "extra": "ignore"}

    poll_attempts: int = 30
    poll_interval: float = 10.0  # seconds

    @model_validator(mode="after")
    def _validate_budget(self):
        if self.poll_attempts < 1:
            raise ValueError("MCR_POLL_ATTEMPTS must be at least 1")
        if self.poll_interval < 0:
            raise ValueError("MCR_POLL_INTERVAL must not be negative")
        return self


# =============================================================================
# Root Settings
# =============================================================================


class AppSettings(BaseSettings):
    """Root application settings composing all sub-settings."""

    model_config = {"env_prefix": "", "extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""

    # Nested groups (initialized separately to support env_prefix)
    megaport: MegaportSettings = None  # type: ignore[assignment]
    provisioning: ProvisioningSettings = None  # type: ignore[assignment]

    @model_validator(mode="before")
    @classmethod
    def _init_nested(cls, values):
        """Initialize nested settings from environment."""
        if values.get("megaport") is None:
            values["megaport"] = MegaportSettings()
        if values.get("provisioning") is None:
            values["provisioning"] = ProvisioningSettings()
        return values


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get the application settings singleton.

    Lazy-initialized on first call. Validates all env vars (fail-fast).
    Tests can reset via: get_settings.cache_clear()
    """
    return AppSettings()
