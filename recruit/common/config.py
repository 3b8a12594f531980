"""
Client Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated on first access to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """
    recruit-console configuration with validation.

    All settings can be overridden via RECRUIT_* environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECRUIT_",
        case_sensitive=False,
        extra="ignore",
    )

    # === Backend ===
    api_base_url: str = Field(
        default="http://localhost:5270/api",
        description="Recruitment backend root URL (routes are appended as-is)"
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Per-request timeout in seconds"
    )

    # === Lists ===
    items_per_page: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Default page size (backend accepts 1-100)"
    )
    lookup_workers: int = Field(
        default=4,
        ge=1,
        le=16,
        description="Parallel workers for lookup collection fan-out"
    )

    # === Notifications ===
    toast_ttl_seconds: float = Field(
        default=4.0,
        gt=0,
        description="How long a toast stays visible"
    )

    # === Local storage ===
    token_file: Optional[str] = Field(
        default=None,
        description="Where the CLI persists the bearer token (None = memory only)"
    )
    download_dir: str = Field(
        default="downloads",
        description="Directory for CSV exports and document downloads"
    )

    # === Runtime ===
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="simple")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("api_base_url")
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Basic URL format validation; trailing slashes are dropped."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v.rstrip("/")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("simple", "json"):
            raise ValueError("log_format must be 'simple' or 'json'")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if self.api_base_url.startswith("http://"):
                issues.append("CRITICAL: RECRUIT_API_BASE_URL must use https in production")
            if "localhost" in self.api_base_url:
                issues.append("WARNING: Using localhost backend in production")
            if self.token_file is None:
                issues.append("WARNING: RECRUIT_TOKEN_FILE not configured, sessions will not persist")

        return issues


@lru_cache()
def get_settings() -> ClientSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached. Call get_settings.cache_clear()
    after changing the environment (tests do this).
    """
    return ClientSettings()


def validate_config_on_startup() -> ClientSettings:
    """
    Validate configuration at startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    for issue in settings.validate_production_config():
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        logger.warning(issue)

    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  api_base_url={settings.api_base_url}")
    logger.info(f"  items_per_page={settings.items_per_page}")
    logger.info(f"  token_file={'set' if settings.token_file else 'memory'}")
    return settings
