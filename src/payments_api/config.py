"""Application settings loaded from the environment (prefix ``PAYMENTS_``)."""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Runtime configuration for the payments API."""

    # Application
    app_name: str = Field(default="payments-api", description="Application name")
    app_env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")

    # Cancellation policy
    business_timezone: str = Field(
        default="UTC",
        description="IANA time zone defining the same-day cancellation window",
    )

    # Geolocation (logging only)
    geoip_enabled: bool = Field(default=True, description="Look up client countries")
    geoip_url_template: str = Field(
        default="https://api.country.is/{ip}",
        description="Lookup URL; {ip} is replaced with the client address",
    )
    geoip_timeout_seconds: float = Field(default=5.0, gt=0, description="Lookup timeout")

    # API server
    api_host: str = Field(default="0.0.0.0", description="API bind host")
    api_port: int = Field(default=8080, description="API bind port")

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level. Must be one of: {list(VALID_LOG_LEVELS)}")
        return v.upper()

    @field_validator("business_timezone")
    @classmethod
    def validate_business_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, loaded once per process."""
    return Settings()
