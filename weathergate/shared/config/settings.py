# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    users_file: Path = Path("instance/users.json")
    sessions_file: Path = Path("instance/sessions.json")


class WeatherConfig(BaseModel):
    api_key: str = ""
    geocoding_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    conditions_url: str = "https://api.openweathermap.org/data/2.5/weather"
    lang: str = "ru"
    units: str = "metric"
    timeout: float = Field(10.0, ge=0.1)
    forecast_days: int = Field(10, ge=1)


class AccessConfig(BaseModel):
    rate_limit: int = Field(15, ge=1)
    login_route: str = "/login.html"
    home_route: str = "/"


class ResilienceConfig(BaseModel):
    default_timeout: float = Field(10.0, ge=0.1)
    max_retries: int = Field(2, ge=0)
    backoff_base: float = Field(0.5, ge=0.0)
    backoff_cap: float = Field(4.0, ge=0.0)
    circuit_fail_threshold: int = Field(5, ge=1)
    circuit_reset_timeout: float = Field(30.0, ge=0.0)


class ObservabilityConfig(BaseModel):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")

    model_config = ConfigDict(validate_by_name=True)


class SecurityConfig(BaseModel):
    # Cookie security
    cookie_secure: bool = False
    cookie_samesite: str = "Lax"

    # Per-IP throttling of sign-in / sign-up
    enable_rate_limit: bool = True
    rate_limit_requests: int = Field(10, ge=1)
    rate_limit_window: float = Field(60.0, ge=0.1)

    # HSTS
    enable_hsts: bool = False

    @field_validator("cookie_secure", "enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(Path("instance/weathergate.log"), alias="LOG_FILE")
    static_dir: Path | None = Field(None, alias="STATIC_DIR")
    port: int = Field(3000, alias="PORT")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    access: AccessConfig = Field(default_factory=AccessConfig)
    resilience: ResilienceConfig = Field(default_factory=ResilienceConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if not self.weather.api_key:
            print(
                "\n❌ CRITICAL: WEATHER__API_KEY is not set in production!\n"
                "   The weather proxy cannot reach the provider without a credential.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AccessConfig",
    "AppConfig",
    "ObservabilityConfig",
    "ResilienceConfig",
    "SecurityConfig",
    "StorageConfig",
    "WeatherConfig",
    "load_config",
]
