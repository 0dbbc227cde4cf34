"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildConfig(BaseModel):
    """Per-call payload options."""

    model_config = ConfigDict(frozen=True)

    country_code: str = Field(default="TH", pattern=r"^[A-Z]{2}$", description="ISO 3166-1 alpha-2")
    currency_code: str = Field(default="764", pattern=r"^[0-9]{3}$", description="ISO 4217 numeric")
    validate_input: bool = Field(default=True, description="Apply format and checksum rules before encoding")


DEFAULT_BUILD_CONFIG = BuildConfig()


class RenderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    box_size: int = Field(default=10, ge=1, le=100)
    border: int = Field(default=4, ge=0, le=50)
    error_correction: Literal["L", "M", "Q", "H"] = Field(default="M")
    dark_color: str = Field(default="#000000")
    light_color: str = Field(default="#FFFFFF")
    title: str = Field(default="PromptPay")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROMPTQR_",
        env_nested_delimiter="__",
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="promptqr")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    country_code: str = Field(default="TH", pattern=r"^[A-Z]{2}$")
    currency_code: str = Field(default="764", pattern=r"^[0-9]{3}$")
    validate_input: bool = Field(default=True)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def build_config(self, **overrides: object) -> BuildConfig:
        """Return a fresh BuildConfig seeded from settings, with per-call overrides."""

        values: dict[str, object] = {
            "country_code": self.country_code,
            "currency_code": self.currency_code,
            "validate_input": self.validate_input,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return BuildConfig(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
