"""Configuration models for the REST URI MCP server."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import DisplayType

DEFAULT_API_VERSION = "v57.0"
DEFAULT_LOGIN_URL = "https://login.salesforce.com/services/oauth2/authorize"
DEFAULT_TOKEN_URL = "https://login.salesforce.com/services/oauth2/token"


def _ensure_absolute(value: str, field_name: str) -> str:
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"{field_name} must be an absolute URL, got {value!r}")
    return value


class OAuthClientConfig(BaseModel):
    """Connected app settings used to build OAuth login and refresh URLs."""

    login_url: str = Field(default=DEFAULT_LOGIN_URL, description="OAuth authorization endpoint.")
    token_url: str = Field(default=DEFAULT_TOKEN_URL, description="OAuth token endpoint used for refresh.")
    client_id: str = Field(description="Consumer key of the connected app.")
    client_secret: SecretStr | None = Field(
        default=None,
        description="Consumer secret, required unless the connected app does not demand one.",
    )
    redirect_url: str = Field(description="Callback URL registered on the connected app.")
    scopes: list[str] = Field(default_factory=list, description="Scopes requested on login.")
    display: DisplayType = Field(default=DisplayType.PAGE, description="Login page display type.")

    @model_validator(mode="after")
    def _validate_urls(self) -> "OAuthClientConfig":
        _ensure_absolute(self.login_url, "oauth.login_url")
        _ensure_absolute(self.token_url, "oauth.token_url")
        if not self.client_id:
            raise ConfigurationError("oauth.client_id must not be empty")
        return self

    @property
    def scope(self) -> str | None:
        """Scopes joined the way the authorization endpoint expects them."""
        return " ".join(self.scopes) or None


class ForceSettings(BaseSettings):
    """Top-level configuration container for the server."""

    model_config = SettingsConfigDict(
        env_prefix="FORCE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    instance_url: str = Field(description="Instance root URL, e.g. https://na99.salesforce.com.")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="REST API version token.")
    oauth: OAuthClientConfig | None = Field(
        default=None, description="Connected app configuration for OAuth URL tools."
    )

    config_path: Path | None = Field(
        default=None,
        description="Resolved path used to load configuration (for diagnostics).",
        exclude=True,
    )

    @field_validator("api_version")
    @classmethod
    def _validate_api_version(cls, value: str) -> str:
        if not value.startswith("v"):
            raise ConfigurationError(f"api_version must look like 'v57.0', got {value!r}")
        return value

    @model_validator(mode="after")
    def _validate_instance_url(self) -> "ForceSettings":
        _ensure_absolute(self.instance_url, "instance_url")
        return self


def load_settings(config_path: Path | None = None, overrides: dict[str, Any] | None = None) -> ForceSettings:
    """Load configuration from YAML/JSON on disk combined with environment overrides."""

    base_data: dict[str, Any] = {}
    resolved_path: Path | None = None
    if config_path:
        resolved_path = Path(config_path).expanduser().resolve()
        if not resolved_path.exists():
            raise ConfigurationError(f"Configuration file not found: {resolved_path}")
        try:
            with resolved_path.open("r", encoding="utf-8") as handle:
                base_data = yaml.safe_load(handle.read()) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Unable to parse configuration file {resolved_path}: {exc}") from exc
    if overrides:
        base_data.update(overrides)

    try:
        settings = ForceSettings(**base_data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    settings.config_path = resolved_path
    return settings
