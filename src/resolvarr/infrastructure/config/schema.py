"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from resolvarr.domain.providers.config import ALL_CAPABILITIES, Capability, ProviderConfig
from resolvarr.domain.providers.identity import ProviderKind

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class ProviderEntryConfig(BaseModel):
    """One registry entry as written in YAML or a remote provider list."""

    id: str = Field(min_length=1, description="Exact provider id.")
    kind: ProviderKind = Field(
        default="remote",
        description="'local' (built-in adapter) or 'remote' (execution host).",
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Base URL of the remote execution host for this provider.",
    )
    icon_url: str = ""
    title: str = ""
    language: str = ""
    capabilities: list[Capability] = Field(
        default_factory=lambda: sorted(ALL_CAPABILITIES),
        description="Contract areas this provider serves.",
    )

    @field_validator("endpoint")
    @classmethod
    def _validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return v.rstrip("/")

    @model_validator(mode="after")
    def _remote_needs_endpoint(self) -> "ProviderEntryConfig":
        if self.kind == "remote" and not self.endpoint:
            raise ValueError(f"remote provider {self.id!r} requires an endpoint")
        return self

    def to_domain(self) -> ProviderConfig:
        return ProviderConfig(
            id=self.id,
            kind=self.kind,
            endpoint=self.endpoint,
            icon_url=self.icon_url,
            title=self.title,
            language=self.language,
            capabilities=frozenset(self.capabilities),
        )


class ProvidersConfig(BaseModel):
    """Provider dispatch configuration (YAML section: providers.*)."""

    remote_only: bool = Field(
        default=False,
        description="Route every local identity through its registry endpoint.",
    )
    max_concurrent_seasons: int = Field(
        default=5,
        description="Max parallel season fetches while expanding a show.",
    )
    remote_timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout when calling a remote execution host.",
    )
    plugin_dir: Optional[Path] = Field(
        default=None,
        description="Directory with extra Python adapter modules.",
    )
    config_url: Optional[str] = Field(
        default=None,
        description="URL of a JSON provider list merged into the registry at startup.",
    )
    base_urls: dict[str, str] = Field(
        default_factory=dict,
        description="Per-adapter base URL overrides for local adapters.",
    )
    entries: list[ProviderEntryConfig] = Field(default_factory=list)

    @field_validator("plugin_dir", mode="before")
    @classmethod
    def _validate_plugin_dir(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return _normalize_path(v)

    @field_validator("max_concurrent_seasons")
    @classmethod
    def _validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_concurrent_seasons must be >= 1")
        return v

    @field_validator("remote_timeout_seconds")
    @classmethod
    def _validate_remote_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("remote_timeout_seconds must be > 0")
        return v

    def to_domain(self) -> list[ProviderConfig]:
        return [entry.to_domain() for entry in self.entries]


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/providers).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="resolvarr", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for the shared HTTP client.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="Resolvarr/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Providers (YAML section: providers.*)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        providers = self.providers.model_dump(mode="json")
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "providers": providers,
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read RESOLVARR_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - RESOLVARR_REMOTE_ONLY
    - RESOLVARR_PROVIDER_CONFIG_URL
    - RESOLVARR_HTTP_TIMEOUT_SECONDS
    - RESOLVARR_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="RESOLVARR_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    remote_only: Optional[bool] = None
    max_concurrent_seasons: Optional[int] = None
    remote_timeout_seconds: Optional[float] = None
    plugin_dir: Optional[Path] = None
    provider_config_url: Optional[str] = None

    @field_validator("plugin_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
