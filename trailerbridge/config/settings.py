"""TrailerBridge Configuration Settings."""

from __future__ import annotations

import os
from enum import StrEnum
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from trailerbridge.exceptions import MissingApiKeyError
from trailerbridge.utils.logging import _get_logger

__all__ = [
    "LogLevel",
    "ManifestConfig",
    "MetaErrorPolicy",
    "TrailerBridgeConfig",
    "WebConfig",
    "get_config",
]

_log = _get_logger(__name__)


def get_data_path() -> Path:
    """Get the data directory from ``TB_DATA_PATH`` (defaults to ``./data``)."""
    return Path(os.getenv("TB_DATA_PATH", "./data")).resolve()


def find_yaml_config_file() -> Path:
    """Find the YAML configuration file in the data path.

    Returns:
        Path: The path to an existing YAML configuration file or the default location.
    """
    data_path = get_data_path()

    for ext in ("yaml", "yml"):
        yaml_file = data_path / f"config.{ext}"
        if yaml_file.exists():
            _log.debug(f"Using YAML config file: {yaml_file.resolve()}")
            return yaml_file.resolve()
    return data_path / "config.yaml"


class BaseStrEnum(StrEnum):
    """Base class for string-based enumerations with case-insensitive lookup."""

    @classmethod
    def _missing_(cls, value: object) -> BaseStrEnum | None:
        """Handle case-insensitive lookup for enum values.

        Args:
            value: The value to look up in the enumeration

        Returns:
            BaseStrEnum | None: The matching enum member if found, None otherwise
        """
        value = value.lower() if isinstance(value, str) else value
        for member in cls:
            if member.lower() == value:
                return member
        return None

    def __repr__(self) -> str:
        """Return the string value of the enum member."""
        return self.value

    def __str__(self) -> str:
        """Return the string representation of the enum member."""
        return repr(self)


class LogLevel(BaseStrEnum):
    """Enumeration of available logging levels.

    Note: SUCCESS is a custom level used by this application.
    """

    DEBUG = "DEBUG"  # Detailed information for debugging
    INFO = "INFO"  # General information about program execution
    SUCCESS = "SUCCESS"  # Successful operations (custom level)
    WARNING = "WARNING"  # Potential problems or issues
    ERROR = "ERROR"  # Error that prevented an operation
    CRITICAL = "CRITICAL"  # Error that prevents further program execution


class MetaErrorPolicy(BaseStrEnum):
    """How the meta handler reports failed lookups.

    swallow: log the failure and answer with ``{"meta": null}``
    raise: let the failure reach the HTTP binding, which answers 500 ``{"err"}``
    """

    SWALLOW = "swallow"
    RAISE = "raise"


class WebConfig(BaseModel):
    """Configuration for the addon web server."""

    host: str = Field(default="0.0.0.0", description="Host for the web server")
    port: int = Field(default=7000, ge=1, le=65535, description="Port to listen on")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS"
    )


class ManifestConfig(BaseModel):
    """Addon manifest fields that deployments may override."""

    id: str = Field(default="org.stremio.tmdb.trailers", description="Addon ID")
    name: str = Field(default="TMDB Trailers", description="Addon display name")
    description: str = Field(
        default="Adds official TMDB trailers to Stremio titles",
        description="Addon description",
    )


class PlatformPortSettingsSource(PydanticBaseSettingsSource):
    """Reads the listen port from ``PORT``, as set by hosting platforms.

    Ranked below ``TB_WEB__PORT`` and above the YAML file.
    """

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name != "web" or not os.getenv("PORT"):
            return None, field_name, False
        return {"port": os.environ["PORT"]}, field_name, True

    def __call__(self) -> dict[str, Any]:
        field = self.settings_cls.model_fields["web"]
        value, key, _ = self.get_field_value(field, "web")
        return {key: value} if value is not None else {}


class TrailerBridgeConfig(BaseSettings):
    """Configuration for the TrailerBridge addon.

    Values are read from keyword arguments, then ``TB_``-prefixed environment
    variables (nested fields use ``__``, e.g. ``TB_WEB__PORT``), then the YAML file
    in the data directory. The TMDB key is also accepted as ``TMDB_API_KEY`` and
    the port as ``PORT``.
    """

    tmdb_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "tmdb_api_key", "TB_TMDB_API_KEY", "TMDB_API_KEY"
        ),
        description="TMDB v3 API key",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="Logging level for the application"
    )
    cache_ttl: int = Field(
        default=6 * 60 * 60, ge=0, description="Trailer cache TTL in seconds"
    )
    request_timeout: Annotated[float, Field(gt=0)] | None = Field(
        default=10.0,
        description="Total timeout in seconds for TMDB requests (null disables it)",
    )
    meta_errors: MetaErrorPolicy = Field(
        default=MetaErrorPolicy.SWALLOW,
        description="Whether failed lookups answer null meta or an HTTP 500",
    )
    web: WebConfig = Field(
        default_factory=WebConfig, description="Addon web server configuration"
    )
    manifest: ManifestConfig = Field(
        default_factory=ManifestConfig, description="Addon manifest overrides"
    )

    @cached_property
    def data_path(self) -> Path:
        """Get the data path for TrailerBridge.

        Returns:
            Path: The data path resolved from the environment or default location.
        """
        return get_data_path()

    @field_validator("tmdb_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def require_api_key(self) -> str:
        """Return the TMDB API key.

        Returns:
            str: The configured API key.

        Raises:
            MissingApiKeyError: If no key is configured.
        """
        if self.tmdb_api_key is None:
            raise MissingApiKeyError(
                "A TMDB API key is required; set TMDB_API_KEY or tmdb_api_key"
            )
        return self.tmdb_api_key.get_secret_value()

    def __str__(self) -> str:
        """Creates a human-readable representation of the configuration.

        Returns:
            str: Configuration summary.
        """
        return (
            f"TrailerBridge Config: LISTEN: {self.web.host}:{self.web.port}, "
            f"CACHE_TTL: {self.cache_ttl}s, TIMEOUT: {self.request_timeout}, "
            f"META_ERRORS: {self.meta_errors}, DATA_PATH: {self.data_path}, "
            f"LOG_LEVEL: {self.log_level}"
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of configuration sources."""
        return (
            init_settings,
            env_settings,
            PlatformPortSettingsSource(settings_cls),
            YamlConfigSettingsSource(settings_cls, yaml_file=find_yaml_config_file()),
        )

    model_config = SettingsConfigDict(
        env_prefix="TB_", env_nested_delimiter="__", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_config() -> TrailerBridgeConfig:
    """Get the singleton instance of TrailerBridgeConfig.

    Returns:
        TrailerBridgeConfig: The singleton configuration instance.
    """
    return TrailerBridgeConfig()
