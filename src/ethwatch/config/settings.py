"""Application settings using pydantic-settings."""

import math
import os
import re
from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from ethwatch.core.exceptions import ConfigurationError

MIN_CHECK_INTERVAL_SECONDS = 10.0

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> float:
    """Parse a Go-style duration string into seconds.

    Accepts plain numbers (seconds) and unit sequences such as ``90s``,
    ``1m30s``, ``1.5h`` or ``500ms``.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ValueError(f"invalid duration '{value}'")
        return seconds

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos != len(text) or pos == 0 or not math.isfinite(total):
        raise ValueError(f"invalid duration '{value}'")
    return total


class Settings(BaseSettings):
    """ETH Balance Watcher configuration.

    Values come from (highest priority first): constructor arguments,
    the YAML file named by ``CONFIG_FILE`` (default ``config.yaml``, skipped
    when missing), environment variables and ``.env``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="ETH Balance Watcher", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Ethereum RPC
    ethereum_rpc: str = Field(
        default="https://eth-mainnet.g.alchemy.com/v2/your-api-key",
        validation_alias=AliasChoices("ethereum_rpc", "eth_rpc_url"),
        description="Ethereum JSON-RPC endpoint URL",
    )
    rpc_timeout: float = Field(
        default=10.0, gt=0, description="Per-call timeout for balance queries (seconds)"
    )

    # Monitor
    check_interval: float = Field(
        default=60.0,
        ge=MIN_CHECK_INTERVAL_SECONDS,
        allow_inf_nan=False,
        description="Seconds between balance check rounds",
    )
    wallets_file: str = Field(default="wallets.txt", description="Path to the wallets file")

    # Server
    host: str = Field(default="0.0.0.0", description="Metrics server host")
    metrics_port: int = Field(default=9090, ge=1, le=65535, description="Metrics server port")
    shutdown_grace_period: float = Field(
        default=10.0, gt=0, description="Seconds to wait for an in-flight round on shutdown"
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
        """Insert the YAML config file above the environment."""
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=os.environ.get("CONFIG_FILE", "config.yaml"),
        )
        return (
            init_settings,
            yaml_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @field_validator("ethereum_rpc")
    @classmethod
    def validate_ethereum_rpc(cls, v: str) -> str:
        """Validate RPC URL format."""
        if not v:
            raise ValueError("ethereum_rpc is required")
        if not v.startswith(("http://", "https://")):
            raise ValueError("ethereum_rpc must start with http:// or https://")
        return v

    @field_validator("check_interval", mode="before")
    @classmethod
    def parse_check_interval(cls, v: Any) -> Any:
        """Accept Go-style duration strings (``60s``, ``1m30s``)."""
        if isinstance(v, str):
            return parse_duration(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_settings() -> Settings:
    """Load settings, converting validation failures to ConfigurationError.

    Raises:
        ConfigurationError: If any setting is missing or invalid.
    """
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {e}") from e
