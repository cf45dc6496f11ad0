"""Pydantic models for the proxy configuration and config file loading."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from gemini_proxy import constants
from gemini_proxy.core.utils import console

LOGGER = logging.getLogger(__name__)

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "gemini-proxy" / "config.toml"
CONFIG_PATH_2 = Path("gemini-proxy-config.toml")


def _replace_dashed_keys(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively replace dashed keys with underscores in a dictionary."""
    new_dict = {}
    for k, v in d.items():
        new_key = k.replace("-", "_")
        if isinstance(v, dict):
            new_dict[new_key] = _replace_dashed_keys(v)
        else:
            new_dict[new_key] = v
    return new_dict


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file and process it for nested structures."""
    # Determine which config path to use
    if config_path_str:
        config_path = Path(config_path_str)
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                return _replace_dashed_keys(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            console.print(
                f"[bold red]Error parsing config file {config_path}: {e}[/bold red]",
            )
            return {}

    # Report error only if an explicit path was given
    console.print(f"[bold red]Config file not found at {config_path_str}[/bold red]")
    return {}


# --- Pydantic Models for Configuration ---

# --- Panel: Gemini Configuration ---


class GeminiConfig(BaseModel):
    """Configuration for the Gemini model provider."""

    api_key: str | None = None
    model: str = constants.DEFAULT_GEMINI_MODEL
    request_timeout: float = Field(default=constants.DEFAULT_REQUEST_TIMEOUT, gt=0)

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_missing(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def has_usable_key(self) -> bool:
        """Whether an API key is set and is not the template placeholder."""
        return bool(self.api_key) and self.api_key != constants.PLACEHOLDER_API_KEY

    def warn_if_unusable(self) -> None:
        """Log a warning when calls to Gemini are bound to fail."""
        if not self.has_usable_key:
            LOGGER.warning(
                "GOOGLE_API_KEY is not set or still holds the placeholder value; "
                "requests to Gemini will fail until a real key is configured.",
            )


# --- Panel: Server Configuration ---


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = constants.DEFAULT_HOST
    port: int = Field(default=constants.DEFAULT_PORT, ge=1, le=65535)


# --- Panel: General Options ---


class General(BaseModel):
    """General configuration parameters for logging."""

    log_level: str = "info"
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.lower()
        if level not in {"debug", "info", "warning", "error", "critical"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level
