"""Configuration management for apkguide."""

import os
import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .constants import (
    COPIED_FEEDBACK_SECONDS,
    DEFAULT_API_KEY_ENV,
    DEFAULT_MODEL,
    DEFAULT_PLATFORM_VERSION,
    FALLBACK_API_KEY_ENV,
    STATUS_INTERVAL,
)
from .errors import ConfigError

CONFIG_ENV_VAR = "APKGUIDE_CONFIG"


class GeminiConfig(BaseModel):
    """Configuration for the Gemini generation service."""

    model: str = DEFAULT_MODEL
    api_key_env: str = DEFAULT_API_KEY_ENV  # Environment variable holding the key

    def resolve_api_key(self) -> str:
        """Read the API key from the environment.

        Falls back to ``API_KEY`` when the configured variable is unset.

        Raises:
            ConfigError: If neither variable holds a key
        """
        for name in (self.api_key_env, FALLBACK_API_KEY_ENV):
            value = os.environ.get(name, "").strip()
            if value:
                return value
        raise ConfigError(
            f"No Gemini API key found. Set {self.api_key_env} in your environment."
        )


class WizardConfig(BaseModel):
    """Configuration for the interactive wizard."""

    status_interval: float = Field(
        default=STATUS_INTERVAL, ge=0, description="Seconds per cosmetic status phase"
    )
    copied_feedback_seconds: float = Field(
        default=COPIED_FEEDBACK_SECONDS, ge=0, description="How long 'Copied!' stays visible"
    )
    default_platform_version: str = DEFAULT_PLATFORM_VERSION


class ApkGuideConfig(BaseModel):
    """Root configuration for apkguide."""

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    wizard: WizardConfig = Field(default_factory=WizardConfig)


def get_config_path() -> Path:
    """Return the config file path, honouring ``$APKGUIDE_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "apkguide" / "config.toml"


def load_config(config_path: Path | None = None) -> ApkGuideConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml (defaults to ``get_config_path()``)

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return ApkGuideConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    try:
        return ApkGuideConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def write_config_template(config_path: Path | None = None) -> Path:
    """Write default config.toml template.

    Args:
        config_path: Destination (defaults to ``get_config_path()``)

    Returns:
        Path to the written config file
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    template = {
        "gemini": {"model": DEFAULT_MODEL, "api_key_env": DEFAULT_API_KEY_ENV},
        "wizard": {
            "status_interval": STATUS_INTERVAL,
            "copied_feedback_seconds": COPIED_FEEDBACK_SECONDS,
            "default_platform_version": DEFAULT_PLATFORM_VERSION,
        },
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
