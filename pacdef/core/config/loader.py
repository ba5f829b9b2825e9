"""
Configuration loader — resolves the config directory and reads pacdef.yaml.

Directory precedence:
    PACDEF_CONFIG_DIR  >  $XDG_CONFIG_HOME/pacdef  >  ~/.config/pacdef

The settings file is optional. When it is missing every setting keeps
its default; when it exists it must be a valid YAML mapping.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "pacdef.yaml"
GROUPS_DIR = "groups"


class ConfigError(Exception):
    """Raised when configuration or group files are invalid or missing."""


class Settings(BaseModel):
    """User settings from pacdef.yaml."""

    model_config = ConfigDict(extra="forbid")

    aur_helper: str = "paru"
    aur_rm_args: list[str] = Field(default_factory=list)
    disabled_backends: list[str] = Field(default_factory=list)
    warn_not_symlinks: bool = True
    pip_binary: str | None = None


def config_dir() -> Path:
    """Resolve the pacdef configuration directory."""
    explicit = os.environ.get("PACDEF_CONFIG_DIR")
    if explicit:
        return Path(explicit).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "pacdef"


def group_dir(base: Path | None = None) -> Path:
    """Directory holding one file per group."""
    return (base or config_dir()) / GROUPS_DIR


def settings_file(base: Path | None = None) -> Path:
    return (base or config_dir()) / SETTINGS_FILE


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate pacdef.yaml.

    Args:
        path: Explicit settings file. If None, uses the default location.

    Returns:
        Validated Settings (defaults when the file does not exist).

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    if path is None:
        path = settings_file()

    if not path.exists():
        logger.debug("No settings file at %s, using defaults", path)
        return Settings()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.debug("Loaded settings from %s", path)
    return settings
