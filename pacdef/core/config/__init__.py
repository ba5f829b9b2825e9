"""Configuration — paths, pacdef.yaml settings, group files."""

from pacdef.core.config.groups import load_group_file, load_groups, parse_group
from pacdef.core.config.loader import (
    ConfigError,
    Settings,
    config_dir,
    group_dir,
    load_settings,
    settings_file,
)

__all__ = [
    "ConfigError",
    "Settings",
    "config_dir",
    "group_dir",
    "load_group_file",
    "load_groups",
    "load_settings",
    "parse_group",
    "settings_file",
]
