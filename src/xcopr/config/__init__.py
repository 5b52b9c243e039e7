"""Configuration management for xcopr."""
from __future__ import annotations

from xcopr.config.paths import XcoprPaths, get_paths, reset_paths
from xcopr.config.settings import Settings, get_settings_path, settings

__all__ = [
    "Settings",
    "XcoprPaths",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
