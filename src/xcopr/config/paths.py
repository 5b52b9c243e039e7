"""Centralized path management for xcopr.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/xcopr (default: ~/.config/xcopr)
- State: $XDG_STATE_HOME/xcopr (default: ~/.local/state/xcopr)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_state_home() -> Path:
    """Get XDG_STATE_HOME, defaulting to ~/.local/state."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


@dataclass
class XcoprPaths:
    """Centralized path management following XDG spec."""

    # XDG directories (computed once at init)
    _config_home: Path = field(default_factory=_xdg_config_home)
    _state_home: Path = field(default_factory=_xdg_state_home)

    @property
    def global_config_dir(self) -> Path:
        """Global config: ~/.config/xcopr/"""
        return self._config_home / "xcopr"

    @property
    def global_settings(self) -> Path:
        """Global settings file: ~/.config/xcopr/settings.json"""
        return self.global_config_dir / "settings.json"

    @property
    def global_state_dir(self) -> Path:
        """Global state: ~/.local/state/xcopr/"""
        return self._state_home / "xcopr"

    @property
    def debug_log(self) -> Path:
        """Debug log: ~/.local/state/xcopr/debug.log"""
        return self.global_state_dir / "debug.log"


# Singleton instance
_paths: XcoprPaths | None = None


def get_paths() -> XcoprPaths:
    """Get the paths singleton, resolving XDG directories on first call."""
    global _paths
    if _paths is None:
        _paths = XcoprPaths()
    return _paths


def reset_paths() -> None:
    """Reset the paths singleton (for testing)."""
    global _paths
    _paths = None
