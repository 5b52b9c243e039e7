"""Configuration and settings persistence."""

import json
import logging
from pathlib import Path
from typing import Any

from xcopr.config.paths import get_paths

logger = logging.getLogger(__name__)

# Each stage runs as `sh -eu -c <command>`: abort on error, fail on unset vars.
DEFAULT_SHELL_PROGRAM = "sh"
DEFAULT_SHELL_FLAGS: tuple[str, ...] = ("-eu",)


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().global_settings


class Settings:
    """Persistent settings for xcopr."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if path.exists():
            try:
                loaded = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable settings at %s: %s", path, e)
                loaded = {}
            self._data = loaded if isinstance(loaded, dict) else {}
        else:
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            logger.info("Saved settings to %s: %s", path, self._data)
        except OSError as e:
            logger.error("Failed to save settings: %s", e)

    def get(self, key: str) -> Any:
        """Get a raw setting value."""
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._data[key] = value
        self._save()

    # --- Shell Interpreter Settings ---

    def _get_shell_settings(self) -> dict[str, Any]:
        raw = self._data.get("shell", {})
        if isinstance(raw, dict):
            return raw
        return {}

    @property
    def shell_program(self) -> str:
        """Interpreter program used for every stage (default 'sh')."""
        program = self._get_shell_settings().get("program")
        if isinstance(program, str) and program.strip():
            return program
        return DEFAULT_SHELL_PROGRAM

    @shell_program.setter
    def shell_program(self, value: str) -> None:
        shell = self._get_shell_settings()
        shell["program"] = value
        self.set("shell", shell)

    @property
    def shell_flags(self) -> list[str]:
        """Flags passed to the interpreter ahead of '-c'.

        Falls back to the defaults unless the stored value is a list of strings.
        """
        flags = self._get_shell_settings().get("flags")
        if isinstance(flags, list) and all(isinstance(flag, str) for flag in flags):
            return list(flags)
        return list(DEFAULT_SHELL_FLAGS)

    @shell_flags.setter
    def shell_flags(self, value: list[str]) -> None:
        shell = self._get_shell_settings()
        shell["flags"] = [str(flag) for flag in value]
        self.set("shell", shell)


# Global settings instance
settings = Settings()
