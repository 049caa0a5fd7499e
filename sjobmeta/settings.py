"""Persistent settings for sjobmeta."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sjobmeta.logger import get_logger
from sjobmeta.slurm.commands import DEFAULT_SACCT

logger = get_logger(__name__)

# sacct timeout in seconds; None waits for sacct indefinitely
MIN_COMMAND_TIMEOUT = 1.0
MAX_COMMAND_TIMEOUT = 3600.0
DEFAULT_COMMAND_TIMEOUT: float | None = None


@dataclass(frozen=True)
class Settings:
    """User-configurable settings stored on disk."""

    sacct_executable: str = DEFAULT_SACCT
    command_timeout: float | None = DEFAULT_COMMAND_TIMEOUT
    # Always echo sacct invocations, as if --verbose was given
    verbose: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Settings:
        """Create settings from a mapping, applying defaults for invalid values.

        Args:
            data: Mapping containing raw settings values.

        Returns:
            A Settings instance with validated values.
        """
        sacct_value = _coerce_str(data.get("sacct_executable"))
        sacct_executable = sacct_value if sacct_value else DEFAULT_SACCT

        command_timeout = _coerce_float(data.get("command_timeout"))
        if (
            command_timeout is None
            or command_timeout < MIN_COMMAND_TIMEOUT
            or command_timeout > MAX_COMMAND_TIMEOUT
        ):
            command_timeout = DEFAULT_COMMAND_TIMEOUT

        verbose = _coerce_bool(data.get("verbose"))
        if verbose is None:
            verbose = False

        return cls(
            sacct_executable=sacct_executable,
            command_timeout=command_timeout,
            verbose=verbose,
        )


def get_config_dir() -> Path:
    """Get the directory used for persistent configuration.

    Returns:
        Path to the configuration directory.
    """
    override_dir = os.environ.get("SJOBMETA_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser()

    base_dir = os.environ.get("XDG_CONFIG_HOME")
    if base_dir:
        return Path(base_dir).expanduser() / "sjobmeta"

    return Path.home() / ".config" / "sjobmeta"


def get_settings_path() -> Path:
    """Get the full path to the settings file.

    Returns:
        Path to the settings JSON file.
    """
    return get_config_dir() / "settings.json"


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Loaded settings, or defaults if none exist.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        return Settings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning(f"Failed to parse settings file {settings_path}: {exc}")
        return Settings()
    except OSError as exc:
        logger.warning(f"Failed to read settings file {settings_path}: {exc}")
        return Settings()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {settings_path} contains invalid data")
        return Settings()

    return Settings.from_mapping(raw)


def _coerce_str(value: object) -> str | None:
    """Coerce a value into a string if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        String value or None.
    """
    if isinstance(value, str):
        return value
    return None


def _coerce_float(value: object) -> float | None:
    """Coerce a value into a float if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        Float value or None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _coerce_bool(value: object) -> bool | None:
    """Coerce a value into a boolean if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        Boolean value or None.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ("true", "1", "yes"):
            return True
        if value.lower() in ("false", "0", "no"):
            return False
    return None
