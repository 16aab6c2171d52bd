"""Device load state and the saved settings of a controller device.

Controller settings are kept as one JSON file per device serial in a
configuration directory. Invalid or missing files fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = [
    "LoadState",
    "ErrorMessage",
    "DeviceState",
    "SavedSettings",
    "SettingsError",
    "settings_from_dict",
    "settings_to_dict",
    "config_path",
    "load_settings",
    "save_settings",
]

log = logging.getLogger(__name__)

_APP_DIR = "beacnutil"
_BYTE_MAX = 255
_NANOS_PER_SECOND = 1_000_000_000
_MAX_DISPLAY_DIM = timedelta(minutes=4)


class LoadState(Enum):
    """How far loading a device has got."""

    LOADING = "loading"
    RUNNING = "running"
    ERROR = "error"


@dataclass
class ErrorMessage:
    """A problem met while talking to a device."""

    error_text: str | None = None
    failed_message: Any = None


@dataclass
class DeviceState:
    """The load state of a device and the errors collected on the way."""

    state: LoadState = LoadState.LOADING
    errors: list[ErrorMessage] = field(default_factory=list)


@dataclass
class SavedSettings:
    """Persisted controller settings."""

    display_brightness: int = 40
    display_dim: timedelta = timedelta(seconds=60 * 3)
    button_brightness: int = 5


class SettingsError(ValueError):
    """Raised when saved settings are malformed or out of range."""


def _byte(data: Mapping[str, Any], key: str) -> int:
    if key not in data:
        raise SettingsError(f"missing field `{key}`")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"`{key}` must be an integer")
    if not 0 <= value <= _BYTE_MAX:
        raise SettingsError(f"`{key}` must be between 0 and {_BYTE_MAX}")
    return value


def _whole(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SettingsError(f"{what} must be a non-negative integer")
    return value


def _duration(data: Mapping[str, Any], key: str) -> timedelta:
    if key not in data:
        raise SettingsError(f"missing field `{key}`")
    value = data[key]
    if isinstance(value, Mapping):
        if "secs" not in value:
            raise SettingsError("missing field `secs`")
        if "nanos" not in value:
            raise SettingsError("missing field `nanos`")
        secs, nanos = value["secs"], value["nanos"]
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        secs, nanos = value
    else:
        raise SettingsError(f"`{key}` must be a duration")
    secs = _whole(secs, "secs")
    nanos = _whole(nanos, "nanos")
    try:
        return timedelta(seconds=secs) + timedelta(microseconds=nanos // 1000)
    except OverflowError as exc:
        raise SettingsError("overflow deserializing Duration") from exc


def settings_from_dict(data: Mapping[str, Any]) -> SavedSettings:
    """Build validated settings from their JSON form."""
    if not isinstance(data, Mapping):
        raise SettingsError("settings must be an object")

    display_brightness = _byte(data, "display_brightness")
    if display_brightness > 100:
        raise SettingsError("Percent should be below 100")

    display_dim = _duration(data, "display_dim")
    if display_dim > _MAX_DISPLAY_DIM:
        raise SettingsError("Dim Time should be less than 4 minutes")

    button_brightness = _byte(data, "button_brightness")
    if button_brightness > 100:
        raise SettingsError("Brightness should be below 10")

    return SavedSettings(
        display_brightness=display_brightness,
        display_dim=display_dim,
        button_brightness=button_brightness,
    )


def settings_to_dict(settings: SavedSettings) -> dict[str, Any]:
    """Return the JSON form of ``settings``."""
    dim = settings.display_dim
    whole_seconds = dim.days * 86400 + dim.seconds
    return {
        "display_brightness": settings.display_brightness,
        "display_dim": {"secs": whole_seconds, "nanos": dim.microseconds * 1000},
        "button_brightness": settings.button_brightness,
    }


def _default_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base and os.path.isabs(base) else Path.home() / ".config"
    return root / _APP_DIR


def config_path(serial: str, config_dir: str | os.PathLike[str] | None = None) -> Path:
    """Path of the settings file for the device with ``serial``."""
    directory = Path(config_dir) if config_dir is not None else _default_config_dir()
    return directory / f"{serial}.json"


def load_settings(
    serial: str, config_dir: str | os.PathLike[str] | None = None
) -> SavedSettings:
    """Load a device's settings, writing and returning defaults if that fails."""
    path = config_path(serial, config_dir)
    log.debug("Attempting to load Config from %s", path)
    try:
        with path.open(encoding="utf-8") as handle:
            settings = settings_from_dict(json.load(handle))
    except (OSError, ValueError) as exc:
        log.debug("Config Load Failed, Setting Defaults: %s", exc)
        settings = SavedSettings()
        save_settings(serial, settings, config_dir)
        return settings
    log.debug("Load Successful")
    return settings


def save_settings(
    serial: str,
    settings: SavedSettings,
    config_dir: str | os.PathLike[str] | None = None,
) -> None:
    """Write a device's settings; failures are logged, not raised."""
    path = config_path(serial, config_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(settings_to_dict(settings), handle, indent=2)
    except OSError as exc:
        log.warning("Config Saving Failed: %s", exc)