"""Settings storage for command line defaults."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from grokdisk.domain.models import (
    DEFAULT_LAYOUT,
    DEFAULT_SECTOR_SIZE,
    TableLayout,
    is_valid_sector_size,
)


SETTINGS_PATH = Path(
    os.environ.get(
        "GROKDISK_SETTINGS_PATH",
        Path.home() / ".config" / "grokdisk" / "settings.json",
    )
)

OUTPUT_FORMATS = ("text", "json")

DEFAULT_SETTINGS: dict[str, Any] = {
    "output_format": "text",
    "show_empty_slots": True,
    "log_to_file": False,
    "sector_size": DEFAULT_SECTOR_SIZE,
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=dict)


settings_store = SettingsStore()


def load_settings() -> None:
    settings_store.values = dict(DEFAULT_SETTINGS)
    if not SETTINGS_PATH.exists():
        return
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return
    if isinstance(data, dict):
        settings_store.values.update(data)


def save_settings() -> None:
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(settings_store.values, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def get_setting(key: str, default: Any | None = None) -> Any:
    return settings_store.values.get(key, default)


def set_setting(key: str, value: Any) -> None:
    settings_store.values[key] = value
    save_settings()


def get_bool(key: str, default: bool = False) -> bool:
    return bool(get_setting(key, default))


def set_bool(key: str, value: bool) -> None:
    set_setting(key, bool(value))


def get_int(key: str, default: int = 0) -> int:
    value = get_setting(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def layout_from_settings() -> TableLayout:
    """Build the table layout, taking the sector size from settings.

    Sector sizes that are not a positive 16-bit value fall back to the
    default layout.
    """
    sector_size = get_int("sector_size", DEFAULT_SECTOR_SIZE)
    if not is_valid_sector_size(sector_size):
        return DEFAULT_LAYOUT
    return replace(DEFAULT_LAYOUT, sector_size=sector_size)


load_settings()
