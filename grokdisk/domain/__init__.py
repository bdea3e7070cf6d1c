"""Domain models for partition table inspection."""

from __future__ import annotations

from .models import (
    DEFAULT_LAYOUT,
    DEFAULT_SECTOR_SIZE,
    EMPTY_ENTRY,
    MAX_SECTOR_SIZE,
    ImageMetadata,
    Partition,
    PartitionEntry,
    TableLayout,
)


__all__ = [
    "DEFAULT_LAYOUT",
    "DEFAULT_SECTOR_SIZE",
    "EMPTY_ENTRY",
    "MAX_SECTOR_SIZE",
    "ImageMetadata",
    "Partition",
    "PartitionEntry",
    "TableLayout",
]
