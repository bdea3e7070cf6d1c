"""
Pytest configuration and shared fixtures for grokdisk tests.

Fixtures build synthetic disk images in tmp_path so no real devices or
image files are needed.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest
from loguru import logger

from grokdisk.config import settings


TABLE_OFFSET = 446

# status=0x80, type=0x0B, first LBA=63, sector count=0x0BFA01 (784897)
BOOTABLE_FAT32_ENTRY = bytes.fromhex("80 00 01 00 0B 00 00 00 3F 00 00 00 01 FA 0B 00")
EMPTY_ENTRY_BYTES = bytes(16)


def build_image_bytes(
    entries: Iterable[bytes] = (),
    *,
    size: int = 1024,
    boot_code: bytes = b"",
) -> bytes:
    """Build raw image bytes with the given table entries at offset 446."""
    table = b"".join(entries)
    data = bytearray(max(size, TABLE_OFFSET + len(table)))
    data[: len(boot_code)] = boot_code
    data[TABLE_OFFSET : TABLE_OFFSET + len(table)] = table
    return bytes(data[:size])


# ==============================================================================
# Image Fixtures
# ==============================================================================


@pytest.fixture
def make_image(tmp_path) -> Callable[..., Path]:
    """
    Fixture providing a factory that writes a synthetic image file.

    Returns:
        Callable taking entries, size and name, returning the image path.
    """

    def _make_image(
        entries: Iterable[bytes] = (),
        *,
        size: int = 1024,
        name: str = "disk.img",
        raw: Optional[bytes] = None,
    ) -> Path:
        path = tmp_path / name
        path.write_bytes(raw if raw is not None else build_image_bytes(entries, size=size))
        return path

    return _make_image


@pytest.fixture
def sample_image(make_image) -> Path:
    """1024-byte image with one bootable FAT32 partition in slot 0."""
    return make_image(
        [BOOTABLE_FAT32_ENTRY, EMPTY_ENTRY_BYTES, EMPTY_ENTRY_BYTES, EMPTY_ENTRY_BYTES]
    )


@pytest.fixture
def blank_image(make_image) -> Path:
    """1024-byte image whose partition table is entirely zero."""
    return make_image(size=1024, name="blank.img")


# ==============================================================================
# Isolation Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the user's settings file."""
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "config" / "settings.json")
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)
    yield
    settings.settings_store.values = dict(settings.DEFAULT_SETTINGS)


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added during a test (they may point at captured streams)."""
    yield
    logger.remove()


@pytest.fixture
def bootable_entry() -> bytes:
    """Raw 16-byte entry of a bootable FAT32 partition at LBA 63."""
    return BOOTABLE_FAT32_ENTRY


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Fixture exposing build_image_bytes for in-memory streams."""
    return build_image_bytes
