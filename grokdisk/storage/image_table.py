"""Primary partition table reader for raw disk images.

This module handles structural decoding of the legacy MBR table:
- Opening the image and seeking to the fixed table offset
- Decoding the four 16-byte entries in slot order
- Wrapping them in partitions that know the image's sector size

No entry values are validated and nothing is logged here; callers decide
what a plausible partition looks like and how failures are reported.
"""

from __future__ import annotations

import os
import stat
from typing import BinaryIO, Iterable, Union

from grokdisk.domain.models import (
    DEFAULT_LAYOUT,
    PARTITION_ENTRY_STRUCT,
    ImageMetadata,
    Partition,
    PartitionEntry,
    TableLayout,
)

from .exceptions import DecodeFailedError, OpenFailedError, SeekFailedError


PathLike = Union[str, "os.PathLike[str]"]


def analyze_image_file(
    path: PathLike, layout: TableLayout = DEFAULT_LAYOUT
) -> ImageMetadata:
    """Read the primary partition table of a disk image.

    The image is opened, the table decoded and the file closed again before
    returning, on success and failure alike.

    Args:
        path: Path to the raw disk image
        layout: Table location, entry size, slot count and sector size

    Returns:
        ImageMetadata with exactly ``layout.slot_count`` partitions

    Raises:
        OpenFailedError: If the image cannot be opened, is a FIFO or is
            not seekable
        SeekFailedError: If the image ends before the partition table
        DecodeFailedError: If a slot cannot be read in full
    """
    file_path = os.fspath(path)
    try:
        # Opening a FIFO blocks until a writer appears
        if stat.S_ISFIFO(os.stat(file_path).st_mode):
            raise OpenFailedError(file_path)
        image_file = open(file_path, "rb")
    except OSError as error:
        raise OpenFailedError(file_path, error) from error

    with image_file:
        if not image_file.seekable():
            raise OpenFailedError(file_path)
        return read_image_metadata(image_file, file_path, layout=layout)


def read_image_metadata(
    stream: BinaryIO,
    file_path: str,
    *,
    layout: TableLayout = DEFAULT_LAYOUT,
) -> ImageMetadata:
    """Decode the partition table from an already open binary stream.

    The stream is left open and positioned after the last entry read; it is
    not rewound on failure.
    """
    _seek_table(stream, file_path, layout)

    partitions: list[Partition] = []
    for slot_index in range(layout.slot_count):
        entry = _read_entry(stream, slot_index, file_path, layout)
        partitions.append(Partition(entry=entry, sector_size=layout.sector_size))

    return ImageMetadata(
        sector_size=layout.sector_size,
        file_path=file_path,
        partitions=tuple(partitions),
    )


def _seek_table(stream: BinaryIO, file_path: str, layout: TableLayout) -> None:
    try:
        image_size = stream.seek(0, os.SEEK_END)
        if image_size <= layout.table_offset:
            raise SeekFailedError(
                file_path, layout.table_offset, image_size=image_size
            )
        stream.seek(layout.table_offset, os.SEEK_SET)
    except OSError as error:
        raise SeekFailedError(file_path, layout.table_offset, error) from error


def _read_entry(
    stream: BinaryIO, slot_index: int, file_path: str, layout: TableLayout
) -> PartitionEntry:
    offset = layout.entry_offset(slot_index)
    try:
        data = stream.read(layout.entry_size)
    except OSError as error:
        raise DecodeFailedError(
            slot_index, file_path, error, offset=offset
        ) from error

    if data is None or len(data) < layout.entry_size:
        raise DecodeFailedError(
            slot_index,
            file_path,
            bytes_read=len(data) if data else 0,
            offset=offset,
        )
    return PartitionEntry.from_bytes(data[: PARTITION_ENTRY_STRUCT.size])


def decode_partition_table(
    data: bytes, layout: TableLayout = DEFAULT_LAYOUT
) -> tuple[PartitionEntry, ...]:
    """Decode a raw table region into its entries.

    Raises:
        DecodeFailedError: For the first slot not fully present in ``data``
    """
    entries = []
    for slot_index in range(layout.slot_count):
        start = slot_index * layout.entry_size
        chunk = data[start : start + layout.entry_size]
        if len(chunk) < layout.entry_size:
            raise DecodeFailedError(slot_index, bytes_read=len(chunk))
        entries.append(PartitionEntry.from_bytes(chunk[: PARTITION_ENTRY_STRUCT.size]))
    return tuple(entries)


def encode_partition_table(
    entries: Iterable[PartitionEntry], layout: TableLayout = DEFAULT_LAYOUT
) -> bytes:
    """Encode entries back into a raw table region."""
    entries = list(entries)
    if len(entries) != layout.slot_count:
        raise ValueError(
            f"Expected {layout.slot_count} partition entries, got {len(entries)}"
        )
    return b"".join(
        entry.to_bytes().ljust(layout.entry_size, b"\x00") for entry in entries
    )
