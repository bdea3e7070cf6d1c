"""Domain model for MBR partition table inspection.

These objects are the read model handed to mounting and inspection tooling:
the raw 16-byte partition entries, the partitions built on top of them, and
the image metadata that owns the four primary slots.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any


# ==============================================================================
# Table Layout
# ==============================================================================

# Absolute location of the primary partition table within the first sector
MBR_PARTITION_TABLE_OFFSET = 0x1BE
# Length of one partition table entry in bytes
MBR_PARTITION_ENTRY_SIZE = 0x10
MBR_PARTITION_SLOT_COUNT = 4
# Assumed, never read from the image
DEFAULT_SECTOR_SIZE = 512
# Sector size is an unsigned 16-bit value
MAX_SECTOR_SIZE = 0xFFFF

# status, start CHS, type, end CHS (1 byte each), first LBA, sector count
PARTITION_ENTRY_STRUCT = struct.Struct("<8B2I")


def is_valid_sector_size(sector_size: int) -> bool:
    return 0 < sector_size <= MAX_SECTOR_SIZE


@dataclass(frozen=True)
class TableLayout:
    """Where the partition table lives and how its entries are sized.

    Raises:
        ValueError: If the sector size does not fit in 16 bits or entries
            are too short to hold a partition record
    """

    table_offset: int = MBR_PARTITION_TABLE_OFFSET
    entry_size: int = MBR_PARTITION_ENTRY_SIZE
    slot_count: int = MBR_PARTITION_SLOT_COUNT
    sector_size: int = DEFAULT_SECTOR_SIZE

    def __post_init__(self) -> None:
        if not is_valid_sector_size(self.sector_size):
            raise ValueError(
                f"Sector size must be between 1 and {MAX_SECTOR_SIZE}, "
                f"got {self.sector_size}"
            )
        if self.entry_size < PARTITION_ENTRY_STRUCT.size:
            raise ValueError(
                f"Entry size must be at least {PARTITION_ENTRY_STRUCT.size} bytes, "
                f"got {self.entry_size}"
            )

    @property
    def table_size(self) -> int:
        """Number of bytes consumed by the whole table."""
        return self.entry_size * self.slot_count

    def entry_offset(self, slot_index: int) -> int:
        """Absolute byte offset of a slot's entry within the image."""
        return self.table_offset + slot_index * self.entry_size


DEFAULT_LAYOUT = TableLayout()


# ==============================================================================
# Partition Entry
# ==============================================================================

@dataclass(frozen=True)
class PartitionEntry:
    """The raw 16-byte partition table record.

    CHS fields are kept for fidelity only; offsets are derived from the LBA
    fields. Status and type codes are not interpreted.
    """

    status: int = 0
    start_head: int = 0
    start_sector: int = 0
    start_cylinder: int = 0
    partition_type: int = 0
    end_head: int = 0
    end_sector: int = 0
    end_cylinder: int = 0
    first_sector_lba: int = 0
    sector_count: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> PartitionEntry:
        """Decode one little-endian partition entry.

        Raises:
            ValueError: If ``data`` is not exactly 16 bytes long
        """
        if len(data) != PARTITION_ENTRY_STRUCT.size:
            raise ValueError(
                f"Partition entry must be {PARTITION_ENTRY_STRUCT.size} bytes, "
                f"got {len(data)}"
            )
        return cls(*PARTITION_ENTRY_STRUCT.unpack(data))

    def to_bytes(self) -> bytes:
        """Encode the entry back into its on-disk form."""
        return PARTITION_ENTRY_STRUCT.pack(
            self.status,
            self.start_head,
            self.start_sector,
            self.start_cylinder,
            self.partition_type,
            self.end_head,
            self.end_sector,
            self.end_cylinder,
            self.first_sector_lba,
            self.sector_count,
        )

    @property
    def is_empty(self) -> bool:
        """True for an unused (all-zero) slot."""
        return self == EMPTY_ENTRY


EMPTY_ENTRY = PartitionEntry()


# ==============================================================================
# Partition
# ==============================================================================


@dataclass(frozen=True)
class Partition:
    """A partition table slot with byte-level geometry.

    Only the owning image's sector size is held here, never the image
    metadata itself.
    """

    entry: PartitionEntry
    sector_size: int = DEFAULT_SECTOR_SIZE

    def __getattr__(self, name: str) -> Any:
        # Raw entry fields read straight through the partition
        if name.startswith("_") or name == "entry":
            raise AttributeError(name)
        return getattr(self.entry, name)

    @property
    def start_offset_bytes(self) -> int:
        """Byte offset of the partition's first sector within the image."""
        return self.entry.first_sector_lba * self.sector_size

    @property
    def size_bytes(self) -> int:
        """Length of the partition in bytes."""
        return self.entry.sector_count * self.sector_size

    @property
    def is_empty(self) -> bool:
        return self.entry.is_empty

    def describe(self) -> str:
        """Format a one-line summary for diagnostics.

        Returns: e.g., "status: 128 type: 11, start: 63 sectors (32256 B),
        length: 784897 sectors (401867264 B)"
        """
        return (
            f"status: {self.entry.status} type: {self.entry.partition_type}, "
            f"start: {self.entry.first_sector_lba} sectors "
            f"({self.start_offset_bytes} B), "
            f"length: {self.entry.sector_count} sectors ({self.size_bytes} B)"
        )

    def __str__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.entry.status,
            "partition_type": self.entry.partition_type,
            "start_chs": [
                self.entry.start_cylinder,
                self.entry.start_head,
                self.entry.start_sector,
            ],
            "end_chs": [
                self.entry.end_cylinder,
                self.entry.end_head,
                self.entry.end_sector,
            ],
            "first_sector_lba": self.entry.first_sector_lba,
            "sector_count": self.entry.sector_count,
            "start_offset_bytes": self.start_offset_bytes,
            "size_bytes": self.size_bytes,
        }


# ==============================================================================
# Image Metadata
# ==============================================================================


@dataclass(frozen=True)
class ImageMetadata:
    """Partition table contents of one disk image file.

    ``partitions`` is in table-slot order; the slot index is the position.
    """

    sector_size: int
    file_path: str
    partitions: tuple[Partition, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store it immutably
        object.__setattr__(self, "partitions", tuple(self.partitions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "sector_size": self.sector_size,
            "partitions": [
                {"slot": index, **partition.to_dict()}
                for index, partition in enumerate(self.partitions)
            ],
        }
