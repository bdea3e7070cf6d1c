"""Read MBR partition tables of raw disk images."""

from .__version__ import __version__
from .domain import ImageMetadata, Partition, PartitionEntry, TableLayout
from .storage import (
    DecodeFailedError,
    ImageError,
    OpenFailedError,
    SeekFailedError,
    analyze_image_file,
)

__all__ = [
    "__version__",
    "DecodeFailedError",
    "ImageError",
    "ImageMetadata",
    "OpenFailedError",
    "Partition",
    "PartitionEntry",
    "SeekFailedError",
    "TableLayout",
    "analyze_image_file",
]
