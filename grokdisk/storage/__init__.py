"""Disk image storage access."""

from .exceptions import (
    DecodeFailedError,
    ImageError,
    OpenFailedError,
    SeekFailedError,
)
from .image_table import (
    analyze_image_file,
    decode_partition_table,
    encode_partition_table,
    read_image_metadata,
)

__all__ = [
    "DecodeFailedError",
    "ImageError",
    "OpenFailedError",
    "SeekFailedError",
    "analyze_image_file",
    "decode_partition_table",
    "encode_partition_table",
    "read_image_metadata",
]
