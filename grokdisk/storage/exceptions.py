"""Custom exceptions for disk image partition table reads.

Every failure aborts the whole read; none of these carry partial results.
The underlying I/O error, where there is one, is kept on ``cause`` and
chained as ``__cause__``.

Exception Hierarchy:
    ImageError (base)
        ├── OpenFailedError
        ├── SeekFailedError
        └── DecodeFailedError

Usage:
    from grokdisk.storage.exceptions import DecodeFailedError

    try:
        metadata = analyze_image_file(path)
    except DecodeFailedError as error:
        print(f"slot {error.slot_index} is truncated")
"""

from __future__ import annotations

from typing import Optional


class ImageError(Exception):
    """Base exception for all image table reads."""


class OpenFailedError(ImageError):
    """The image could not be opened for binary random-access reading."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        msg = f"Could not open image file {path}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class SeekFailedError(ImageError):
    """The partition table offset lies outside the image."""

    def __init__(
        self,
        path: str,
        offset: int,
        cause: Optional[BaseException] = None,
        image_size: Optional[int] = None,
    ):
        self.path = path
        self.offset = offset
        self.cause = cause
        self.image_size = image_size
        msg = f"Could not seek partition table at offset {offset} in {path}"
        if image_size is not None:
            msg += f" (image is only {image_size} bytes)"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class DecodeFailedError(ImageError):
    """A partition table slot could not be read in full."""

    def __init__(
        self,
        slot_index: int,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        bytes_read: Optional[int] = None,
        offset: Optional[int] = None,
    ):
        self.slot_index = slot_index
        self.path = path
        self.cause = cause
        self.bytes_read = bytes_read
        self.offset = offset
        msg = f"Could not read partition entry {slot_index}"
        if offset is not None:
            msg += f" at offset {offset}"
        if path is not None:
            msg += f" of {path}"
        if bytes_read is not None:
            msg += f" (short read: {bytes_read} bytes)"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
