from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from grokdisk.domain.models import DEFAULT_LAYOUT, ImageMetadata, TableLayout
from grokdisk.logging import LoggerFactory, operation_context
from grokdisk.storage.exceptions import ImageError
from grokdisk.storage.image_table import analyze_image_file


@dataclass(frozen=True)
class InspectionResult:
    path: str
    metadata: Optional[ImageMetadata] = None
    error: Optional[ImageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.metadata is not None:
            return {"path": self.path, "ok": True, **self.metadata.to_dict()}
        return {
            "path": self.path,
            "ok": False,
            "error": str(self.error),
            "error_type": type(self.error).__name__,
        }


def inspect_image(path, layout: Optional[TableLayout] = None) -> ImageMetadata:
    """Read one image's partition table, logging the attempt.

    Errors from the reader are logged by the operation context and re-raised.
    """
    with operation_context("inspect", image=os.fspath(path)) as log:
        metadata = analyze_image_file(path, layout=layout or DEFAULT_LAYOUT)
        log.debug("Sector size {} bytes", metadata.sector_size)
        for index, partition in enumerate(metadata.partitions):
            if partition.is_empty:
                log.trace("Slot {} empty", index)
            else:
                log.debug("Slot {}: {}", index, partition.describe())
        return metadata


def inspect_images(
    paths: Iterable, layout: Optional[TableLayout] = None
) -> List[InspectionResult]:
    """Inspect several images; a failing image does not stop the rest."""
    log = LoggerFactory.for_inspection()
    results: List[InspectionResult] = []
    for path in paths:
        file_path = os.fspath(path)
        try:
            metadata = inspect_image(file_path, layout=layout)
        except ImageError as error:
            results.append(InspectionResult(path=file_path, error=error))
            continue
        results.append(InspectionResult(path=file_path, metadata=metadata))
    log.info(
        "Inspected {} image(s), {} failed", len(results), len(failed_results(results))
    )
    return results


def failed_results(results: Iterable[InspectionResult]) -> List[InspectionResult]:
    return [result for result in results if not result.ok]


def format_metadata(metadata: ImageMetadata, *, show_empty: bool = True) -> List[str]:
    """Format metadata as display lines, one per partition slot.

    Hidden empty slots are left out of the text only; the metadata still
    holds all of them.
    """
    lines = [f"{metadata.file_path} (sector size: {metadata.sector_size} B)"]
    for index, partition in enumerate(metadata.partitions):
        if partition.is_empty and not show_empty:
            continue
        lines.append(f"  {index}: {partition.describe()}")
    return lines


def results_to_json(results: Iterable[InspectionResult]) -> str:
    return json.dumps([result.to_dict() for result in results], indent=2)
