"""
Module: photo_combiner.controller

Purpose:
    Orchestrate the complete combine pipeline.
    Collect → Load → Layout → Render → Metadata

Key Functions:
    - combine_images(): Main entry point for combining photos

Key Classes:
    - CombineResult: Complete combine result
    - CombineError: Exception for pipeline failures

Dependencies:
    - photo_combiner.images: File selection and decoding
    - photo_combiner.layout: Page layout
    - photo_combiner.output: PNG/PDF rendering

Used By:
    - photo_combiner.cli: Command line
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .config import CombinerConfig
from .images import LoadReport, LoadedImageProvider, collect_image_files, load_images
from .layout import LayoutConfig, LayoutResult, layout
from .layout.config import (
    ORIENTATION_LANDSCAPE,
    ORIENTATION_PORTRAIT,
    ORIENTATIONS,
    coerce_choice,
)
from .output.renderer import parse_color, render_to_pdf, render_to_png

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_ROOT = Path("output")
PDF_FILENAME = "combined.pdf"


class CombineError(Exception):
    """Error during combine pipeline."""
    pass


@dataclass(frozen=True)
class CombineResult:
    """
    Complete combine result (immutable).

    Attributes:
        output_dir: Directory holding all outputs
        page_paths: PNG file per page, in page order
        pdf_path: Combined PDF (if generated)
        layout: Layout result the pages were rendered from
        failures: (path, reason) for inputs that could not be decoded
        metadata: Metadata dictionary written next to the pages
        warnings: Any warnings during the run

    Example:
        >>> result = combine_images(config)
        >>> print(f"Generated {result.page_count} pages")
    """
    output_dir: Path
    page_paths: tuple[Path, ...]
    pdf_path: Optional[Path]
    layout: LayoutResult
    failures: tuple[Tuple[Path, str], ...]
    metadata: dict
    warnings: tuple[str, ...]

    @property
    def page_count(self) -> int:
        return self.layout.page_count


def combine_images(config: CombinerConfig) -> CombineResult:
    """
    Combine photos onto pages from start to finish.

    Pipeline:
    1. Collect image files from the inputs
    2. Decode them (failures are reported, not fatal)
    3. Lay out the decoded images
    4. Render pages to PNG and/or PDF
    5. Write combine_metadata.json

    Args:
        config: Combine configuration

    Returns:
        CombineResult with paths and metadata

    Raises:
        CombineError: If no image could be loaded or output fails
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    # 1. Collect files
    files = collect_image_files(config.inputs)
    if not files:
        raise CombineError("No image files found in the given inputs")
    logger.info(f"Found {len(files)} image files")

    # 2. Decode
    report = load_images(files)
    warnings.extend(f"Could not load {path.name}: {reason}" for path, reason in report.failures)
    if not report.loaded:
        raise CombineError("None of the input images could be loaded")

    # 3. Layout
    layout_config = config.to_layout_config()
    result = layout(report.descriptors, layout_config)
    warnings.extend(result.warnings)

    # 4. Output directory
    if config.output_dir:
        output_dir = Path(config.output_dir)
    else:
        output_dir = _generate_output_dir(DEFAULT_OUTPUT_ROOT, config, layout_config)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CombineError(f"Cannot create output directory {output_dir}: {e}") from e
    logger.info(f"Output directory: {output_dir}")

    # 5. Render
    bg_color = parse_color(config.bg_color)
    page_paths: List[Path] = []
    pdf_path: Optional[Path] = None
    try:
        with LoadedImageProvider(report.loaded) as provider:
            if config.export_png:
                page_paths = render_to_png(result, output_dir, provider, bg_color=bg_color)
            if config.export_pdf:
                pdf_path = render_to_pdf(
                    result,
                    output_dir / PDF_FILENAME,
                    provider,
                    bg_color=bg_color,
                    dpi=config.dpi,
                )
    except OSError as e:
        raise CombineError(f"Failed to write pages: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Combined {report.loaded_count} images onto {result.page_count} pages in {elapsed:.2f}s")

    # 6. Metadata
    metadata = _build_metadata(config, layout_config, result, report, page_paths, pdf_path)
    _write_metadata(output_dir / config.metadata_filename, metadata)

    return CombineResult(
        output_dir=output_dir,
        page_paths=tuple(page_paths),
        pdf_path=pdf_path,
        layout=result,
        failures=tuple(report.failures),
        metadata=metadata,
        warnings=tuple(warnings),
    )


def _generate_output_dir(
    base_dir: Path,
    config: CombinerConfig,
    layout_config: LayoutConfig,
) -> Path:
    """
    Create a timestamped folder name inside base_dir.

    Returns:
        Path like base/20250116-103045__shelf__a4-landscape
    """
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    page_segment = str(config.preset or "page").lower()
    orientation = coerce_choice(
        config.orientation, ORIENTATIONS, ORIENTATION_PORTRAIT, name="orientation",
    )
    if orientation == ORIENTATION_LANDSCAPE:
        page_segment += "-landscape"

    folder_name = f"{timestamp}__{layout_config.strategy}__{page_segment}"
    folder_name = re.sub(r"[^A-Za-z0-9_\-+]", "-", folder_name).strip("-")

    candidate = base_dir / folder_name
    suffix = 1
    while candidate.exists():
        candidate = base_dir / f"{folder_name} ({suffix})"
        suffix += 1
    return candidate


def _build_metadata(
    config: CombinerConfig,
    layout_config: LayoutConfig,
    result: LayoutResult,
    report: LoadReport,
    page_paths: List[Path],
    pdf_path: Optional[Path],
) -> dict:
    """
    Build metadata dictionary for the generated pages.

    Contains the effective layout settings, the placement manifest per
    page and the inputs that failed to load.
    """
    sources = {item.id: item.path.name for item in report.loaded}

    pages = []
    for page in result.pages:
        pages.append({
            "page": page.index + 1,  # 1-indexed for humans
            "file": page_paths[page.index].name if page_paths else None,
            "placements": [
                {
                    "image_id": p.image_id,
                    "source": sources.get(p.image_id),
                    "x": round(p.x, 3),
                    "y": round(p.y, 3),
                    "width": round(p.width, 3),
                    "height": round(p.height, 3),
                }
                for p in page.placements
            ],
        })

    return {
        "generated_at": datetime.now().isoformat(),
        "layout": {
            "preset": config.preset,
            "orientation": config.orientation,
            "page_width": layout_config.page_width,
            "page_height": layout_config.page_height,
            "spacing": layout_config.spacing,
            "padding": layout_config.padding,
            "images_per_row": layout_config.images_per_row,
            "strategy": layout_config.strategy,
        },
        "bg_color": config.bg_color,
        "image_count": report.loaded_count,
        "page_count": result.page_count,
        "pdf": pdf_path.name if pdf_path else None,
        "pages": pages,
        "failures": [
            {"file": path.name, "reason": reason} for path, reason in report.failures
        ],
        "warnings": list(result.warnings),
    }


def _write_metadata(metadata_path: Path, metadata: dict) -> None:
    """
    Write metadata JSON file.

    Raises:
        CombineError: If writing fails
    """
    try:
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2)
        logger.debug(f"Wrote metadata to {metadata_path}")
    except OSError as e:
        raise CombineError(f"Failed to write metadata: {e}") from e
