"""
Module: photo_combiner.config

Purpose:
    Configuration dataclass for the combine pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - CombinerConfig: Main configuration for combining photos

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - photo_combiner.controller: Main pipeline
    - photo_combiner.cli: Command line
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from photo_combiner.layout.config import LAYOUT_DEFAULTS, LayoutConfig
from photo_combiner.output.renderer import DEFAULT_BG_COLOR, DEFAULT_DPI


@dataclass(frozen=True)
class CombinerConfig:
    """
    Configuration for combining photos onto pages (immutable).

    Layout fields accept raw values (strings from a form or the command
    line); they are coerced with fallback to the layout defaults when
    the layout config is built, so a bad value never fails the run.

    Attributes:
        inputs: Image files or directories, in display order
        output_dir: Output directory (timestamped folder if None)
        preset: Page preset name or "custom"
        orientation: "portrait" or "landscape"
        custom_width: Page width in px for the custom preset
        custom_height: Page height in px for the custom preset
        spacing: Gap between images (px)
        padding: Page margin (px)
        images_per_row: Columns in grid mode
        strategy: "grid" or "shelf"
        bg_color: Page background color
        export_png: Write one PNG per page
        export_pdf: Also write all pages to combined.pdf
        dpi: Resolution used for the PDF page size

    Example:
        >>> config = CombinerConfig(inputs=[Path("photos")], strategy="shelf")
        >>> config.to_layout_config().strategy
        'shelf'
    """

    # Required
    inputs: List[Path]

    # Output
    output_dir: Optional[Path] = None
    export_png: bool = True
    export_pdf: bool = False
    dpi: int = DEFAULT_DPI

    # Page
    preset: str = LAYOUT_DEFAULTS["preset"]
    orientation: str = LAYOUT_DEFAULTS["orientation"]
    custom_width: Any = None
    custom_height: Any = None

    # Layout
    spacing: Any = LAYOUT_DEFAULTS["spacing"]
    padding: Any = LAYOUT_DEFAULTS["padding"]
    images_per_row: Any = LAYOUT_DEFAULTS["images_per_row"]
    strategy: str = LAYOUT_DEFAULTS["strategy"]

    # Rendering
    bg_color: str = DEFAULT_BG_COLOR

    metadata_filename: str = "combine_metadata.json"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.inputs:
            raise ValueError("inputs must name at least one file or directory")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if not (self.export_png or self.export_pdf):
            raise ValueError("At least one of export_png/export_pdf must be enabled")

    def to_layout_config(self) -> LayoutConfig:
        """Build the layout config, falling back to defaults for bad values."""
        return LayoutConfig.from_values(
            preset=self.preset,
            orientation=self.orientation,
            custom_width=self.custom_width,
            custom_height=self.custom_height,
            spacing=self.spacing,
            padding=self.padding,
            images_per_row=self.images_per_row,
            strategy=self.strategy,
        )
