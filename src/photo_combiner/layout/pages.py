"""
Module: layout.pages

Purpose:
    Resolve page-size presets (or a custom size) plus orientation into
    concrete pixel dimensions.

Key Functions:
    - resolve_page_dimensions(): Preset/custom + orientation -> PageSize

Used By:
    - layout.config: LayoutConfig.from_values
    - output.renderer: Page canvas sizing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .config import (
    LAYOUT_DEFAULTS,
    ORIENTATION_LANDSCAPE,
    ORIENTATION_PORTRAIT,
    ORIENTATIONS,
    coerce_choice,
    coerce_int,
)

logger = logging.getLogger(__name__)


CUSTOM_PRESET = "custom"


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in pixels."""

    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def transposed(self) -> "PageSize":
        return PageSize(width=self.height, height=self.width)


# Portrait sizes at 300 DPI
PAGE_PRESETS: dict[str, PageSize] = {
    "a4": PageSize(2480, 3508),
    "letter": PageSize(2550, 3300),
    "4x6": PageSize(1200, 1800),
    "5x7": PageSize(1500, 2100),
}

DEFAULT_PAGE = PAGE_PRESETS[LAYOUT_DEFAULTS["preset"]]


def resolve_page_dimensions(
    preset: str,
    custom_width: Any = None,
    custom_height: Any = None,
    orientation: str = ORIENTATION_PORTRAIT,
) -> PageSize:
    """
    Resolve a page preset and orientation to pixel dimensions.

    Custom sizes fall back to the default preset independently per axis
    when a value is missing, non-numeric or not positive. Unknown preset
    names resolve to the default preset. Landscape swaps the axes after
    resolution. Never raises.

    Args:
        preset: Preset name ("a4", "letter", "4x6", "5x7") or "custom"
        custom_width: Width in px when preset is "custom"
        custom_height: Height in px when preset is "custom"
        orientation: "portrait" or "landscape"

    Returns:
        PageSize with positive width and height

    Example:
        >>> resolve_page_dimensions("a4", orientation="landscape")
        PageSize(width=3508, height=2480)
    """
    name = str(preset or "").strip().lower()

    if name == CUSTOM_PRESET:
        page = PageSize(
            width=coerce_int(custom_width, DEFAULT_PAGE.width, name="custom width", minimum=1),
            height=coerce_int(custom_height, DEFAULT_PAGE.height, name="custom height", minimum=1),
        )
    elif name in PAGE_PRESETS:
        page = PAGE_PRESETS[name]
    else:
        logger.warning(f"Unknown page preset {preset!r}, using {LAYOUT_DEFAULTS['preset']!r}")
        page = DEFAULT_PAGE

    orientation = coerce_choice(
        orientation,
        ORIENTATIONS,
        ORIENTATION_PORTRAIT,
        name="orientation",
    )
    if orientation == ORIENTATION_LANDSCAPE:
        page = page.transposed()

    return page
