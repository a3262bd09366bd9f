"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Holds the single defaults table consulted whenever a raw value is
    missing or unusable, and the immutable LayoutConfig built from it.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Key Functions:
    - coerce_int(): Lenient integer parsing with fallback

Dependencies:
    - dataclasses (std)

Used By:
    - layout.pages: Custom page size fallback
    - layout.engine: Packer dispatch
    - photo_combiner.config: Pipeline configuration
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)


STRATEGY_GRID = "grid"
STRATEGY_SHELF = "shelf"
STRATEGIES = (STRATEGY_GRID, STRATEGY_SHELF)

ORIENTATION_PORTRAIT = "portrait"
ORIENTATION_LANDSCAPE = "landscape"
ORIENTATIONS = (ORIENTATION_PORTRAIT, ORIENTATION_LANDSCAPE)

# Reference resolution for the page presets
PRESET_DPI = 300

# Fallbacks for every user-facing layout setting
LAYOUT_DEFAULTS: dict[str, Any] = {
    "preset": "a4",
    "orientation": ORIENTATION_PORTRAIT,
    "page_width": 2480,  # A4 width at 300 DPI
    "page_height": 3508,  # A4 height at 300 DPI
    "spacing": 20,
    "padding": 40,
    "images_per_row": 2,
    "strategy": STRATEGY_GRID,
}


def coerce_int(
    value: Any,
    default: int,
    *,
    name: str = "value",
    minimum: int = 0,
) -> int:
    """
    Parse a raw setting into an int, falling back to a default.

    Accepts ints, integral floats and numeric strings ("20", " 40 ",
    "12.0"). Anything else, or a value below ``minimum``, yields
    ``default``. Booleans are rejected.

    Args:
        value: Raw value from a form, CLI or caller
        default: Value used when ``value`` is unusable
        name: Setting name for the warning message
        minimum: Smallest accepted value

    Returns:
        Parsed integer or ``default``

    Example:
        >>> coerce_int("15", 20, name="spacing")
        15
        >>> coerce_int("abc", 20, name="spacing")
        20
    """
    if value is None or value == "":
        return default

    parsed: Optional[int] = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                parsed = None
            else:
                if math.isfinite(as_float):
                    parsed = int(as_float)

    if parsed is None or parsed < minimum:
        logger.warning(f"Invalid {name} {value!r}, using default {default}")
        return default
    return parsed


def coerce_choice(value: Any, choices: tuple[str, ...], default: str, *, name: str) -> str:
    """Normalize a string option, falling back to ``default`` if unknown."""
    if value is None or value == "":
        return default
    text = str(value).strip().lower()
    if text not in choices:
        logger.warning(f"Unknown {name} {value!r}, using {default!r}")
        return default
    return text


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Page dimensions are already resolved to pixels; use
    ``LayoutConfig.from_values`` to build one from a preset name or
    raw user input.

    Attributes:
        page_width: Page width in pixels
        page_height: Page height in pixels
        spacing: Gap between adjacent images (px)
        padding: Empty margin on all four page edges (px)
        images_per_row: Columns in grid mode
        strategy: "grid" or "shelf"

    Example:
        >>> config = LayoutConfig()
        >>> config.available_width
        2400
    """

    page_width: int = LAYOUT_DEFAULTS["page_width"]
    page_height: int = LAYOUT_DEFAULTS["page_height"]
    spacing: int = LAYOUT_DEFAULTS["spacing"]
    padding: int = LAYOUT_DEFAULTS["padding"]
    images_per_row: int = LAYOUT_DEFAULTS["images_per_row"]
    strategy: str = LAYOUT_DEFAULTS["strategy"]

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.spacing < 0:
            raise ValueError(f"spacing must be non-negative: {self.spacing}")
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative: {self.padding}")
        if self.images_per_row < 1:
            raise ValueError(f"images_per_row must be at least 1: {self.images_per_row}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}: {self.strategy!r}")

    @classmethod
    def from_values(
        cls,
        *,
        preset: Any = None,
        orientation: Any = None,
        custom_width: Any = None,
        custom_height: Any = None,
        spacing: Any = None,
        padding: Any = None,
        images_per_row: Any = None,
        strategy: Any = None,
    ) -> "LayoutConfig":
        """
        Build a config from raw, possibly invalid, user values.

        Every unusable value is replaced by its entry in LAYOUT_DEFAULTS,
        so this never raises.
        """
        from .pages import resolve_page_dimensions

        page = resolve_page_dimensions(
            preset if preset not in (None, "") else LAYOUT_DEFAULTS["preset"],
            custom_width,
            custom_height,
            orientation if orientation not in (None, "") else LAYOUT_DEFAULTS["orientation"],
        )
        return cls(
            page_width=page.width,
            page_height=page.height,
            spacing=coerce_int(spacing, LAYOUT_DEFAULTS["spacing"], name="spacing"),
            padding=coerce_int(padding, LAYOUT_DEFAULTS["padding"], name="padding"),
            images_per_row=coerce_int(
                images_per_row,
                LAYOUT_DEFAULTS["images_per_row"],
                name="images_per_row",
                minimum=1,
            ),
            strategy=coerce_choice(
                strategy, STRATEGIES, LAYOUT_DEFAULTS["strategy"], name="strategy",
            ),
        )

    @property
    def available_width(self) -> int:
        """Width available for images (page width minus padding on both sides)."""
        return self.page_width - 2 * self.padding

    @property
    def available_height(self) -> int:
        """Height available for images (page height minus padding on both sides)."""
        return self.page_height - 2 * self.padding

    @property
    def cell_width(self) -> float:
        """Width of one grid cell."""
        gaps = self.spacing * (self.images_per_row - 1)
        return (self.available_width - gaps) / self.images_per_row
