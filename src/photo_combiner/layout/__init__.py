"""
Module: photo_combiner.layout

Purpose:
    Page layout engine. Turns an ordered list of image sizes into pages
    of placements. Performs no image decoding or drawing.

Key Functions:
    - layout(): Main entry point
    - resolve_page_dimensions(): Preset/custom size + orientation
    - pack_grid(): Uniform grid strategy
    - pack_shelf(): Greedy shelf strategy

Key Classes:
    - LayoutConfig: Configuration for page layout
    - ImageDescriptor: Image id and natural size
    - Placement: Image position and size on a page
    - PagePlan: Single page layout plan
    - LayoutResult: Layout output

Used By:
    - photo_combiner.controller: Build pipeline
    - photo_combiner.output: Rendering
"""

from .config import (
    LAYOUT_DEFAULTS,
    STRATEGIES,
    STRATEGY_GRID,
    STRATEGY_SHELF,
    LayoutConfig,
)
from .pages import PAGE_PRESETS, PageSize, resolve_page_dimensions
from .models import ImageDescriptor, PreparedImage, Placement, PagePlan, LayoutResult
from .grid import pack_grid
from .shelf import pack_shelf
from .engine import layout

__all__ = [
    # Config
    "LAYOUT_DEFAULTS",
    "STRATEGIES",
    "STRATEGY_GRID",
    "STRATEGY_SHELF",
    "LayoutConfig",
    # Pages
    "PAGE_PRESETS",
    "PageSize",
    "resolve_page_dimensions",
    # Models
    "ImageDescriptor",
    "PreparedImage",
    "Placement",
    "PagePlan",
    "LayoutResult",
    # Functions
    "pack_grid",
    "pack_shelf",
    "layout",
]
