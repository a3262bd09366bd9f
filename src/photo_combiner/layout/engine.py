"""
Module: layout.engine

Purpose:
    Entry point of the layout core. Validates input images, picks the
    packing strategy from the configuration and wraps the pages in a
    LayoutResult.

Key Functions:
    - layout(): Images + LayoutConfig -> LayoutResult

Used By:
    - photo_combiner.controller: Build pipeline
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .config import STRATEGY_SHELF, LayoutConfig
from .grid import pack_grid
from .models import ImageDescriptor, LayoutResult, PagePlan
from .shelf import pack_shelf

logger = logging.getLogger(__name__)

# Tolerance for floating-point row rescaling
BOUNDS_EPSILON = 1e-6


def layout(
    images: Sequence[ImageDescriptor],
    config: LayoutConfig,
) -> LayoutResult:
    """
    Compute page placements for every image.

    Empty input is not an error: it yields a result with no pages.
    Images with a zero or negative dimension are treated as 1px on that
    axis. Images too large for a page are placed anyway and reported in
    ``LayoutResult.warnings``.

    Args:
        images: Images in display order (not modified)
        config: Layout configuration with resolved page size

    Returns:
        LayoutResult with page plans

    Example:
        >>> result = layout([ImageDescriptor("a", 1000, 1000)], LayoutConfig())
        >>> result.page_count
        1
    """
    warnings: List[str] = []

    if not images:
        logger.info("No images to lay out")
        return LayoutResult(
            pages=(),
            page_width=config.page_width,
            page_height=config.page_height,
            strategy=config.strategy,
            warnings=warnings,
        )

    _check_unique_ids(images)
    prepared = _sanitize(images, warnings)
    padding = _effective_padding(config, warnings)

    available_width = config.page_width - 2 * padding
    available_height = config.page_height - 2 * padding

    if config.strategy == STRATEGY_SHELF:
        pages = pack_shelf(
            prepared,
            available_width=available_width,
            available_height=available_height,
            spacing=config.spacing,
            padding=padding,
            page_height=config.page_height,
        )
    else:
        gaps = config.spacing * (config.images_per_row - 1)
        cell_width = (available_width - gaps) / config.images_per_row
        if cell_width <= 0:
            msg = (
                f"Spacing {config.spacing}px leaves no room for "
                f"{config.images_per_row} images per row; using 1 per row"
            )
            logger.warning(msg)
            warnings.append(msg)
            images_per_row = 1
            cell_width = available_width
        else:
            images_per_row = config.images_per_row
        pages = pack_grid(
            prepared,
            cell_width=cell_width,
            images_per_row=images_per_row,
            spacing=config.spacing,
            padding=padding,
            page_width=config.page_width,
            page_height=config.page_height,
        )

    warnings.extend(_overflow_warnings(pages, config, padding))

    logger.info(f"Laid out {len(images)} images onto {len(pages)} pages ({config.strategy})")

    return LayoutResult(
        pages=tuple(pages),
        page_width=config.page_width,
        page_height=config.page_height,
        strategy=config.strategy,
        warnings=warnings,
    )


def _check_unique_ids(images: Sequence[ImageDescriptor]) -> None:
    seen = set()
    for image in images:
        if image.id in seen:
            raise ValueError(f"Duplicate image id: {image.id!r}")
        seen.add(image.id)


def _sanitize(
    images: Sequence[ImageDescriptor],
    warnings: List[str],
) -> List[ImageDescriptor]:
    """Replace degenerate descriptors so no scale factor divides by zero."""
    result = []
    for image in images:
        if image.is_degenerate:
            msg = f"Image {image.id!r} has invalid size {image.width}x{image.height}; treating as 1px"
            logger.warning(msg)
            warnings.append(msg)
            image = image.sanitized()
        result.append(image)
    return result


def _effective_padding(config: LayoutConfig, warnings: List[str]) -> int:
    """Shrink padding that would leave no drawable area on the page."""
    limit = (min(config.page_width, config.page_height) - 1) // 2
    if config.padding <= limit:
        return config.padding
    msg = f"Padding {config.padding}px exceeds the page; reduced to {limit}px"
    logger.warning(msg)
    warnings.append(msg)
    return limit


def _overflow_warnings(
    pages: Sequence[PagePlan],
    config: LayoutConfig,
    padding: int,
) -> List[str]:
    """Report placements that cross the padded area (oversized images)."""
    right_limit = config.page_width - padding + BOUNDS_EPSILON
    bottom_limit = config.page_height - padding + BOUNDS_EPSILON

    messages = []
    for page in pages:
        for placement in page.placements:
            if placement.right > right_limit or placement.bottom > bottom_limit:
                msg = (
                    f"Image {placement.image_id!r} overflows page {page.index + 1} "
                    f"({placement.width:.0f}x{placement.height:.0f}px at "
                    f"{placement.x:.0f},{placement.y:.0f})"
                )
                logger.warning(msg)
                messages.append(msg)
    return messages
