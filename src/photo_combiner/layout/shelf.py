"""
Module: layout.shelf

Purpose:
    Greedy shelf packing: fill each row with as many images as fit the
    available width, then scale the row so it spans the width exactly.
    Packs more images per page than the grid for mixed aspect ratios.

Key Functions:
    - pack_shelf(): Main packing function
    - prepare_images(): Provisional display sizes at the target row height

Algorithm:
    1. Size every image to a target row height of a quarter of the
       available height
    2. Stable-sort by display width, widest first
    3. Build rows by a first-fit scan over the unused images; if nothing
       fits an empty row, force the first unused image found scanning the
       sorted order from the narrowest end
    4. Scale each row to the available width and stack rows on pages

Used By:
    - layout.engine: Shelf strategy
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .models import ImageDescriptor, PagePlan, Placement, PreparedImage

logger = logging.getLogger(__name__)

# Rows assumed to fit on a page when picking the target row height
TARGET_ROWS_PER_PAGE = 4


def prepare_images(
    images: Sequence[ImageDescriptor],
    target_height: float,
) -> List[PreparedImage]:
    """Pair each descriptor with its display size at ``target_height``."""
    return [
        PreparedImage.at_height(image, index, target_height)
        for index, image in enumerate(images)
    ]


def pack_shelf(
    images: Sequence[ImageDescriptor],
    *,
    available_width: float,
    available_height: float,
    spacing: int,
    padding: int,
    page_height: int,
) -> List[PagePlan]:
    """
    Arrange images onto pages using greedy row packing.

    The caller's sequence is never reordered; rows are built from a
    sorted copy, so page order follows row construction rather than
    input order.

    Args:
        images: Images to place
        available_width: Page width minus padding on both sides
        available_height: Page height minus padding on both sides
        spacing: Gap between images and rows (px)
        padding: Page margin on every edge (px)
        page_height: Page height in pixels

    Returns:
        List of PagePlans, each with at least one placement
    """
    target_height = available_height / TARGET_ROWS_PER_PAGE
    prepared = prepare_images(images, target_height)

    # sorted() is stable: equal widths keep input order
    ordered = sorted(prepared, key=lambda item: item.display_width, reverse=True)

    used = [False] * len(prepared)
    remaining = len(prepared)

    pages: List[PagePlan] = []
    current_page: List[Placement] = []
    current_y: float = padding
    page_bottom = page_height - padding

    while remaining > 0:
        row, row_width, row_height = _fill_row(ordered, used, available_width, spacing)

        if not row:
            row, row_width, row_height = _force_row(ordered, used)
            logger.debug(
                f"No image fits {available_width}px; forced {row[0].descriptor.id!r} onto its own row"
            )

        remaining -= len(row)

        scale = available_width / row_width
        scaled_row_height = row_height * scale

        if current_y + scaled_row_height > page_bottom and current_page:
            pages.append(PagePlan(index=len(pages), placements=tuple(current_page)))
            current_page = []
            current_y = padding

        x: float = padding
        for item in row:
            scaled_width = item.display_width * scale
            scaled_height = item.display_height * scale
            current_page.append(Placement(
                image_id=item.descriptor.id,
                x=x,
                y=current_y,
                width=scaled_width,
                height=scaled_height,
            ))
            x += scaled_width + spacing * scale

        current_y += scaled_row_height + spacing

    if current_page:
        pages.append(PagePlan(index=len(pages), placements=tuple(current_page)))

    logger.debug(f"Shelf packed {len(prepared)} images onto {len(pages)} pages")
    return pages


def _fill_row(
    ordered: Sequence[PreparedImage],
    used: List[bool],
    available_width: float,
    spacing: int,
) -> Tuple[List[PreparedImage], float, float]:
    """
    First-fit scan over unused images, marking the ones taken.

    Returns:
        (row images, row width including spacing, tallest display height)
    """
    row: List[PreparedImage] = []
    row_width: float = 0
    row_height: float = 0

    for item in ordered:
        if used[item.index]:
            continue

        needed = item.display_width + spacing if row else item.display_width
        if row_width + needed <= available_width:
            row.append(item)
            row_width += needed
            row_height = max(row_height, item.display_height)
            used[item.index] = True

    return row, row_width, row_height


def _force_row(
    ordered: Sequence[PreparedImage],
    used: List[bool],
) -> Tuple[List[PreparedImage], float, float]:
    """
    Take the first unused image met scanning from the narrowest end.

    Among equal widths this picks the one later in the input, which is
    not necessarily the one a value comparison would choose.
    """
    for item in reversed(ordered):
        if not used[item.index]:
            used[item.index] = True
            return [item], item.display_width, item.display_height
    raise RuntimeError("No unused image left to force onto a row")
