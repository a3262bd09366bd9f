"""
Module: layout.grid

Purpose:
    Arrange images onto pages in a uniform grid with a fixed number of
    images per row.

Algorithm:
    1. Scale every image so its width equals the cell width
    2. Start a new row once the current row is full; the row advance is
       the tallest scaled image in the row plus spacing
    3. Start a new page when the next image would cross the bottom
       padding and the current page already holds something
    4. Images taller than a page are still placed (they may protrude)

Used By:
    - layout.engine: Grid strategy
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import ImageDescriptor, PagePlan, Placement

logger = logging.getLogger(__name__)


def pack_grid(
    images: Sequence[ImageDescriptor],
    *,
    cell_width: float,
    images_per_row: int,
    spacing: int,
    padding: int,
    page_width: int,
    page_height: int,
) -> List[PagePlan]:
    """
    Arrange images in input order onto pages as a uniform grid.

    Args:
        images: Images in display order (not modified)
        cell_width: Width of one grid cell in pixels
        images_per_row: Number of images per row
        spacing: Gap between cells and rows (px)
        padding: Page margin on every edge (px)
        page_width: Page width in pixels (unused by the grid walk)
        page_height: Page height in pixels

    Returns:
        List of PagePlans, each with at least one placement
    """
    pages: List[PagePlan] = []
    page_bottom = page_height - padding

    current_page: List[Placement] = []
    current_y: float = padding
    row_height: float = 0
    row_count = 0

    for image in images:
        scale = cell_width / image.width
        scaled_height = image.height * scale

        # Row full - move cursor below the tallest image
        if row_count >= images_per_row:
            current_y += row_height + spacing
            row_height = 0
            row_count = 0

        # Seal the page if this image would cross the bottom padding
        if current_y + scaled_height > page_bottom and current_page:
            pages.append(PagePlan(index=len(pages), placements=tuple(current_page)))
            current_page = []
            current_y = padding
            row_height = 0
            row_count = 0

        current_page.append(Placement(
            image_id=image.id,
            x=padding + row_count * (cell_width + spacing),
            y=current_y,
            width=cell_width,
            height=scaled_height,
        ))
        row_count += 1
        row_height = max(row_height, scaled_height)

    if current_page:
        pages.append(PagePlan(index=len(pages), placements=tuple(current_page)))

    logger.debug(f"Grid packed {len(images)} images ({images_per_row} per row) onto {len(pages)} pages")
    return pages
