"""
Module: output.renderer

Purpose:
    Render a LayoutResult to raster pages. Each PagePlan becomes one
    image: a solid background with every placement's photo resized and
    pasted at its position. Pages can be written as PNG files or
    collected into a single PDF using ReportLab.

Key Functions:
    - render_page(): Composite one page
    - render_to_png(): Write one PNG per page
    - render_to_pdf(): Write all pages to one PDF
    - page_filename(): Deterministic page file name
    - parse_color(): Background color parsing

Dependencies:
    - PIL: Compositing
    - reportlab: PDF generation
    - layout.models: LayoutResult, PagePlan

Used By:
    - photo_combiner.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Tuple

from PIL import Image, ImageColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from photo_combiner.images.provider import ImageProvider
from photo_combiner.layout.models import LayoutResult, PagePlan, Placement

logger = logging.getLogger(__name__)

# Constants
DEFAULT_DPI = 300
DEFAULT_BG_COLOR = "#ffffff"
PAGE_FILE_PREFIX = "combined-page"

_RGB = Tuple[int, int, int]


def parse_color(value: str | None) -> _RGB:
    """
    Parse a CSS-style color ("#fff", "#ffffff", "white") to RGB.

    Falls back to white with a warning when the value is not a color.
    """
    if not value:
        return (255, 255, 255)
    try:
        return ImageColor.getrgb(value.strip())[:3]
    except ValueError:
        logger.warning(f"Invalid background color {value!r}, using white")
        return (255, 255, 255)


def page_filename(index: int, *, prefix: str = PAGE_FILE_PREFIX, ext: str = "png") -> str:
    """
    File name for a page.

    Args:
        index: 0-based page index

    Example:
        >>> page_filename(0)
        'combined-page-1.png'
    """
    return f"{prefix}-{index + 1}.{ext}"


def render_page(
    page: PagePlan,
    page_size: Tuple[int, int],
    provider: ImageProvider,
    *,
    bg_color: _RGB = (255, 255, 255),
) -> Image.Image:
    """
    Composite a single page.

    Args:
        page: Page plan with placements
        page_size: (width, height) in pixels
        provider: Source of decoded images
        bg_color: Background RGB color

    Returns:
        RGB page image
    """
    canvas_img = Image.new("RGB", page_size, bg_color)
    for placement in page.placements:
        _draw_placement(canvas_img, placement, provider)
    return canvas_img


def _draw_placement(
    canvas_img: Image.Image,
    placement: Placement,
    provider: ImageProvider,
) -> None:
    """Resize the placement's image to its box and paste it."""
    source = provider.get_image(placement.image_id)
    size = (max(1, round(placement.width)), max(1, round(placement.height)))
    position = (round(placement.x), round(placement.y))

    resized = source.resize(size, Image.Resampling.LANCZOS)
    if resized.mode == "RGBA":
        canvas_img.paste(resized, position, resized)
    else:
        canvas_img.paste(resized.convert("RGB"), position)


def render_to_png(
    layout: LayoutResult,
    output_dir: Path,
    provider: ImageProvider,
    *,
    bg_color: _RGB = (255, 255, 255),
    prefix: str = PAGE_FILE_PREFIX,
) -> List[Path]:
    """
    Render every page to ``<prefix>-<n>.png`` in output_dir.

    Returns:
        Paths of written files, in page order
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    page_size = (layout.page_width, layout.page_height)

    paths: List[Path] = []
    for page in layout.pages:
        page_img = render_page(page, page_size, provider, bg_color=bg_color)
        path = output_dir / page_filename(page.index, prefix=prefix)
        page_img.save(path, format="PNG")
        paths.append(path)
        logger.debug(f"Wrote page {page.index + 1}: {path}")

    logger.info(f"Rendered {layout.page_count} pages to {output_dir}")
    return paths


def render_to_pdf(
    layout: LayoutResult,
    output_path: Path,
    provider: ImageProvider,
    *,
    bg_color: _RGB = (255, 255, 255),
    dpi: int = DEFAULT_DPI,
) -> Path:
    """
    Render layout result to a single PDF file.

    Each page is composited with render_page() and drawn full-bleed on
    a PDF page whose size is the pixel size converted at ``dpi``.

    Args:
        layout: Layout result from the engine
        output_path: Path to write PDF
        provider: Source of decoded images
        bg_color: Background RGB color
        dpi: Resolution used for pixel -> point conversion

    Returns:
        output_path

    Raises:
        OSError: If PDF cannot be written
    """
    if layout.page_count == 0:
        logger.warning("Empty layout, creating empty PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    page_width_pt = _px_to_pt(layout.page_width, dpi)
    page_height_pt = _px_to_pt(layout.page_height, dpi)
    page_size = (layout.page_width, layout.page_height)

    c = canvas.Canvas(str(output_path), pagesize=(page_width_pt, page_height_pt))
    for page in layout.pages:
        page_img = render_page(page, page_size, provider, bg_color=bg_color)
        c.drawImage(
            _pil_to_reader(page_img),
            0,
            0,
            width=page_width_pt,
            height=page_height_pt,
        )
        c.showPage()
    c.save()

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")
    return output_path


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """Convert PIL image to ReportLab ImageReader."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _px_to_pt(px: float, dpi: int = DEFAULT_DPI) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch.
    """
    return px * 72.0 / dpi
