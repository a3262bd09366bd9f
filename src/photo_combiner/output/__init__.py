"""
Module: photo_combiner.output

Purpose:
    Page rendering and export. Converts a LayoutResult into PNG pages
    or a PDF using Pillow and ReportLab.

Key Functions:
    - render_page(): Composite one page
    - render_to_png(): One PNG per page
    - render_to_pdf(): Multi-page PDF

Used By:
    - photo_combiner.controller: Pipeline orchestration
"""

from .renderer import (
    page_filename,
    parse_color,
    render_page,
    render_to_pdf,
    render_to_png,
)

__all__ = [
    "page_filename",
    "parse_color",
    "render_page",
    "render_to_pdf",
    "render_to_png",
]
