"""
Module: layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing input images, placements and pages.

Key Classes:
    - ImageDescriptor: Image identity and natural dimensions
    - PreparedImage: Descriptor paired with its provisional display size
    - Placement: Image positioned and scaled on a page
    - PagePlan: Complete page layout
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - layout.grid / layout.shelf: Create PagePlans
    - layout.engine: Creates LayoutResult
    - output.renderer: Consumes LayoutResult
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageDescriptor:
    """
    Image identity and natural size (immutable).

    Attributes:
        id: Unique identifier within one layout call
        width: Natural width in pixels
        height: Natural height in pixels
    """

    id: str
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def is_degenerate(self) -> bool:
        """True if either dimension is zero or negative."""
        return self.width <= 0 or self.height <= 0

    def sanitized(self) -> "ImageDescriptor":
        """
        Copy with non-positive dimensions replaced by 1.

        Returns self when the descriptor is already valid.
        """
        if not self.is_degenerate:
            return self
        return ImageDescriptor(
            id=self.id,
            width=self.width if self.width > 0 else 1,
            height=self.height if self.height > 0 else 1,
        )


@dataclass(frozen=True)
class PreparedImage:
    """
    Image with a provisional display size for shelf packing.

    Attributes:
        descriptor: Source descriptor (never modified)
        index: Position of the descriptor in the caller's list
        display_width: Width at the target row height
        display_height: Target row height
    """

    descriptor: ImageDescriptor
    index: int
    display_width: float
    display_height: float

    @classmethod
    def at_height(
        cls,
        descriptor: ImageDescriptor,
        index: int,
        target_height: float,
    ) -> "PreparedImage":
        """Size the descriptor to ``target_height``, keeping its aspect ratio."""
        return cls(
            descriptor=descriptor,
            index=index,
            display_width=target_height * descriptor.aspect_ratio,
            display_height=target_height,
        )


@dataclass(frozen=True)
class Placement:
    """
    An image positioned on a page.

    Attributes:
        image_id: ID of the placed ImageDescriptor
        x: Left edge in page pixels
        y: Top edge in page pixels
        width: Drawn width in pixels
        height: Drawn height in pixels

    Example:
        >>> placement = Placement("a", x=40, y=40, width=100, height=50)
        >>> placement.bottom
        90
    """

    image_id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right X coordinate (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (y + height)."""
        return self.y + self.height


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Placements are in visual order: left to right, top to bottom.

    Attributes:
        index: Page number (0-indexed)
        placements: Tuple of Placements on this page
    """

    index: int
    placements: tuple[Placement, ...]

    @property
    def placement_count(self) -> int:
        """Number of images on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """Check if page has no placements."""
        return len(self.placements) == 0

    @property
    def height_used(self) -> float:
        """Bottom edge of the lowest placement (0 for an empty page)."""
        return max((p.bottom for p in self.placements), default=0)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans
        page_width: Page width the layout was computed for
        page_height: Page height the layout was computed for
        strategy: Packing strategy used
        warnings: List of warning messages

    Example:
        >>> result = LayoutResult(pages=(page1, page2), page_width=2480, page_height=3508)
        >>> result.page_count
        2
    """

    pages: tuple[PagePlan, ...]
    page_width: int = 0
    page_height: int = 0
    strategy: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of placements across all pages."""
        return sum(p.placement_count for p in self.pages)

    @property
    def is_empty(self) -> bool:
        return not self.pages

    @property
    def image_page_map(self) -> dict[str, int]:
        """Mapping of image id to the 0-based index of its page."""
        return {
            placement.image_id: page.index
            for page in self.pages
            for placement in page.placements
        }

    def iter_placements(self):
        """Yield (page_index, placement) pairs in layout order."""
        for page in self.pages:
            for placement in page.placements:
                yield page.index, placement
