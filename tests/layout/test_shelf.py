"""
Unit tests for the greedy shelf packer.
"""

import pytest

from photo_combiner.layout import ImageDescriptor, LayoutConfig, layout, pack_shelf
from photo_combiner.layout.shelf import prepare_images


def _shelf(images, config: LayoutConfig = LayoutConfig()):
    return pack_shelf(
        images,
        available_width=config.available_width,
        available_height=config.available_height,
        spacing=config.spacing,
        padding=config.padding,
        page_height=config.page_height,
    )


def _rows(page):
    """Group a page's placements into rows by their y coordinate."""
    rows = {}
    for placement in page.placements:
        rows.setdefault(placement.y, []).append(placement)
    return list(rows.values())


class TestPrepareImages:

    def test_prepare_when_target_height_then_width_follows_aspect(self):
        images = [ImageDescriptor("a", 200, 100), ImageDescriptor("b", 100, 200)]

        prepared = prepare_images(images, 100)

        assert [p.display_width for p in prepared] == pytest.approx([200, 50])
        assert [p.index for p in prepared] == [0, 1]


class TestShelfScenarios:

    def test_single_very_wide_image_then_forced_row_fills_width(self):
        """1 x 4000x1000 on A4: forced row scaled to exactly the available width."""
        # Arrange
        images = [ImageDescriptor("panorama", 4000, 1000)]

        # Act
        result = layout(images, LayoutConfig(strategy="shelf"))

        # Assert
        assert result.page_count == 1
        assert result.total_placements == 1
        placement = result.pages[0].placements[0]
        assert placement.x == 40
        assert placement.y == 40
        assert placement.width == pytest.approx(2400)
        assert placement.height == pytest.approx(600)


class TestShelfPacking:

    def test_when_squares_then_two_per_row_and_row_fills_width(self):
        # target 857: 857 + 20 + 857 fits 2400, a third does not
        images = [ImageDescriptor(str(i), 1000, 1000) for i in range(3)]

        pages = _shelf(images)

        first_row = _rows(pages[0])[0]
        assert len(first_row) == 2
        assert first_row[0].x == 40
        assert first_row[-1].right == pytest.approx(2440)
        scale = 2400 / (857 * 2 + 20)
        assert first_row[1].x == pytest.approx(40 + 857 * scale + 20 * scale)

    def test_when_next_row_does_not_fit_then_new_page(self):
        # Row 1 is 1186px tall, row 2 (single square) is 2400px tall
        images = [ImageDescriptor(str(i), 1000, 1000) for i in range(3)]

        pages = _shelf(images)

        assert [p.placement_count for p in pages] == [2, 1]
        assert pages[1].placements[0].y == 40

    def test_when_rows_stack_then_advance_by_row_height_plus_spacing(self):
        # Three 4:1 images: each is forced onto its own 600px row
        images = [ImageDescriptor(str(i), 4000, 1000) for i in range(3)]

        placements = _shelf(images)[0].placements

        assert [p.y for p in placements] == pytest.approx([40, 660, 1280])

    def test_when_mixed_widths_then_widest_placed_first(self):
        images = [ImageDescriptor("square", 1000, 1000), ImageDescriptor("wide", 2000, 1000)]

        pages = _shelf(images)

        assert pages[0].placements[0].image_id == "wide"

    def test_when_narrow_images_then_first_fit_fills_gaps(self):
        # Arrange: widths at target 857 -> 1714, 857, 428.5
        images = [
            ImageDescriptor("square", 1000, 1000),
            ImageDescriptor("wide", 2000, 1000),
            ImageDescriptor("narrow", 500, 1000),
        ]

        # Act
        first_row = _rows(_shelf(images)[0])[0]

        # Assert: wide (1714) + narrow (448.5 with spacing) fit, square does not
        assert [p.image_id for p in first_row] == ["wide", "narrow"]

    def test_when_nothing_fits_then_forced_pick_is_last_in_sorted_order(self):
        # Equal widths sort in input order, so the reverse scan picks "b" first
        images = [ImageDescriptor("a", 4000, 1000), ImageDescriptor("b", 4000, 1000)]

        pages = _shelf(images)

        assert [p.image_id for p in pages[0].placements] == ["b", "a"]

    def test_when_packing_then_caller_list_untouched(self):
        images = [ImageDescriptor("square", 1000, 1000), ImageDescriptor("wide", 2000, 1000)]
        snapshot = list(images)

        _shelf(images)

        assert images == snapshot

    def test_when_tie_widths_fit_then_input_order_kept(self):
        images = [ImageDescriptor(name, 1000, 1000) for name in ("x", "y")]

        pages = _shelf(images)

        assert [p.image_id for p in pages[0].placements] == ["x", "y"]

    def test_when_no_images_then_no_pages(self):
        assert _shelf([]) == []
