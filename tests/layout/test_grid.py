"""
Unit tests for the uniform grid packer.
"""

import pytest

from photo_combiner.layout import ImageDescriptor, LayoutConfig, layout, pack_grid


def _grid(images, config: LayoutConfig):
    return pack_grid(
        images,
        cell_width=config.cell_width,
        images_per_row=config.images_per_row,
        spacing=config.spacing,
        padding=config.padding,
        page_width=config.page_width,
        page_height=config.page_height,
    )


class TestGridScenarios:

    def test_four_squares_on_a4_then_two_rows_on_one_page(self):
        """4 x 1000x1000 on A4, 2 per row, padding 40, spacing 20."""
        # Arrange
        images = [ImageDescriptor(f"img{i}", 1000, 1000) for i in range(4)]
        config = LayoutConfig()

        # Act
        result = layout(images, config)

        # Assert
        assert result.page_count == 1
        placements = result.pages[0].placements
        assert [p.image_id for p in placements] == ["img0", "img1", "img2", "img3"]
        for p in placements:
            assert p.width == pytest.approx(1190)
            assert p.height == pytest.approx(1190)
        assert [p.x for p in placements] == pytest.approx([40, 1250, 40, 1250])
        assert [p.y for p in placements] == pytest.approx([40, 40, 1250, 1250])


class TestGridPacking:

    @pytest.fixture
    def small_page(self):
        # available 920x920, cell (920 - 20) / 2 = 450
        return LayoutConfig(page_width=1000, page_height=1000, padding=40, spacing=20)

    def test_when_row_overflows_page_then_new_page_starts_at_padding(self, small_page):
        # Rows at y=40 and y=510 fit (bottom 960); the third row would start at 980
        images = [ImageDescriptor(str(i), 100, 100) for i in range(5)]

        pages = _grid(images, small_page)

        assert len(pages) == 2
        assert pages[0].placement_count == 4
        assert pages[1].placement_count == 1
        last = pages[1].placements[0]
        assert (last.x, last.y) == (40, 40)
        assert [p.index for p in pages] == [0, 1]

    def test_when_image_ends_exactly_at_bottom_padding_then_stays(self, small_page):
        # Second row bottom = 510 + 450 = 960 = page_height - padding
        images = [ImageDescriptor(str(i), 100, 100) for i in range(4)]

        pages = _grid(images, small_page)

        assert len(pages) == 1
        assert pages[0].placements[-1].bottom == pytest.approx(960)

    def test_when_row_has_mixed_heights_then_advance_uses_tallest(self):
        # Arrange: cell 450, heights 450 and 900
        config = LayoutConfig(page_width=1000, page_height=3000, padding=40, spacing=20)
        images = [
            ImageDescriptor("short", 100, 100),
            ImageDescriptor("tall", 100, 200),
            ImageDescriptor("next", 100, 100),
        ]

        # Act
        placements = _grid(images, config)[0].placements

        # Assert
        assert placements[0].y == placements[1].y == 40
        assert placements[1].height == pytest.approx(900)
        assert placements[2].y == pytest.approx(40 + 900 + 20)
        assert placements[2].x == 40

    def test_when_three_per_row_then_kth_x_offsets_by_cell_and_spacing(self):
        config = LayoutConfig(page_width=1000, page_height=3000, padding=50, spacing=10, images_per_row=3)
        images = [ImageDescriptor(str(i), 300, 200) for i in range(3)]

        placements = _grid(images, config)[0].placements

        cell = (900 - 20) / 3
        assert [p.x for p in placements] == pytest.approx([50, 50 + cell + 10, 50 + 2 * (cell + 10)])
        assert placements[-1].right == pytest.approx(950)

    def test_when_single_image_taller_than_page_then_still_placed(self, small_page):
        images = [ImageDescriptor("pole", 100, 5000)]

        pages = _grid(images, small_page)

        assert len(pages) == 1
        assert pages[0].placements[0].height == pytest.approx(22500)

    def test_when_tall_image_follows_then_moves_to_next_page(self, small_page):
        images = [ImageDescriptor("a", 100, 100), ImageDescriptor("pole", 100, 5000)]

        pages = _grid(images, small_page)

        assert [p.placement_count for p in pages] == [1, 1]
        assert pages[1].placements[0].image_id == "pole"

    def test_when_no_images_then_no_pages(self, small_page):
        assert _grid([], small_page) == []
