"""
Unit tests for layout configuration and the defaults table.
"""

import pytest

from photo_combiner.layout import LAYOUT_DEFAULTS, LayoutConfig
from photo_combiner.layout.config import coerce_choice, coerce_int


class TestCoerceInt:
    """Tests for lenient integer parsing."""

    @pytest.mark.parametrize("raw, expected", [
        (15, 15),
        ("15", 15),
        (" 40 ", 40),
        ("12.7", 12),
        (3.9, 3),
        (0, 0),
        ("0", 0),
    ])
    def test_coerce_int_when_numeric_then_parsed(self, raw, expected):
        assert coerce_int(raw, 20) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "1e400", float("nan"), True, [1], "-5", -5])
    def test_coerce_int_when_unusable_then_default(self, raw):
        assert coerce_int(raw, 20) == 20

    def test_coerce_int_when_below_minimum_then_default(self):
        assert coerce_int("0", 2, minimum=1) == 2

    def test_coerce_int_when_invalid_then_logs_warning(self, caplog):
        coerce_int("abc", 20, name="spacing")
        assert "Invalid spacing" in caplog.text


class TestCoerceChoice:

    def test_coerce_choice_when_mixed_case_then_normalized(self):
        assert coerce_choice(" Shelf ", ("grid", "shelf"), "grid", name="strategy") == "shelf"

    def test_coerce_choice_when_unknown_then_default(self):
        assert coerce_choice("masonry", ("grid", "shelf"), "grid", name="strategy") == "grid"


class TestLayoutConfig:
    """Tests for LayoutConfig dataclass."""

    def test_init_when_defaults_then_matches_defaults_table(self):
        # Act
        config = LayoutConfig()

        # Assert
        assert config.page_width == 2480
        assert config.page_height == 3508
        assert config.spacing == LAYOUT_DEFAULTS["spacing"] == 20
        assert config.padding == LAYOUT_DEFAULTS["padding"] == 40
        assert config.images_per_row == LAYOUT_DEFAULTS["images_per_row"] == 2
        assert config.strategy == "grid"

    def test_available_size_when_padded_then_padding_removed_twice(self):
        config = LayoutConfig(page_width=1000, page_height=2000, padding=100)

        assert config.available_width == 800
        assert config.available_height == 1800

    def test_cell_width_when_two_per_row_then_splits_remaining_width(self):
        # (2480 - 80 - 20) / 2
        assert LayoutConfig().cell_width == 1190

    @pytest.mark.parametrize("kwargs, message", [
        ({"page_width": 0}, "page_width"),
        ({"page_height": -1}, "page_height"),
        ({"spacing": -1}, "spacing"),
        ({"padding": -1}, "padding"),
        ({"images_per_row": 0}, "images_per_row"),
        ({"strategy": "masonry"}, "strategy"),
    ])
    def test_init_when_invalid_then_raises_error(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            LayoutConfig(**kwargs)


class TestLayoutConfigFromValues:
    """Tests for building a config from raw user input."""

    def test_from_values_when_nothing_given_then_defaults(self):
        assert LayoutConfig.from_values() == LayoutConfig()

    def test_from_values_when_non_numeric_then_falls_back(self):
        # Act
        config = LayoutConfig.from_values(
            spacing="wide", padding=None, images_per_row="x", strategy="??",
        )

        # Assert
        assert config.spacing == 20
        assert config.padding == 40
        assert config.images_per_row == 2
        assert config.strategy == "grid"

    def test_from_values_when_strings_then_parsed(self):
        config = LayoutConfig.from_values(
            preset="letter", orientation="landscape",
            spacing="10", padding="0", images_per_row="3", strategy="shelf",
        )

        assert (config.page_width, config.page_height) == (3300, 2550)
        assert config.spacing == 10
        assert config.padding == 0
        assert config.images_per_row == 3
        assert config.strategy == "shelf"

    def test_from_values_when_custom_then_uses_custom_size(self):
        config = LayoutConfig.from_values(preset="custom", custom_width="800", custom_height=600)

        assert (config.page_width, config.page_height) == (800, 600)
