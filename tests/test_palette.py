"""Tests for palette.py -- category colours and heatmap scales."""

import numpy as np
import pytest

from release_heatmap.palette import (
    DEFAULT_CATEGORY_COLOR,
    CategoryPalette,
    category_color,
    heatmap_color,
    heatmap_intensities,
    hue_color,
    hue_name,
)


class TestCategoryColor:
    def test_exact_match(self):
        assert category_color("Meeting") == "#F5A623"

    def test_case_and_whitespace_insensitive(self):
        assert category_color("  chat FEATURES ") == "#4A90E2"

    @pytest.mark.parametrize("name", [None, "", "Brand new thing"])
    def test_fallback(self, name):
        assert category_color(name) == DEFAULT_CATEGORY_COLOR

    def test_custom_palette_is_callable(self):
        palette = CategoryPalette({"Ops": "#111111"}, default="#222222")
        assert palette("ops") == "#111111"
        assert palette("Dev") == "#222222"


class TestHeatmapIntensities:
    def test_square_root_curve(self):
        np.testing.assert_allclose(heatmap_intensities([0, 1, 4], 4), [0.0, 0.5, 1.0])

    def test_clipped_above_max(self):
        assert heatmap_intensities([8], 4)[0] == 1.0

    def test_zero_max(self):
        np.testing.assert_array_equal(heatmap_intensities([0, 0], 0), [0.0, 0.0])


class TestHeatmapColor:
    def test_scheme_endpoints(self):
        assert heatmap_color(0, 4, "blue") == "#E3F2FD"
        assert heatmap_color(4, 4, "blue") == "#0E71EB"
        assert heatmap_color(4, 4, "green") == "#2E7D32"

    def test_empty_period_is_minimum(self):
        assert heatmap_color(0, 0, "purple") == "#F3E5F5"

    def test_unknown_scheme_falls_back_to_blue(self):
        assert heatmap_color(4, 4, "sepia") == "#0E71EB"

    def test_rainbow(self):
        assert heatmap_color(0, 4, "rainbow") == "hsl(240, 100%, 50%)"
        assert heatmap_color(4, 4, "rainbow") == "hsl(0, 100%, 75%)"


class TestHue:
    def test_busier_days_are_darker(self):
        assert hue_color(200, 0, 4) == "hsl(200, 70%, 100%)"
        assert hue_color(200, 2, 4) == "hsl(200, 70%, 75%)"
        assert hue_color(200, 4, 4) == "hsl(200, 70%, 50%)"

    @pytest.mark.parametrize(
        "hue, name",
        [(0, "Red"), (45, "Orange"), (100, "Green"), (240, "Blue"), (300, "Purple"), (350, "Red")],
    )
    def test_hue_name(self, hue, name):
        assert hue_name(hue) == name
