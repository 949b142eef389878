"""Tests for the colour mapping engine."""

from __future__ import annotations

import pytest

from layerstack.models.data import ScalarFrame, TimeSeries
from layerstack.visualization.colors import (
    ColorMapper,
    Palette,
    ValueRange,
    get_min_max_value,
    hex_to_rgb,
    hsl_color,
    hsl_to_hex,
    parse_css_color,
    resolve_color,
)
from layerstack.visualization.playback import PlaybackState

GREY = ("#000000", "#808080", "#ffffff")


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


class TestPalette:
    def test_default_stops(self):
        palette = Palette()
        assert palette.first == "#d7191c"
        assert palette.last == "#2c7bb6"
        assert palette.interpolate(0.5) == "#f7f7f7"

    def test_interpolates_within_bracket(self):
        palette = Palette(GREY)
        assert palette.interpolate(0.25) == "#404040"
        assert palette.interpolate(0.75) == "#c0c0c0"

    def test_clamps_percent(self):
        palette = Palette(GREY)
        assert palette.interpolate(-1) == "#000000"
        assert palette.interpolate(2) == "#ffffff"

    def test_needs_two_stops(self):
        with pytest.raises(ValueError):
            Palette(["#000000"])

    def test_rejects_bad_hex(self):
        with pytest.raises(ValueError):
            Palette(["#000", "#ffffff", "#ffffff"])


# ---------------------------------------------------------------------------
# Range resolution
# ---------------------------------------------------------------------------


class TestGetMinMaxValue:
    def test_explicit_bounds(self):
        data = ScalarFrame(values={"A": 5})
        assert get_min_max_value(data, 0, 100) == ValueRange(0, 100)

    def test_scanned_bounds(self):
        data = ScalarFrame(values={"A": 5, "B": -2, "C": 9})
        assert get_min_max_value(data) == ValueRange(-2, 9)

    def test_bounds_independent(self):
        data = ScalarFrame(values={"A": 1, "B": 3})
        assert get_min_max_value(data, min_value=0) == ValueRange(0, 3)
        assert get_min_max_value(data, max_value=10) == ValueRange(1, 10)

    def test_time_series_flattened(self):
        data = TimeSeries(timestamps=[0, 1, 2], values={"A": [4, 8, 1], "B": [0.5, 20, 3]})
        assert get_min_max_value(data) == ValueRange(0.5, 20)

    def test_empty_data(self):
        assert get_min_max_value(None) == ValueRange(0.0, 0.0)
        assert get_min_max_value(ScalarFrame(), max_value=5) == ValueRange(0.0, 5)

    def test_percent_zero_span(self):
        assert ValueRange(3, 3).percent(3) == 0.0


# ---------------------------------------------------------------------------
# ColorMapper
# ---------------------------------------------------------------------------


class TestColorMapperScalar:
    def setup_method(self):
        self.data = ScalarFrame(values={"A": 0, "B": 10, "M": 5})

    def test_no_data_is_absent(self):
        assert ColorMapper().resolve("A") is None

    def test_min_is_first_stop(self):
        mapper = ColorMapper(self.data, palette=GREY)
        assert mapper.resolve("A") == "#000000"

    def test_max_is_last_stop(self):
        mapper = ColorMapper(self.data, palette=GREY)
        assert mapper.resolve("B") == "#ffffff"

    def test_midpoint(self):
        mapper = ColorMapper(self.data, palette=GREY)
        assert mapper.resolve("M") == "#808080"

    def test_inverse_swaps_ends(self):
        mapper = ColorMapper(self.data, inverse=True, palette=GREY)
        assert mapper.resolve("A") == "#ffffff"
        assert mapper.resolve("B") == "#000000"

    def test_missing_component(self):
        assert ColorMapper(self.data).resolve("Z") is None

    def test_out_of_range_clamped(self):
        mapper = ColorMapper(self.data, min_value=2, max_value=4, palette=GREY)
        assert mapper.resolve("A") == "#000000"
        assert mapper.resolve("B") == "#ffffff"

    def test_range_resolved_once(self):
        mapper = ColorMapper(self.data)
        self.data.values["Q"] = 1000
        assert mapper.range == ValueRange(0, 10)

    def test_accepts_palette_instance(self):
        palette = Palette(GREY)
        assert ColorMapper(self.data, palette=palette).palette is palette


class TestColorMapperTimeSeries:
    def setup_method(self):
        self.data = TimeSeries(timestamps=[0, 1, 2], values={"A": [0, 5, 10]})
        self.mapper = ColorMapper(self.data, palette=GREY)

    def test_frame_lookup(self):
        assert self.mapper.resolve("A", PlaybackState(current_frame=0)) == "#000000"
        assert self.mapper.resolve("A", PlaybackState(current_frame=2)) == "#ffffff"

    def test_requires_frame(self):
        assert self.mapper.resolve("A", None) is None
        assert self.mapper.resolve("A", PlaybackState(current_frame=None)) is None

    def test_missing_frame(self):
        assert self.mapper.resolve("A", PlaybackState(current_frame=3)) is None
        assert self.mapper.resolve("A", PlaybackState(current_frame=-1)) is None

    def test_missing_series(self):
        assert self.mapper.resolve("B", PlaybackState(current_frame=0)) is None

    def test_value_for(self):
        assert self.mapper.value_for("A", PlaybackState(current_frame=1)) == 5


class TestResolveColor:
    def test_functional_form(self):
        data = ScalarFrame(values={"A": 50})
        assert resolve_color("A", data, None, ValueRange(0, 100), palette=Palette(GREY)) == "#808080"

    def test_functional_inverse(self):
        data = ScalarFrame(values={"A": 0})
        assert resolve_color("A", data, None, ValueRange(0, 100), inverse=True, palette=Palette(GREY)) == "#ffffff"

    def test_functional_no_data(self):
        assert resolve_color("A", None, None, ValueRange(0, 1)) is None


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


class TestConversions:
    def test_hsl_color_string(self):
        assert hsl_color(120, 100, 70) == "hsl(120, 100%, 70%)"
        assert hsl_color(72.5, 20, 70) == "hsl(72.5, 20%, 70%)"

    def test_hsl_to_hex(self):
        assert hsl_to_hex(0, 100, 50) == "#ff0000"
        assert hsl_to_hex(120, 100, 50) == "#00ff00"

    def test_hue_beyond_360_is_equivalent(self):
        assert hsl_to_hex(480, 100, 50) == hsl_to_hex(120, 100, 50)

    def test_parse_css_color(self):
        assert parse_css_color("#FFAA00") == "#ffaa00"
        assert parse_css_color("hsl(0, 100%, 50%)") == "#ff0000"
        with pytest.raises(ValueError):
            parse_css_color("rebeccapurple")

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#102030") == (16, 32, 48)
