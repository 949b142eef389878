"""Tests for geometry utilities, guideline derivation and pointer snapping."""

from __future__ import annotations

import itertools
import random

import pytest

from layerstack.geometry.rect import Point, Rect, is_degenerate, normalize_rect, suppressed, within
from layerstack.guidelines.engine import GuidelineSet, compute_guidelines
from layerstack.guidelines.snap import snap_coordinate, snap_point
from layerstack.models.model import Component, Layer, Model


def _model(*layers: list[tuple[str, float, float, float, float]], height: float = 50) -> Model:
    return Model(layers=[
        Layer(
            height=height,
            components=[Component(id=cid, x=x, y=y, size=(w, h)) for cid, x, y, w, h in comps],
        )
        for comps in layers
    ])


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class TestGeometry:
    def test_normalize_forward_drag(self):
        rect = normalize_rect(Point(10, 20), Point(40, 60))
        assert rect == Rect(10, 20, 30, 40)
        assert rect.right == 40
        assert rect.bottom == 60

    def test_normalize_backward_drag(self):
        rect = normalize_rect(Point(50, 50), Point(20, 30))
        assert rect == Rect(20, 30, 30, 20)

    def test_normalize_mixed_drag(self):
        rect = normalize_rect(Point(50, 10), Point(20, 30))
        assert rect == Rect(20, 10, 30, 20)

    def test_degenerate(self):
        assert is_degenerate(Rect(0, 0, 4.9, 100)) is True
        assert is_degenerate(Rect(0, 0, 100, 4)) is True
        assert is_degenerate(Rect(0, 0, 5, 5)) is False

    def test_within_is_strict(self):
        assert within(10, 17.9, 8) is True
        assert within(10, 18, 8) is False

    def test_suppressed_is_closed_interval(self):
        assert suppressed(18, [10], 8) is True
        assert suppressed(2, [10], 8) is True
        assert suppressed(18.01, [10], 8) is False
        assert suppressed(5, [], 8) is False


# ---------------------------------------------------------------------------
# Guideline engine
# ---------------------------------------------------------------------------


class TestComputeGuidelines:
    def test_empty_model(self):
        result = compute_guidelines(Model())
        assert result.vertical == []
        assert result.horizontal == []
        assert result.is_empty()

    def test_single_component(self):
        result = compute_guidelines(_model([("A", 0, 0, 10, 10)]))
        assert result.to_dict() == {"vertical": [0, 10], "horizontal": [0, 10]}

    def test_neighbour_within_proximity_suppressed(self):
        """B's left edge at 12 is within 8 of 10; its right edge at 22 is not."""
        model = _model([("A", 0, 0, 10, 10), ("B", 12, 0, 10, 10)])
        result = compute_guidelines(model)
        assert result.vertical == [0, 10, 22]
        assert result.horizontal == [0, 10]

    def test_exact_proximity_distance_suppressed(self):
        result = compute_guidelines(_model([("A", 0, 0, 8, 20)]))
        assert result.vertical == [0]
        assert result.horizontal == [0, 20]

    def test_first_wins_not_averaged(self):
        model = _model([("A", 100, 0, 50, 50), ("B", 105, 0, 50, 50)])
        result = compute_guidelines(model)
        assert result.vertical == [100, 150]

    def test_spans_all_layers(self):
        model = _model([("A", 0, 0, 10, 10)], [("B", 100, 100, 20, 20)])
        result = compute_guidelines(model)
        assert result.vertical == [0, 10, 100, 120]
        assert result.horizontal == [0, 10, 100, 120]

    def test_custom_proximity(self):
        model = _model([("A", 0, 0, 10, 10), ("B", 12, 0, 10, 10)])
        result = compute_guidelines(model, proximity=1)
        assert result.vertical == [0, 10, 12, 22]

    def test_axis_lookup(self):
        result = GuidelineSet(vertical=[1.0], horizontal=[2.0])
        assert result.axis("vertical") == [1.0]
        assert result.axis("horizontal") == [2.0]
        with pytest.raises(KeyError):
            result.axis("diagonal")

    def test_no_two_values_within_proximity(self):
        rng = random.Random(1234)
        for _ in range(25):
            comps = [
                (f"C{i}", rng.randint(0, 300), rng.randint(0, 300), rng.randint(5, 80), rng.randint(5, 80))
                for i in range(rng.randint(1, 15))
            ]
            result = compute_guidelines(_model(comps))
            for axis in (result.vertical, result.horizontal):
                for a, b in itertools.combinations(axis, 2):
                    assert abs(a - b) > 8

    def test_deterministic(self):
        model = _model([("A", 3, 4, 30, 40), ("B", 41, 9, 12, 12)], [("C", 77, 80, 5, 6)])
        assert compute_guidelines(model) == compute_guidelines(model)


# ---------------------------------------------------------------------------
# Snapping
# ---------------------------------------------------------------------------


class TestSnapCoordinate:
    def test_no_snap_targets(self):
        assert snap_coordinate(100, None, [], None, True) == 100

    def test_snaps_to_near_guideline(self):
        assert snap_coordinate(13, None, [10], None, True) == 10

    def test_guideline_at_proximity_not_snapped(self):
        assert snap_coordinate(18, None, [10], None, True) == 18

    def test_guidelines_disabled(self):
        assert snap_coordinate(13, None, [10], None, False) == 13

    def test_last_match_wins(self):
        assert snap_coordinate(12, None, [10, 14], None, True) == 14

    def test_size_snap_forward(self):
        assert snap_coordinate(27, 0, [], 30, False) == 30

    def test_size_snap_backward(self):
        assert snap_coordinate(72, 100, [], 30, False) == 70

    def test_size_snap_needs_start(self):
        assert snap_coordinate(27, None, [], 30, True) == 27

    def test_size_snap_out_of_range(self):
        assert snap_coordinate(40, 0, [], 30, False) == 40

    def test_guideline_overrides_size_snap(self):
        assert snap_coordinate(27, 0, [33], 30, True) == 33

    def test_idempotent_on_guideline(self):
        guidelines = compute_guidelines(_model([("A", 0, 0, 10, 10), ("B", 12, 0, 10, 10)]))
        for g in guidelines.vertical:
            assert snap_coordinate(g, None, guidelines.vertical, None, True) == g


class TestSnapPoint:
    def test_axes_use_their_own_guidelines(self):
        guidelines = GuidelineSet(vertical=[10], horizontal=[60])
        assert snap_point(Point(13, 58), None, guidelines, None, True) == Point(10, 60)

    def test_axes_are_independent(self):
        guidelines = GuidelineSet(vertical=[10], horizontal=[])
        assert snap_point(Point(13, 13), None, guidelines, None, True) == Point(10, 13)

    def test_last_size_per_axis(self):
        point = snap_point(Point(28, 9), Point(0, 0), GuidelineSet(), (30, 12), True)
        assert point == Point(30, 12)

    def test_custom_proximity(self):
        guidelines = GuidelineSet(vertical=[10], horizontal=[])
        assert snap_point(Point(13, 0), None, guidelines, None, True, proximity=2) == Point(13, 0)
