"""Tests for Rect geometry and the vertical layout solver."""

from __future__ import annotations

from clockwatch.layout import Constraint, Rect, split_vertical

CLOCK_LAYOUT = [Constraint.percentage(30), Constraint.length(1), Constraint.min(0)]


class TestRect:
    def test_edges(self) -> None:
        r = Rect(2, 3, 10, 4)
        assert r.right == 12
        assert r.bottom == 7
        assert not r.is_empty

    def test_empty(self) -> None:
        assert Rect(0, 0, 0, 5).is_empty
        assert Rect(0, 0, 5, 0).is_empty

    def test_inner_shrinks_each_side(self) -> None:
        assert Rect(0, 0, 80, 24).inner() == Rect(1, 1, 78, 22)
        assert Rect(3, 4, 10, 6).inner(2) == Rect(5, 6, 6, 2)

    def test_inner_never_goes_negative(self) -> None:
        assert Rect(0, 0, 1, 1).inner() == Rect(1, 1, 0, 0)

    def test_intersection(self) -> None:
        a = Rect(0, 0, 10, 10)
        assert a.intersection(Rect(5, 5, 10, 10)) == Rect(5, 5, 5, 5)
        assert a.intersection(Rect(20, 20, 5, 5)).is_empty


class TestConstraint:
    def test_percentage_rounds_down(self) -> None:
        assert Constraint.percentage(30).resolve(22) == 6
        assert Constraint.percentage(30).resolve(10) == 3
        assert Constraint.percentage(30).resolve(3) == 0

    def test_length_and_min_ignore_reference(self) -> None:
        assert Constraint.length(1).resolve(100) == 1
        assert Constraint.min(2).resolve(100) == 2


class TestSplitVertical:
    def test_clock_layout(self) -> None:
        spacer, clock, laps = split_vertical(Rect(1, 1, 78, 22), CLOCK_LAYOUT)
        assert spacer == Rect(1, 1, 78, 6)
        assert clock == Rect(1, 7, 78, 1)
        assert laps == Rect(1, 8, 78, 15)

    def test_regions_cover_area_exactly(self) -> None:
        for height in range(0, 40):
            rects = split_vertical(Rect(0, 0, 5, height), CLOCK_LAYOUT)
            assert sum(r.height for r in rects) == height
            assert all(r.height >= 0 for r in rects)

    def test_length_is_clamped_to_available_rows(self) -> None:
        rects = split_vertical(Rect(0, 0, 5, 2), [Constraint.length(5), Constraint.min(0)])
        assert [r.height for r in rects] == [2, 0]

    def test_single_row_goes_to_clock(self) -> None:
        spacer, clock, laps = split_vertical(Rect(0, 0, 5, 1), CLOCK_LAYOUT)
        assert (spacer.height, clock.height, laps.height) == (0, 1, 0)

    def test_leftover_is_shared_by_min_constraints(self) -> None:
        rects = split_vertical(
            Rect(0, 0, 5, 11),
            [Constraint.min(0), Constraint.length(2), Constraint.min(1)],
        )
        # 11 - 0 - 2 - 1 = 8 spare rows, split evenly
        assert [r.height for r in rects] == [4, 2, 5]
        assert [r.y for r in rects] == [0, 4, 6]

    def test_odd_leftover_goes_to_last_flexible_region(self) -> None:
        rects = split_vertical(
            Rect(0, 0, 5, 5), [Constraint.min(0), Constraint.min(0)]
        )
        assert [r.height for r in rects] == [2, 3]

    def test_no_flexible_region_leaves_rows_unused(self) -> None:
        rects = split_vertical(Rect(0, 0, 5, 10), [Constraint.length(3)])
        assert rects == [Rect(0, 0, 5, 3)]
