"""Tests for the interval algebra helpers."""

from datetime import datetime, timedelta

from washbook.availability.intervals import Interval, covers, merge, subtract, tile


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 17, hour, minute)


class TestInterval:
    def test_half_open_overlap(self):
        assert Interval(9, 12).overlaps(Interval(11, 13))
        assert not Interval(9, 12).overlaps(Interval(12, 13))

    def test_contains(self):
        assert Interval(9, 17).contains(Interval(10, 11))
        assert Interval(9, 17).contains(Interval(9, 17))
        assert not Interval(9, 12).contains(Interval(11, 13))

    def test_empty(self):
        assert Interval(5, 5).is_empty()
        assert Interval(6, 5).is_empty()
        assert not Interval(5, 6).is_empty()


class TestMerge:
    def test_overlapping_intervals_join(self):
        assert merge([Interval(9, 12), Interval(11, 14)]) == [Interval(9, 14)]

    def test_touching_intervals_join(self):
        assert merge([Interval(9, 12), Interval(12, 15)]) == [Interval(9, 15)]

    def test_disjoint_intervals_sorted(self):
        assert merge([Interval(13, 17), Interval(9, 12)]) == [Interval(9, 12), Interval(13, 17)]

    def test_contained_interval_absorbed(self):
        assert merge([Interval(9, 17), Interval(10, 11)]) == [Interval(9, 17)]

    def test_empty_intervals_dropped(self):
        assert merge([Interval(10, 10), Interval(12, 11)]) == []


class TestSubtract:
    def test_block_in_middle_splits(self):
        assert subtract([Interval(9, 17)], [Interval(12, 13)]) == [
            Interval(9, 12), Interval(13, 17),
        ]

    def test_partial_overlap_trims_only_overlap(self):
        assert subtract([Interval(9, 12)], [Interval(11, 15)]) == [Interval(9, 11)]
        assert subtract([Interval(9, 12)], [Interval(7, 10)]) == [Interval(10, 12)]

    def test_full_cover_removes_everything(self):
        assert subtract([Interval(9, 12)], [Interval(8, 13)]) == []

    def test_non_intersecting_removal_no_effect(self):
        assert subtract([Interval(9, 12)], [Interval(13, 14)]) == [Interval(9, 12)]

    def test_multiple_removals_across_intervals(self):
        result = subtract(
            [Interval(8, 12), Interval(13, 18)],
            [Interval(9, 10), Interval(11, 14), Interval(17, 20)],
        )
        assert result == [Interval(8, 9), Interval(10, 11), Interval(14, 17)]

    def test_works_with_datetimes(self):
        result = subtract([Interval(at(9), at(17))], [Interval(at(12), at(13))])
        assert result == [Interval(at(9), at(12)), Interval(at(13), at(17))]


class TestCovers:
    def test_candidate_inside_union_of_overlapping(self):
        assert covers([Interval(9, 12), Interval(11, 15)], Interval(10, 14))

    def test_candidate_across_gap_not_covered(self):
        assert not covers([Interval(9, 12), Interval(13, 15)], Interval(11, 14))

    def test_empty_candidate_not_covered(self):
        assert not covers([Interval(9, 12)], Interval(10, 10))


class TestTile:
    def test_tiles_back_to_back(self):
        windows = list(tile([Interval(at(9), at(12))], timedelta(hours=1)))
        assert [w.start.hour for w in windows] == [9, 10, 11]

    def test_discards_short_remainder(self):
        windows = list(tile([Interval(at(9), at(11, 30))], timedelta(hours=1)))
        assert len(windows) == 2
        assert all(w.end - w.start == timedelta(hours=1) for w in windows)

    def test_interval_shorter_than_step_yields_nothing(self):
        assert list(tile([Interval(at(9), at(9, 45))], timedelta(hours=1))) == []
