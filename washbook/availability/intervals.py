"""
Small interval algebra over half-open ``[start, end)`` intervals.

Works for any totally ordered endpoint type (datetimes, minutes since
midnight). ``tile`` additionally needs ``start + step`` to be defined.

Usage:
    free = subtract(merge(day_windows), blocked)
    slots = list(tile(free, timedelta(minutes=60)))
"""

from typing import Any, Iterable, Iterator, NamedTuple


class Interval(NamedTuple):
    """Half-open interval; empty when end <= start."""
    start: Any
    end: Any

    def is_empty(self) -> bool:
        return not self.start < self.end

    def overlaps(self, other: "Interval") -> bool:
        return self.start < other.end and self.end > other.start

    def contains(self, other: "Interval") -> bool:
        return self.start <= other.start and other.end <= self.end


def merge(intervals: Iterable[Interval]) -> list[Interval]:
    """Union of intervals as a sorted list of disjoint intervals.

    Overlapping and touching intervals are joined; empty ones dropped.
    """
    ordered = sorted(iv for iv in intervals if not iv.is_empty())
    merged: list[Interval] = []
    for iv in ordered:
        if merged and iv.start <= merged[-1].end:
            last = merged[-1]
            if iv.end > last.end:
                merged[-1] = Interval(last.start, iv.end)
        else:
            merged.append(iv)
    return merged


def subtract(intervals: Iterable[Interval], removals: Iterable[Interval]) -> list[Interval]:
    """Remove every removal from the union of intervals.

    A sweep over both sorted lists; a removal that only partly overlaps
    an interval trims just the overlapping portion.
    """
    base = merge(intervals)
    cuts = merge(removals)
    result: list[Interval] = []
    first = 0
    for iv in base:
        while first < len(cuts) and cuts[first].end <= iv.start:
            first += 1
        cursor = iv.start
        for cut in cuts[first:]:
            if cut.start >= iv.end:
                break
            if cut.start > cursor:
                result.append(Interval(cursor, cut.start))
            if cut.end > cursor:
                cursor = cut.end
            if cursor >= iv.end:
                break
        if cursor < iv.end:
            result.append(Interval(cursor, iv.end))
    return result


def covers(intervals: Iterable[Interval], candidate: Interval) -> bool:
    """True if the candidate lies fully inside the union of intervals."""
    if candidate.is_empty():
        return False
    return any(iv.contains(candidate) for iv in merge(intervals))


def tile(intervals: Iterable[Interval], step: Any) -> Iterator[Interval]:
    """Cut each interval into back-to-back windows of exactly ``step``.

    Windows start at each interval's start; a trailing remainder shorter
    than ``step`` is discarded.
    """
    for iv in intervals:
        cursor = iv.start
        while cursor + step <= iv.end:
            yield Interval(cursor, cursor + step)
            cursor = cursor + step
