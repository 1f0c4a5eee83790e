"""
Pure availability resolution for a single provider.

Merges weekly availability rules with one-off blocked times to decide
whether a candidate window is bookable and to enumerate bookable slots.
Inputs are assumed validated (see AvailabilityManager); nothing here
mutates state or touches the store, so it is safe to call concurrently.

Rules express local wall-clock times. Day windows are built with the
tzinfo of the query (or ``tz`` for enumeration), so blocked times must
use the same convention: all naive or all aware.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Iterator, Optional

from washbook.availability.intervals import Interval, covers, merge, subtract, tile
from washbook.logging_context import get_session_logger
from washbook.schemas.availability_schema import AvailabilityRule, BlockedTime, BookableSlot
from washbook.utils import day_of_week, format_clock, parse_clock

logger = get_session_logger(__name__)


def day_windows(
    rules: Iterable[AvailabilityRule], day: date, tz: Optional[tzinfo] = None
) -> list[Interval]:
    """Union of the enabled rule intervals for one calendar date."""
    weekday = day_of_week(day)
    windows = [
        Interval(
            datetime.combine(day, parse_clock(rule.start_time), tzinfo=tz),
            datetime.combine(day, parse_clock(rule.end_time), tzinfo=tz),
        )
        for rule in rules
        if rule.day_of_week == weekday and rule.is_available
    ]
    return merge(windows)


def blocked_intervals(blocks: Iterable[BlockedTime]) -> list[Interval]:
    """Blocked times as intervals. Recurrence is not expanded."""
    return [Interval(block.start_date, block.end_date) for block in blocks]


def is_bookable(
    rules: Iterable[AvailabilityRule],
    blocks: Iterable[BlockedTime],
    candidate_start: datetime,
    candidate_end: datetime,
) -> bool:
    """Check whether ``[candidate_start, candidate_end)`` can be booked.

    The candidate must sit entirely inside the union of that weekday's
    enabled rules and must not intersect any blocked time.
    """
    candidate = Interval(candidate_start, candidate_end)
    if candidate.is_empty() or candidate_end.date() != candidate_start.date():
        # Rules are per day; windows crossing midnight are never covered.
        return False

    windows = day_windows(rules, candidate_start.date(), candidate_start.tzinfo)
    if not windows:
        return False
    if not covers(windows, candidate):
        return False

    for block in blocked_intervals(blocks):
        if candidate.overlaps(block):
            logger.debug(
                "Candidate %s-%s blocked by %s-%s",
                candidate_start, candidate_end, block.start, block.end,
            )
            return False
    return True


def iter_slots(
    rules: Iterable[AvailabilityRule],
    blocks: Iterable[BlockedTime],
    range_start: date,
    range_end: date,
    slot_duration: timedelta,
    tz: Optional[tzinfo] = None,
) -> Iterator[BookableSlot]:
    """Lazily yield bookable slots for every date in ``[range_start, range_end]``.

    Per date: union of enabled rules, minus every blocked interval, tiled
    into back-to-back windows of ``slot_duration``. Calling again restarts
    the sequence.

    Raises:
        ValueError: If slot_duration is not positive.
    """
    if slot_duration <= timedelta(0):
        raise ValueError(f"slot_duration must be positive, got {slot_duration}")

    rules = list(rules)
    blocked = blocked_intervals(blocks)

    return _generate_slots(rules, blocked, range_start, range_end, slot_duration, tz)


def _generate_slots(
    rules: list[AvailabilityRule],
    blocked: list[Interval],
    range_start: date,
    range_end: date,
    slot_duration: timedelta,
    tz: Optional[tzinfo],
) -> Iterator[BookableSlot]:
    day = range_start
    while day <= range_end:
        windows = day_windows(rules, day, tz)
        if windows:
            day_span = Interval(windows[0].start, windows[-1].end)
            relevant = [b for b in blocked if b.overlaps(day_span)]
            for window in tile(subtract(windows, relevant), slot_duration):
                yield BookableSlot(
                    day=day,
                    start_time=format_clock(window.start.time()),
                    end_time=format_clock(window.end.time()),
                    tz=tz,
                )
        day += timedelta(days=1)


def enumerate_slots(
    rules: Iterable[AvailabilityRule],
    blocks: Iterable[BlockedTime],
    range_start: date,
    range_end: date,
    slot_duration: timedelta,
    tz: Optional[tzinfo] = None,
) -> list[BookableSlot]:
    """Materialized form of :func:`iter_slots`, in chronological order."""
    return list(iter_slots(rules, blocks, range_start, range_end, slot_duration, tz))
