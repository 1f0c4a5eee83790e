"""Shared clock and time-label helpers used by the wizard and the resolver."""

import re
from datetime import date, datetime, time, tzinfo
from typing import Optional

from washbook.errors import InvalidTimeLabelError

_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp])\.?[Mm]\.?\s*$")
_CLOCK_RE = re.compile(r"^\s*(\d{2}):(\d{2})(?::(\d{2}))?\s*$")


def parse_time_label(label: str) -> time:
    """Parse a 12-hour label such as "9:00 AM" or "01:30 PM".

    Examples:
        >>> parse_time_label("12:00 AM")
        datetime.time(0, 0)
        >>> parse_time_label("12:00 PM")
        datetime.time(12, 0)
        >>> parse_time_label("1:30 PM")
        datetime.time(13, 30)
    """
    match = _LABEL_RE.match(label or "")
    if not match:
        raise InvalidTimeLabelError(f"Invalid time label: {label!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not 1 <= hour <= 12 or minute > 59:
        raise InvalidTimeLabelError(f"Invalid time label: {label!r}")

    period = match.group(3).upper()
    if period == "P" and hour != 12:
        hour += 12
    elif period == "A" and hour == 12:
        hour = 0
    return time(hour, minute)


def is_time_label(label: Optional[str]) -> bool:
    """Whether ``label`` parses as a 12-hour label.

    Examples:
        >>> is_time_label("9:00 AM")
        True
        >>> is_time_label("25:00 PM")
        False
    """
    try:
        parse_time_label(label)
    except InvalidTimeLabelError:
        return False
    return True


def format_time_label(value: time) -> str:
    """Format a time as a 12-hour label without a leading zero, e.g. "9:30 AM"."""
    period = "PM" if value.hour >= 12 else "AM"
    display_hour = value.hour % 12 or 12
    return f"{display_hour}:{value.minute:02d} {period}"


def parse_clock(value: str) -> time:
    """Parse a 24-hour "HH:MM" (or "HH:MM:SS") clock string."""
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise InvalidTimeLabelError(f"Invalid clock time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeLabelError(f"Invalid clock time: {value!r}")
    return time(hour, minute, second)


def format_clock(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def combine_date_and_time(day: date, label: str, tz: Optional[tzinfo] = None) -> datetime:
    """Combine a calendar date with a 12-hour label into one timestamp."""
    return datetime.combine(day, parse_time_label(label), tzinfo=tz)


def day_of_week(day: date) -> int:
    """Day index with Sunday=0 through Saturday=6."""
    return (day.weekday() + 1) % 7
