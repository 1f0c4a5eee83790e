"""Provider availability data models: weekly rules, blocked times, derived slots."""

from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from washbook.utils import format_time_label, parse_clock


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AvailabilityRuleInput(BaseModel):
    """Data needed to create a weekly availability rule.

    Day and clock checks happen in the availability manager so that bad
    input surfaces as InvalidRuleError rather than a pydantic error.
    """
    provider_id: str
    day_of_week: int  # 0 = Sunday, 6 = Saturday
    start_time: str  # HH:MM, 24-hour
    end_time: str  # HH:MM, 24-hour
    is_available: bool = True


class AvailabilityRulePatch(BaseModel):
    """Partial update of an availability rule; unset fields are left alone."""
    is_available: Optional[bool] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class AvailabilityRule(AvailabilityRuleInput):
    """A stored weekly availability rule."""
    id: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class BlockedTimeInput(BaseModel):
    """Data needed to create a one-off blocked interval."""
    provider_id: str
    start_date: datetime
    end_date: datetime
    reason: Optional[str] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None


class BlockedTimePatch(BaseModel):
    """Partial update of a blocked time; unset fields are left alone."""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reason: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None


class BlockedTime(BlockedTimeInput):
    """A stored blocked interval (vacation, break, one-off unavailability)."""
    id: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class BookableSlot(BaseModel):
    """A computed (date, start, end) window. Never persisted.

    ``tz`` is the zone the slot was enumerated in; ``starts_at`` and
    ``ends_at`` carry it, and are naive when it is None.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    day: date
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    tz: Optional[tzinfo] = Field(default=None, exclude=True)

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.day, parse_clock(self.start_time), tzinfo=self.tz)

    @property
    def ends_at(self) -> datetime:
        return datetime.combine(self.day, parse_clock(self.end_time), tzinfo=self.tz)

    @property
    def label(self) -> str:
        """12-hour label of the start time, as offered by the time step."""
        return format_time_label(parse_clock(self.start_time))
