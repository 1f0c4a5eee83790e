"""
Availability manager: validated rule/blocked-time writes plus the
bookability query surface used by the booking wizard.

Validation always runs before the store is called, so a rejected rule
never costs a round-trip. Store errors propagate unchanged.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from washbook.availability import resolver
from washbook.config import settings
from washbook.errors import InvalidBlockedTimeError, InvalidRuleError, InvalidTimeLabelError
from washbook.logging_context import get_session_logger
from washbook.schemas.availability_schema import (
    AvailabilityRule,
    AvailabilityRuleInput,
    AvailabilityRulePatch,
    BlockedTime,
    BlockedTimeInput,
    BlockedTimePatch,
    BookableSlot,
)
from washbook.tools.persistence import BookingStore
from washbook.utils import parse_clock

logger = get_session_logger(__name__)


def validate_rule(day_of_week: int, start_time: str, end_time: str) -> None:
    """Reject malformed rule data.

    Raises:
        InvalidRuleError: Day outside 0-6, unparsable clock, or start >= end.
    """
    if not 0 <= day_of_week <= 6:
        raise InvalidRuleError(f"day_of_week must be 0-6, got {day_of_week}")
    try:
        start = parse_clock(start_time)
        end = parse_clock(end_time)
    except InvalidTimeLabelError as exc:
        raise InvalidRuleError(str(exc)) from None
    if start >= end:
        raise InvalidRuleError(
            f"start_time must be before end_time, got {start_time}-{end_time}"
        )


def validate_blocked_window(start: datetime, end: datetime) -> None:
    """Raises InvalidBlockedTimeError unless end is after start."""
    if end <= start:
        raise InvalidBlockedTimeError(
            f"end_date must be after start_date, got {start.isoformat()} - {end.isoformat()}"
        )


class AvailabilityManager:
    """Provider availability management and queries on top of a BookingStore."""

    def __init__(self, store: BookingStore) -> None:
        self._store = store

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    async def get_availability_rules(self, provider_id: str) -> list[AvailabilityRule]:
        return await self._store.fetch_availability_rules(provider_id)

    async def get_availability_by_day(
        self, provider_id: str, day_of_week: int
    ) -> list[AvailabilityRule]:
        """Rules for one weekday (0 = Sunday), earliest start first."""
        rules = await self._store.fetch_availability_rules(provider_id)
        same_day = [r for r in rules if r.day_of_week == day_of_week]
        return sorted(same_day, key=lambda r: parse_clock(r.start_time))

    async def get_blocked_times(self, provider_id: str) -> list[BlockedTime]:
        return await self._store.fetch_blocked_times(provider_id)

    async def get_blocked_times_in_range(
        self, provider_id: str, start: datetime, end: datetime
    ) -> list[BlockedTime]:
        """Blocked times intersecting ``[start, end)``."""
        blocks = await self._store.fetch_blocked_times(provider_id)
        return [b for b in blocks if b.start_date < end and b.end_date > start]

    async def is_bookable(
        self, provider_id: str, candidate_start: datetime, candidate_end: datetime
    ) -> bool:
        """Whether the provider can take a booking for the whole candidate window.

        An inactive provider is never bookable.
        """
        provider = await self._store.fetch_provider(provider_id)
        if not provider.is_active:
            logger.debug("Provider %s is inactive", provider_id)
            return False
        rules = await self._store.fetch_availability_rules(provider_id)
        blocks = await self._store.fetch_blocked_times(provider_id)
        return resolver.is_bookable(rules, blocks, candidate_start, candidate_end)

    async def enumerate_slots(
        self,
        provider_id: str,
        range_start: date,
        range_end: date,
        slot_duration: Optional[timedelta] = None,
        tz: Optional[tzinfo] = None,
    ) -> list[BookableSlot]:
        """Bookable slots for each date in ``[range_start, range_end]``.

        Raises:
            ValueError: If the range exceeds the configured maximum.
        """
        span = (range_end - range_start).days + 1
        if span > settings.availability.max_slot_range_days:
            raise ValueError(
                f"Date range of {span} days exceeds the limit of "
                f"{settings.availability.max_slot_range_days}"
            )
        if slot_duration is None:
            slot_duration = timedelta(minutes=settings.booking.default_slot_minutes)

        provider = await self._store.fetch_provider(provider_id)
        if not provider.is_active:
            return []
        rules = await self._store.fetch_availability_rules(provider_id)
        blocks = await self._store.fetch_blocked_times(provider_id)
        return resolver.enumerate_slots(rules, blocks, range_start, range_end, slot_duration, tz)

    # ------------------------------------------------------------------ #
    # Rule management
    # ------------------------------------------------------------------ #

    async def create_availability_rule(self, data: AvailabilityRuleInput) -> AvailabilityRule:
        validate_rule(data.day_of_week, data.start_time, data.end_time)
        rule = await self._store.create_availability_rule(data)
        logger.info(
            "Availability rule %s created for provider %s: day %d %s-%s",
            rule.id, rule.provider_id, rule.day_of_week, rule.start_time, rule.end_time,
        )
        return rule

    async def update_availability_rule(
        self, rule_id: str, patch: AvailabilityRulePatch
    ) -> AvailabilityRule:
        """Apply a partial update; the merged rule must still be valid."""
        if patch.start_time is not None or patch.end_time is not None:
            current = await self._store.fetch_availability_rule(rule_id)
            validate_rule(
                current.day_of_week,
                patch.start_time if patch.start_time is not None else current.start_time,
                patch.end_time if patch.end_time is not None else current.end_time,
            )
        rule = await self._store.update_availability_rule(rule_id, patch)
        logger.info("Availability rule %s updated", rule_id)
        return rule

    async def delete_availability_rule(self, rule_id: str) -> None:
        await self._store.delete_availability_rule(rule_id)
        logger.info("Availability rule %s deleted", rule_id)

    async def set_default_availability(self, provider_id: str) -> list[AvailabilityRule]:
        """Give a provider with no rules the default weekly hours.

        Inserts one rule per configured default day (Monday-Friday
        09:00-17:00 unless overridden) in a single write. If the provider
        already has any rules, enabled or not, nothing is written and the
        existing rules are returned.
        """
        existing = await self._store.fetch_availability_rules(provider_id)
        if existing:
            logger.debug(
                "Provider %s already has %d rules; default availability skipped",
                provider_id, len(existing),
            )
            return existing

        cfg = settings.availability
        defaults = [
            AvailabilityRuleInput(
                provider_id=provider_id,
                day_of_week=day,
                start_time=cfg.default_start,
                end_time=cfg.default_end,
                is_available=True,
            )
            for day in cfg.default_days
        ]
        for item in defaults:
            validate_rule(item.day_of_week, item.start_time, item.end_time)
        created = await self._store.create_availability_rules(defaults)
        logger.info("Default availability set for provider %s (%d rules)", provider_id, len(created))
        return created

    # ------------------------------------------------------------------ #
    # Blocked time management
    # ------------------------------------------------------------------ #

    async def create_blocked_time(self, data: BlockedTimeInput) -> BlockedTime:
        validate_blocked_window(data.start_date, data.end_date)
        block = await self._store.create_blocked_time(data)
        logger.info(
            "Blocked time %s created for provider %s: %s - %s",
            block.id, block.provider_id, block.start_date.isoformat(), block.end_date.isoformat(),
        )
        return block

    async def update_blocked_time(self, block_id: str, patch: BlockedTimePatch) -> BlockedTime:
        if patch.start_date is not None or patch.end_date is not None:
            current = await self._store.fetch_blocked_time(block_id)
            validate_blocked_window(
                patch.start_date if patch.start_date is not None else current.start_date,
                patch.end_date if patch.end_date is not None else current.end_date,
            )
        block = await self._store.update_blocked_time(block_id, patch)
        logger.info("Blocked time %s updated", block_id)
        return block

    async def delete_blocked_time(self, block_id: str) -> None:
        await self._store.delete_blocked_time(block_id)
        logger.info("Blocked time %s deleted", block_id)
