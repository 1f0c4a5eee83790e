"""
In-memory booking store.

Stands in for the hosted backend in tests and the demo. In production
the same BookingStore interface would be backed by a database or an
HTTP API client.
"""

import uuid
from datetime import datetime, timezone

from washbook.errors import PersistenceError
from washbook.logging_context import get_session_logger
from washbook.schemas.availability_schema import (
    AvailabilityRule,
    AvailabilityRuleInput,
    AvailabilityRulePatch,
    BlockedTime,
    BlockedTimeInput,
    BlockedTimePatch,
)
from washbook.schemas.booking_schema import Reservation, ReservationRequest
from washbook.schemas.catalog_schema import Provider, Service, Vehicle
from washbook.tools.persistence import BookingStore

logger = get_session_logger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryBookingStore(BookingStore):
    """Dict-backed store. Unknown ids raise PersistenceError."""

    def __init__(self) -> None:
        self.providers: dict[str, Provider] = {}
        self.services: dict[str, Service] = {}
        self.vehicles: dict[str, Vehicle] = {}
        self.rules: dict[str, AvailabilityRule] = {}
        self.blocks: dict[str, BlockedTime] = {}
        self.reservations: dict[str, Reservation] = {}

    # ------------------------------------------------------------------ #
    # Seeding helpers (synchronous so fixtures can use them directly)
    # ------------------------------------------------------------------ #

    def add_provider(self, provider: Provider) -> Provider:
        self.providers[provider.id] = provider
        return provider

    def add_service(self, service: Service) -> Service:
        self.services[service.id] = service
        return service

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    def add_rule(self, data: AvailabilityRuleInput) -> AvailabilityRule:
        rule = AvailabilityRule(id=_new_id(), **data.model_dump())
        self.rules[rule.id] = rule
        return rule

    def add_block(self, data: BlockedTimeInput) -> BlockedTime:
        block = BlockedTime(id=_new_id(), **data.model_dump())
        self.blocks[block.id] = block
        return block

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def fetch_provider(self, provider_id: str) -> Provider:
        if provider_id not in self.providers:
            raise PersistenceError(f"Provider {provider_id} not found.")
        return self.providers[provider_id]

    async def fetch_service(self, service_id: str) -> Service:
        if service_id not in self.services:
            raise PersistenceError(f"Service {service_id} not found.")
        return self.services[service_id]

    async def fetch_availability_rules(self, provider_id: str) -> list[AvailabilityRule]:
        rules = [r for r in self.rules.values() if r.provider_id == provider_id]
        return sorted(rules, key=lambda r: (r.day_of_week, r.start_time))

    async def fetch_availability_rule(self, rule_id: str) -> AvailabilityRule:
        if rule_id not in self.rules:
            raise PersistenceError(f"Availability rule {rule_id} not found.")
        return self.rules[rule_id]

    async def fetch_blocked_times(self, provider_id: str) -> list[BlockedTime]:
        blocks = [b for b in self.blocks.values() if b.provider_id == provider_id]
        return sorted(blocks, key=lambda b: b.start_date)

    async def fetch_blocked_time(self, block_id: str) -> BlockedTime:
        if block_id not in self.blocks:
            raise PersistenceError(f"Blocked time {block_id} not found.")
        return self.blocks[block_id]

    # ------------------------------------------------------------------ #
    # Reservations
    # ------------------------------------------------------------------ #

    async def create_reservation(self, request: ReservationRequest) -> Reservation:
        if request.provider_id not in self.providers:
            raise PersistenceError(f"Provider {request.provider_id} not found.")
        if request.service_id not in self.services:
            raise PersistenceError(f"Service {request.service_id} not found.")

        ref = f"BK-{uuid.uuid4().hex[:6].upper()}"
        reservation = Reservation(id=ref, **request.model_dump())
        self.reservations[ref] = reservation
        logger.info(
            "Reservation created: %s with provider %s at %s",
            ref, request.provider_id, request.scheduled_at.isoformat(),
        )
        return reservation

    # ------------------------------------------------------------------ #
    # Availability management
    # ------------------------------------------------------------------ #

    async def create_availability_rule(self, data: AvailabilityRuleInput) -> AvailabilityRule:
        return self.add_rule(data)

    async def create_availability_rules(
        self, data: list[AvailabilityRuleInput]
    ) -> list[AvailabilityRule]:
        return [self.add_rule(item) for item in data]

    async def update_availability_rule(
        self, rule_id: str, patch: AvailabilityRulePatch
    ) -> AvailabilityRule:
        current = await self.fetch_availability_rule(rule_id)
        updated = current.model_copy(
            update={
                **patch.model_dump(exclude_none=True),
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self.rules[rule_id] = updated
        return updated

    async def delete_availability_rule(self, rule_id: str) -> None:
        if self.rules.pop(rule_id, None) is None:
            raise PersistenceError(f"Availability rule {rule_id} not found.")

    async def create_blocked_time(self, data: BlockedTimeInput) -> BlockedTime:
        return self.add_block(data)

    async def update_blocked_time(self, block_id: str, patch: BlockedTimePatch) -> BlockedTime:
        current = await self.fetch_blocked_time(block_id)
        updated = current.model_copy(
            update={
                **patch.model_dump(exclude_none=True),
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self.blocks[block_id] = updated
        return updated

    async def delete_blocked_time(self, block_id: str) -> None:
        if self.blocks.pop(block_id, None) is None:
            raise PersistenceError(f"Blocked time {block_id} not found.")
