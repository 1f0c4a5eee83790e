"""
Persistence port for the booking core.

The wizard and the availability manager only ever talk to a store
through this interface. Any backend (in-memory, SQL, hosted API) can sit
behind it; implementations raise PersistenceError for rejected calls.
"""

from abc import ABC, abstractmethod

from washbook.schemas.availability_schema import (
    AvailabilityRule,
    AvailabilityRuleInput,
    AvailabilityRulePatch,
    BlockedTime,
    BlockedTimeInput,
    BlockedTimePatch,
)
from washbook.schemas.booking_schema import Reservation, ReservationRequest
from washbook.schemas.catalog_schema import Provider, Service


class BookingStore(ABC):
    # --- Reads ---

    @abstractmethod
    async def fetch_provider(self, provider_id: str) -> Provider:
        raise NotImplementedError

    @abstractmethod
    async def fetch_service(self, service_id: str) -> Service:
        raise NotImplementedError

    @abstractmethod
    async def fetch_availability_rules(self, provider_id: str) -> list[AvailabilityRule]:
        """All rules for a provider, ordered by day then start time."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_availability_rule(self, rule_id: str) -> AvailabilityRule:
        raise NotImplementedError

    @abstractmethod
    async def fetch_blocked_times(self, provider_id: str) -> list[BlockedTime]:
        """All blocked times for a provider, ordered by start."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_blocked_time(self, block_id: str) -> BlockedTime:
        raise NotImplementedError

    # --- Reservations ---

    @abstractmethod
    async def create_reservation(self, request: ReservationRequest) -> Reservation:
        """Record a reservation. Returns the stored reservation."""
        raise NotImplementedError

    # --- Availability management ---

    @abstractmethod
    async def create_availability_rule(self, data: AvailabilityRuleInput) -> AvailabilityRule:
        raise NotImplementedError

    @abstractmethod
    async def create_availability_rules(
        self, data: list[AvailabilityRuleInput]
    ) -> list[AvailabilityRule]:
        """Insert several rules in a single write."""
        raise NotImplementedError

    @abstractmethod
    async def update_availability_rule(
        self, rule_id: str, patch: AvailabilityRulePatch
    ) -> AvailabilityRule:
        raise NotImplementedError

    @abstractmethod
    async def delete_availability_rule(self, rule_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def create_blocked_time(self, data: BlockedTimeInput) -> BlockedTime:
        raise NotImplementedError

    @abstractmethod
    async def update_blocked_time(self, block_id: str, patch: BlockedTimePatch) -> BlockedTime:
        raise NotImplementedError

    @abstractmethod
    async def delete_blocked_time(self, block_id: str) -> None:
        raise NotImplementedError
