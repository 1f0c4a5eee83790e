"""Shared test fixtures and helpers."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from washbook.availability.manager import AvailabilityManager
from washbook.booking.wizard import BookingWizard
from washbook.errors import PersistenceError
from washbook.schemas.availability_schema import (
    AvailabilityRule,
    AvailabilityRuleInput,
    BlockedTime,
    BlockedTimeInput,
)
from washbook.schemas.catalog_schema import (
    AddOn,
    Location,
    Provider,
    Service,
    ServiceCategory,
    Vehicle,
)
from washbook.tools.memory_store import InMemoryBookingStore

# 2025-03-17 is a Monday.
MONDAY = date(2025, 3, 17)
TUESDAY = date(2025, 3, 18)
SUNDAY = date(2025, 3, 16)

CUSTOMER_ID = "cust-1"


def make_provider(provider_id: str = "prov-1", is_active: bool = True) -> Provider:
    return Provider(id=provider_id, business_name="Sparkle Mobile", is_active=is_active)


def make_service(
    service_id: str = "svc-1",
    provider_id: str = "prov-1",
    base_price: str = "49.99",
    duration: int = 60,
    category: ServiceCategory = ServiceCategory.EXTERIOR_WASH,
    on_site: bool = False,
    is_active: bool = True,
) -> Service:
    return Service(
        id=service_id,
        provider_id=provider_id,
        name="Exterior Hand Wash",
        category=category,
        base_price=Decimal(base_price),
        duration=duration,
        on_site=on_site,
        is_active=is_active,
    )


def make_add_on(
    add_on_id: str,
    price: str,
    duration: int = 0,
    provider_id: Optional[str] = None,
    category: Optional[ServiceCategory] = None,
) -> AddOn:
    return AddOn(
        id=add_on_id,
        name=f"Add-on {add_on_id}",
        price=Decimal(price),
        duration=duration,
        provider_id=provider_id,
        category=category,
    )


def make_vehicle(vehicle_id: str = "veh-1", customer_id: str = CUSTOMER_ID) -> Vehicle:
    return Vehicle(id=vehicle_id, customer_id=customer_id, make="Toyota", model="Corolla")


def make_rule(
    day_of_week: int = 1,
    start_time: str = "09:00",
    end_time: str = "17:00",
    is_available: bool = True,
    provider_id: str = "prov-1",
    rule_id: str = "rule-1",
) -> AvailabilityRule:
    return AvailabilityRule(
        id=rule_id,
        provider_id=provider_id,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        is_available=is_available,
    )


def make_block(
    start: datetime,
    end: datetime,
    provider_id: str = "prov-1",
    block_id: str = "block-1",
) -> BlockedTime:
    return BlockedTime(id=block_id, provider_id=provider_id, start_date=start, end_date=end)


class FailingStore(InMemoryBookingStore):
    """Store whose reservation writes are always rejected."""

    def __init__(self) -> None:
        super().__init__()
        self.reservation_calls = 0

    async def create_reservation(self, request):
        self.reservation_calls += 1
        raise PersistenceError("backend unavailable")


class CountingStore(InMemoryBookingStore):
    """Store that counts reservation writes."""

    def __init__(self) -> None:
        super().__init__()
        self.reservation_calls = 0

    async def create_reservation(self, request):
        self.reservation_calls += 1
        return await super().create_reservation(request)


def seed(store: InMemoryBookingStore) -> InMemoryBookingStore:
    """Provider prov-1 with Monday 09:00-17:00, its service and a vehicle."""
    store.add_provider(make_provider())
    store.add_provider(make_provider("prov-off", is_active=False))
    store.add_service(make_service())
    store.add_vehicle(make_vehicle())
    store.add_rule(AvailabilityRuleInput(
        provider_id="prov-1", day_of_week=1, start_time="09:00", end_time="17:00",
    ))
    return store


@pytest.fixture
def store():
    return seed(CountingStore())


@pytest.fixture
def failing_store():
    return seed(FailingStore())


@pytest.fixture
def availability(store):
    return AvailabilityManager(store)


@pytest.fixture
def wizard(store, availability):
    return BookingWizard(store, availability=availability, customer_id=CUSTOMER_ID)


def fill_wizard(
    wizard: BookingWizard,
    day: date = MONDAY,
    time_label: str = "10:00 AM",
) -> BookingWizard:
    """Populate every required draft field."""
    wizard.set_selected_service(make_service())
    wizard.set_selected_vehicle(make_vehicle())
    wizard.set_selected_location(Location(address="12 Harbour St, Springfield"))
    wizard.set_selected_provider(make_provider())
    wizard.set_selected_date(day)
    wizard.set_selected_time(time_label)
    return wizard


def blocked_input(start: datetime, end: datetime, provider_id: str = "prov-1") -> BlockedTimeInput:
    return BlockedTimeInput(provider_id=provider_id, start_date=start, end_date=end)
