"""Demo catalog: providers, services, add-ons and vehicles for a local store."""

import logging
from decimal import Decimal

from washbook.schemas.availability_schema import AvailabilityRuleInput
from washbook.schemas.catalog_schema import AddOn, Provider, Service, ServiceCategory, Vehicle
from washbook.tools.memory_store import InMemoryBookingStore

logger = logging.getLogger(__name__)

DEMO_CUSTOMER_ID = "cust-001"

DEMO_PROVIDERS: list[Provider] = [
    Provider(id="prov-sparkle", business_name="Sparkle Mobile Detailing", rating=4.8),
    Provider(id="prov-shine", business_name="Shine On Wheels", rating=4.5),
    Provider(id="prov-closed", business_name="Retired Wash Co.", is_active=False),
]

DEMO_ADD_ONS: dict[str, AddOn] = {
    "tire-shine": AddOn(
        id="tire-shine", name="Tire Shine", price=Decimal("10.00"), duration=10,
        provider_id="prov-sparkle",
    ),
    "pet-hair": AddOn(
        id="pet-hair", name="Pet Hair Removal", price=Decimal("15.00"), duration=20,
        provider_id="prov-sparkle", category=ServiceCategory.INTERIOR_CLEANING,
    ),
    "rain-repellent": AddOn(
        id="rain-repellent", name="Glass Rain Repellent", price=Decimal("12.50"), duration=10,
    ),
}

DEMO_SERVICES: list[Service] = [
    Service(
        id="svc-exterior",
        provider_id="prov-sparkle",
        name="Exterior Hand Wash",
        category=ServiceCategory.EXTERIOR_WASH,
        base_price=Decimal("49.99"),
        duration=45,
        description="Foam pre-wash, hand wash, wheels and dry.",
        add_ons=[DEMO_ADD_ONS["tire-shine"], DEMO_ADD_ONS["rain-repellent"]],
    ),
    Service(
        id="svc-interior",
        provider_id="prov-sparkle",
        name="Interior Deep Clean",
        category=ServiceCategory.INTERIOR_CLEANING,
        base_price=Decimal("89.00"),
        duration=90,
        add_ons=[DEMO_ADD_ONS["pet-hair"]],
    ),
    Service(
        id="svc-ceramic",
        provider_id="prov-shine",
        name="Ceramic Coating",
        category=ServiceCategory.CERAMIC_COATING,
        base_price=Decimal("399.00"),
        duration=240,
        on_site=True,
    ),
]

DEMO_VEHICLES: list[Vehicle] = [
    Vehicle(id="veh-001", customer_id=DEMO_CUSTOMER_ID, make="Toyota", model="RAV4", year=2021),
]


def build_demo_store() -> InMemoryBookingStore:
    """An in-memory store seeded with the demo catalog and weekday hours."""
    store = InMemoryBookingStore()
    for provider in DEMO_PROVIDERS:
        store.add_provider(provider)
    for service in DEMO_SERVICES:
        store.add_service(service)
    for vehicle in DEMO_VEHICLES:
        store.add_vehicle(vehicle)
    for day in range(1, 6):
        store.add_rule(AvailabilityRuleInput(
            provider_id="prov-sparkle", day_of_week=day, start_time="08:00", end_time="12:00",
        ))
        store.add_rule(AvailabilityRuleInput(
            provider_id="prov-sparkle", day_of_week=day, start_time="13:00", end_time="18:00",
        ))
    logger.debug("Demo store seeded with %d services", len(DEMO_SERVICES))
    return store
