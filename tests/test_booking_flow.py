"""Integration tests: wizard + availability manager + store together."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from washbook.availability.manager import AvailabilityManager
from washbook.booking.wizard import BookingWizard, WizardStep
from washbook.schemas.availability_schema import BlockedTimeInput
from washbook.schemas.catalog_schema import Location
from washbook.tools.catalog import DEMO_ADD_ONS, DEMO_CUSTOMER_ID, build_demo_store

# 2025-03-17 is a Monday.
MONDAY = date(2025, 3, 17)


class TestFullBookingFlow:
    """Walk a customer from service selection to a stored reservation."""

    @pytest.mark.asyncio
    async def test_happy_path(self):
        store = build_demo_store()
        availability = AvailabilityManager(store)
        wizard = BookingWizard(store, availability=availability, customer_id=DEMO_CUSTOMER_ID)

        # Service + add-ons
        wizard.set_selected_service(await store.fetch_service("svc-exterior"))
        wizard.toggle_add_on(DEMO_ADD_ONS["tire-shine"])
        wizard.toggle_add_on(DEMO_ADD_ONS["rain-repellent"])
        assert wizard.calculate_total() == Decimal("72.49")
        assert await wizard.advance()

        # Vehicle
        wizard.set_selected_vehicle(store.vehicles["veh-001"])
        assert await wizard.advance()

        # Location
        wizard.set_selected_location(Location(address="12 Harbour St, Springfield"))
        assert await wizard.advance()

        # Provider
        wizard.set_selected_provider(await store.fetch_provider("prov-sparkle"))
        assert await wizard.advance()
        assert wizard.current_step == WizardStep.TIME_SELECTION

        # Time: lunch gap 12:00-13:00 is not offered
        wizard.set_selected_date(MONDAY)
        times = await wizard.available_times()
        assert "8:00 AM" in times
        assert not any(t.startswith("12:") for t in times)

        wizard.set_selected_time("11:30 AM")  # 65 minutes would run into lunch
        assert not await wizard.advance()
        wizard.set_selected_time("1:00 PM")
        assert await wizard.advance()
        assert wizard.current_step == WizardStep.CONFIRMATION

        reservation = await wizard.submit()
        assert reservation.scheduled_at == datetime(2025, 3, 17, 13, 0)
        assert reservation.estimated_duration == 65
        assert reservation.total_price == Decimal("72.49")
        assert store.reservations[reservation.id].provider_id == "prov-sparkle"
        assert wizard.draft.is_empty()

    @pytest.mark.asyncio
    async def test_provider_blocks_time_then_customer_books_around_it(self):
        store = build_demo_store()
        availability = AvailabilityManager(store)
        await availability.create_blocked_time(BlockedTimeInput(
            provider_id="prov-sparkle",
            start_date=datetime(2025, 3, 17, 8),
            end_date=datetime(2025, 3, 17, 10),
            reason="Van service",
        ))

        wizard = BookingWizard(store, availability=availability, customer_id=DEMO_CUSTOMER_ID)
        wizard.set_selected_service(await store.fetch_service("svc-exterior"))
        wizard.set_selected_provider(await store.fetch_provider("prov-sparkle"))
        wizard.set_selected_date(MONDAY)

        times = await wizard.available_times()
        assert times[0] == "10:00 AM"

    @pytest.mark.asyncio
    async def test_new_provider_gets_default_hours_and_becomes_bookable(self):
        store = build_demo_store()
        availability = AvailabilityManager(store)
        assert not await availability.is_bookable(
            "prov-shine", datetime(2025, 3, 17, 10), datetime(2025, 3, 17, 11)
        )
        await availability.set_default_availability("prov-shine")
        assert await availability.is_bookable(
            "prov-shine", datetime(2025, 3, 17, 10), datetime(2025, 3, 17, 11)
        )
        # Saturday stays closed
        assert not await availability.is_bookable(
            "prov-shine", datetime(2025, 3, 22, 10), datetime(2025, 3, 22, 11)
        )

    @pytest.mark.asyncio
    async def test_on_site_service_needs_location(self):
        store = build_demo_store()
        wizard = BookingWizard(store, customer_id=DEMO_CUSTOMER_ID)
        wizard.set_selected_service(await store.fetch_service("svc-ceramic"))
        wizard.set_selected_vehicle(store.vehicles["veh-001"])
        assert await wizard.advance()
        assert await wizard.advance()
        assert wizard.current_step == WizardStep.LOCATION_SELECTION
        assert not await wizard.advance()
        wizard.set_selected_location(Location(address="Unit 4, 9 Dock Rd"))
        assert await wizard.advance()
