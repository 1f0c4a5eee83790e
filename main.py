"""
Scripted booking demo against the in-memory store.

Walks the wizard through every step for the next weekday, prints the
bookable times offered and the resulting reservation. No UI, no network.

Usage:
    python main.py
    python main.py --date 2026-10-19 --time "1:00 PM"
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, timedelta

from washbook.availability import AvailabilityManager
from washbook.booking import BookingWizard
from washbook.config import settings
from washbook.errors import IncompleteBookingError, PersistenceError
from washbook.schemas.catalog_schema import Location
from washbook.tools.catalog import DEMO_ADD_ONS, DEMO_CUSTOMER_ID, build_demo_store

logger = logging.getLogger(__name__)


def _next_weekday(start: date) -> date:
    day = start + timedelta(days=1)
    while day.weekday() >= 5:
        day += timedelta(days=1)
    return day


async def run_demo(day: date, time_label: str) -> int:
    store = build_demo_store()
    availability = AvailabilityManager(store)
    wizard = BookingWizard(store, availability=availability, customer_id=DEMO_CUSTOMER_ID)

    wizard.set_selected_service(await store.fetch_service("svc-exterior"))
    wizard.toggle_add_on(DEMO_ADD_ONS["tire-shine"])
    await wizard.advance()
    wizard.set_selected_vehicle(store.vehicles["veh-001"])
    await wizard.advance()
    wizard.set_selected_location(Location(address="12 Harbour St, Springfield"))
    await wizard.advance()
    wizard.set_selected_provider(await store.fetch_provider("prov-sparkle"))
    await wizard.advance()
    wizard.set_selected_date(day)

    times = await wizard.available_times()
    print(f"Bookable times on {day.isoformat()}: {', '.join(times) or 'none'}")

    wizard.set_selected_time(time_label)
    if not await wizard.advance():
        print(f"{time_label} is not bookable on {day.isoformat()}.")
        return 1

    print(wizard.get_summary())
    try:
        reservation = await wizard.submit(notes="Driveway on the left")
    except (IncompleteBookingError, PersistenceError) as exc:
        print(f"Booking failed: {exc}")
        return 1

    print(f"Reservation {reservation.id} confirmed for {reservation.scheduled_at:%Y-%m-%d %H:%M}.")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=f"{settings.app_name} booking demo")
    parser.add_argument("--date", type=date.fromisoformat, default=_next_weekday(date.today()))
    parser.add_argument("--time", default="9:00 AM")
    args = parser.parse_args()
    sys.exit(asyncio.run(run_demo(args.date, args.time)))


if __name__ == "__main__":
    main()
