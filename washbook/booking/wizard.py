"""
Booking wizard: step state machine over a single draft reservation.

The customer moves through service, vehicle, location, provider and time
selection before confirming. Steps are linear but revisitable: going back
never clears later selections, only an incompatible change does (a new
service drops add-ons it cannot carry). On confirmation the draft turns
into exactly one create-reservation command.

Usage:
    wizard = BookingWizard(store, availability=AvailabilityManager(store))
    wizard.set_selected_service(service)
    await wizard.advance()
    ...
    reservation = await wizard.submit(notes="Gate code 1234")
"""

import asyncio
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Optional

from washbook.availability.manager import AvailabilityManager
from washbook.booking.draft import DraftReservation
from washbook.config import settings
from washbook.errors import IncompleteBookingError, InvalidTimeLabelError, PersistenceError
from washbook.logging_context import get_session_logger, session_scope
from washbook.schemas.booking_schema import Reservation, ReservationRequest
from washbook.schemas.catalog_schema import AddOn, Location, Provider, Service, Vehicle
from washbook.tools.persistence import BookingStore
from washbook.utils import combine_date_and_time

logger = get_session_logger(__name__)


class WizardStep(str, Enum):
    """Screens of the booking flow, in order."""
    SERVICE_SELECTION = "service_selection"
    VEHICLE_SELECTION = "vehicle_selection"
    LOCATION_SELECTION = "location_selection"
    PROVIDER_SELECTION = "provider_selection"
    TIME_SELECTION = "time_selection"
    CONFIRMATION = "confirmation"


STEP_ORDER: list[WizardStep] = list(WizardStep)


@dataclass
class StepEntry:
    """Recorded history entry for a step visit."""
    step: WizardStep
    entered_at: datetime


def is_add_on_compatible(add_on: AddOn, service: Service) -> bool:
    """An add-on fits a service when its provider and category (if set) match."""
    if add_on.provider_id is not None and add_on.provider_id != service.provider_id:
        return False
    if add_on.category is not None and add_on.category != service.category:
        return False
    return True


class BookingWizard:
    """
    Owns one draft reservation and the step the customer is on.

    Setters never fail. Navigation returns False instead of raising when
    a step is not ready. Only submit() raises: IncompleteBookingError
    before any store call, or the store's PersistenceError unchanged.
    """

    def __init__(
        self,
        store: BookingStore,
        availability: Optional[AvailabilityManager] = None,
        customer_id: Optional[str] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._store = store
        self._availability = availability
        self._tz = tz
        self._submit_lock = asyncio.Lock()
        self.customer_id = customer_id
        self.session_id = f"WZ-{uuid.uuid4().hex[:8].upper()}"
        self.draft = DraftReservation()
        self._current_step = WizardStep.SERVICE_SELECTION
        self._history: list[StepEntry] = [self._entry(WizardStep.SERVICE_SELECTION)]

    @staticmethod
    def _entry(step: WizardStep) -> StepEntry:
        return StepEntry(step=step, entered_at=datetime.now(timezone.utc))

    @property
    def current_step(self) -> WizardStep:
        return self._current_step

    # ------------------------------------------------------------------ #
    # Setters
    # ------------------------------------------------------------------ #

    def set_selected_service(self, service: Optional[Service]) -> None:
        """Replace the service, dropping add-ons the new service cannot carry."""
        self.draft.selected_service = service
        if service is None:
            self.draft.selected_add_ons = []
            return
        kept = [a for a in self.draft.selected_add_ons if is_add_on_compatible(a, service)]
        dropped = len(self.draft.selected_add_ons) - len(kept)
        if dropped:
            logger.debug("Service changed to %s; dropped %d add-ons", service.id, dropped)
        self.draft.selected_add_ons = kept

    def toggle_add_on(self, add_on: AddOn) -> None:
        """Remove the add-on if selected (by id), otherwise add it.

        Adding is ignored unless a compatible service is selected.
        """
        selected = self.draft.selected_add_ons
        if any(a.id == add_on.id for a in selected):
            self.draft.selected_add_ons = [a for a in selected if a.id != add_on.id]
            return
        service = self.draft.selected_service
        if service is None or not is_add_on_compatible(add_on, service):
            logger.debug("Add-on %s ignored: no compatible service selected", add_on.id)
            return
        self.draft.selected_add_ons = [*selected, add_on]

    def set_selected_vehicle(self, vehicle: Optional[Vehicle]) -> None:
        self.draft.selected_vehicle = vehicle

    def set_selected_location(self, location: Optional[Location]) -> None:
        self.draft.selected_location = location

    def set_selected_provider(self, provider: Optional[Provider]) -> None:
        self.draft.selected_provider = provider

    def set_selected_date(self, day: Optional[date]) -> None:
        self.draft.selected_date = day

    def set_selected_time(self, label: Optional[str]) -> None:
        self.draft.selected_time = label

    def reset_booking_flow(self) -> None:
        """Discard the draft and return to the first step."""
        self.draft = DraftReservation()
        self._current_step = WizardStep.SERVICE_SELECTION
        self._history = [self._entry(WizardStep.SERVICE_SELECTION)]
        logger.debug("Booking flow reset")

    # ------------------------------------------------------------------ #
    # Derived values
    # ------------------------------------------------------------------ #

    def calculate_total(self) -> Decimal:
        """Service base price plus add-on prices. Tax and fees are not included."""
        service = self.draft.selected_service
        if service is None:
            return Decimal("0")
        return service.base_price + sum((a.price for a in self.draft.selected_add_ons), Decimal("0"))

    def estimated_duration(self) -> int:
        """Minutes the visit is expected to take, add-ons included."""
        service = self.draft.selected_service
        base = service.duration if service else settings.booking.default_service_duration
        return base + sum(a.duration for a in self.draft.selected_add_ons)

    def missing_fields(self) -> list[str]:
        return self.draft.missing_fields()

    def can_submit(self) -> bool:
        return not self.draft.missing_fields()

    def scheduled_at(self) -> Optional[datetime]:
        """Selected date and time label combined, or None if either is unset."""
        if self.draft.selected_date is None or self.draft.selected_time is None:
            return None
        return combine_date_and_time(self.draft.selected_date, self.draft.selected_time, self._tz)

    def get_summary(self) -> str:
        """Read-back text for the confirmation screen."""
        d = self.draft
        lines = []
        if d.selected_service:
            lines.append(f"  Service: {d.selected_service.name}")
        for add_on in d.selected_add_ons:
            lines.append(f"  Add-on: {add_on.name} (+{add_on.price})")
        if d.selected_vehicle:
            lines.append(f"  Vehicle: {d.selected_vehicle.make} {d.selected_vehicle.model}")
        if d.selected_location:
            lines.append(f"  Location: {d.selected_location.address}")
        if d.selected_provider:
            lines.append(f"  Provider: {d.selected_provider.business_name}")
        if d.selected_date:
            lines.append(f"  Date: {d.selected_date.strftime('%A, %B %d, %Y')}")
        if d.selected_time:
            lines.append(f"  Time: {d.selected_time}")
        lines.append(f"  Total: {self.calculate_total()} {settings.booking.currency}")
        return "Booking summary:\n" + "\n".join(lines)

    # ------------------------------------------------------------------ #
    # Step navigation
    # ------------------------------------------------------------------ #

    async def is_step_complete(self, step: WizardStep) -> bool:
        """Whether the slice of the draft owned by ``step`` is ready."""
        d = self.draft
        if step == WizardStep.SERVICE_SELECTION:
            return d.selected_service is not None and d.selected_service.is_active
        if step == WizardStep.VEHICLE_SELECTION:
            if d.selected_vehicle is None:
                return False
            return self.customer_id is None or d.selected_vehicle.customer_id == self.customer_id
        if step == WizardStep.LOCATION_SELECTION:
            return d.selected_location is not None or not d.location_required()
        if step == WizardStep.PROVIDER_SELECTION:
            if d.selected_provider is None or not d.selected_provider.is_active:
                return False
            return d.provider_matches_service()
        if step == WizardStep.TIME_SELECTION:
            return await self._time_is_bookable()
        return self.can_submit()

    async def _time_is_bookable(self) -> bool:
        try:
            start = self.scheduled_at()
        except InvalidTimeLabelError:
            logger.debug("Unparsable time label: %r", self.draft.selected_time)
            return False
        if start is None:
            return False
        if self._availability is None or self.draft.selected_provider is None:
            return True
        end = start + timedelta(minutes=self.estimated_duration())
        with session_scope(self.session_id):
            bookable = await self._availability.is_bookable(
                self.draft.selected_provider.id, start, end
            )
            if not bookable:
                logger.info(
                    "Provider %s not bookable at %s",
                    self.draft.selected_provider.id, start.isoformat(),
                )
        return bookable

    async def advance(self) -> bool:
        """Move to the next step if the current one is complete."""
        index = STEP_ORDER.index(self._current_step)
        if index == len(STEP_ORDER) - 1:
            return False
        if not await self.is_step_complete(self._current_step):
            return False
        self._move_to(STEP_ORDER[index + 1])
        return True

    def go_back(self) -> bool:
        index = STEP_ORDER.index(self._current_step)
        if index == 0:
            return False
        self._move_to(STEP_ORDER[index - 1])
        return True

    async def go_to(self, step: WizardStep) -> bool:
        """Jump to any step already reached during this flow.

        Jumping forward re-checks every step between the current one and
        the target, so a selection cleared after going back blocks the jump.
        """
        target = STEP_ORDER.index(step)
        if target > STEP_ORDER.index(self.furthest_step()):
            return False
        for skipped in STEP_ORDER[STEP_ORDER.index(self._current_step):target]:
            if not await self.is_step_complete(skipped):
                logger.debug("Jump to %s blocked at %s", step.value, skipped.value)
                return False
        if step != self._current_step:
            self._move_to(step)
        return True

    def furthest_step(self) -> WizardStep:
        return max((e.step for e in self._history), key=STEP_ORDER.index)

    def _move_to(self, step: WizardStep) -> None:
        old = self._current_step
        self._current_step = step
        self._history.append(self._entry(step))
        logger.debug("Step transition: %s -> %s", old.value, step.value)

    def get_history(self) -> list[StepEntry]:
        return list(self._history)

    def get_step_trace(self) -> list[str]:
        return [entry.step.value for entry in self._history]

    async def available_times(self) -> list[str]:
        """12-hour labels the selected provider can take on the selected date.

        Empty until a provider and a date are chosen, or when no
        availability source was given.
        """
        provider, day = self.draft.selected_provider, self.draft.selected_date
        if self._availability is None or provider is None or day is None:
            return []
        slots = await self._availability.enumerate_slots(
            provider.id, day, day, timedelta(minutes=self.estimated_duration()), self._tz
        )
        return [slot.label for slot in slots]

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    def _build_request(self, notes: Optional[str]) -> ReservationRequest:
        d = self.draft
        location = d.selected_location or Location(address=settings.booking.default_location_label)
        return ReservationRequest(
            customer_id=self.customer_id,
            provider_id=d.selected_provider.id,
            service_id=d.selected_service.id,
            vehicle_id=d.selected_vehicle.id,
            add_on_ids=[a.id for a in d.selected_add_ons],
            scheduled_at=self.scheduled_at(),
            location=location,
            total_price=self.calculate_total(),
            estimated_duration=self.estimated_duration(),
            notes=notes or None,
        )

    async def submit(self, notes: Optional[str] = None) -> Reservation:
        """
        Turn the draft into one reservation.

        Returns:
            The reservation recorded by the store. The draft is cleared.

        Raises:
            IncompleteBookingError: Required fields are missing or unusable
                (malformed time, provider not offering the service). The
                store is not called.
            PersistenceError: The store rejected the reservation. The draft
                is left untouched so the caller can retry.
        """
        async with self._submit_lock:
            with session_scope(self.session_id):
                return await self._submit_locked(notes)

    async def _submit_locked(self, notes: Optional[str]) -> Reservation:
        missing = self.missing_fields()
        if missing:
            logger.warning("Submit blocked, missing: %s", ", ".join(missing))
            raise IncompleteBookingError(missing)

        request = self._build_request(notes)
        try:
            reservation = await self._store.create_reservation(request)
        except PersistenceError as exc:
            logger.warning("Reservation rejected by store: %s", exc)
            raise

        logger.info(
            "Reservation %s submitted for %s (%s)",
            reservation.id, request.scheduled_at.isoformat(), request.total_price,
        )
        self.reset_booking_flow()
        return reservation
