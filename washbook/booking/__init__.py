from washbook.booking.draft import DraftReservation
from washbook.booking.wizard import BookingWizard, WizardStep

__all__ = [
    "BookingWizard",
    "DraftReservation",
    "WizardStep",
]
