from washbook.availability.intervals import Interval
from washbook.availability.manager import AvailabilityManager
from washbook.availability.resolver import enumerate_slots, is_bookable, iter_slots

__all__ = [
    "AvailabilityManager",
    "Interval",
    "enumerate_slots",
    "is_bookable",
    "iter_slots",
]
