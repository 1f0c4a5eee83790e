"""
Draft reservation accumulated by the booking wizard.

The draft is a plain mutable record owned by exactly one wizard. It has
no behaviour beyond describing which fields are required and which are
still missing; the wizard decides how fields change.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from washbook.schemas.catalog_schema import AddOn, Location, Provider, Service, Vehicle
from washbook.utils import is_time_label


@dataclass(frozen=True)
class DraftField:
    """Schema for one required slice of the draft."""

    name: str
    display_name: str


# Order matches the order the wizard steps collect them.
REQUIRED_FIELDS: list[DraftField] = [
    DraftField(name="service", display_name="service"),
    DraftField(name="vehicle", display_name="vehicle"),
    DraftField(name="provider", display_name="provider"),
    DraftField(name="date", display_name="date"),
    DraftField(name="time", display_name="time"),
]

LOCATION_FIELD = DraftField(name="location", display_name="service location")


@dataclass
class DraftReservation:
    """Selections gathered across the wizard steps."""

    selected_service: Optional[Service] = None
    selected_add_ons: list[AddOn] = field(default_factory=list)
    selected_vehicle: Optional[Vehicle] = None
    selected_location: Optional[Location] = None
    selected_provider: Optional[Provider] = None
    selected_date: Optional[date] = None
    selected_time: Optional[str] = None

    def value_of(self, name: str) -> Any:
        return getattr(self, f"selected_{name}")

    def location_required(self) -> bool:
        return self.selected_service is not None and self.selected_service.on_site

    def provider_matches_service(self) -> bool:
        """False only when both are set and the service is another provider's."""
        if self.selected_service is None or self.selected_provider is None:
            return True
        return self.selected_service.provider_id == self.selected_provider.id

    def missing_fields(self) -> list[str]:
        """Names of required fields that are unset or unusable, in step order.

        A provider that does not offer the selected service counts as
        missing, as does a time label that does not parse.
        """
        location_missing = self.location_required() and self.selected_location is None
        missing = []
        for defn in REQUIRED_FIELDS:
            if defn.name == "provider" and location_missing:
                missing.append(LOCATION_FIELD.name)
            value = self.value_of(defn.name)
            if value is None:
                missing.append(defn.name)
            elif defn.name == "provider" and not self.provider_matches_service():
                missing.append(defn.name)
            elif defn.name == "time" and not is_time_label(value):
                missing.append(defn.name)
        return missing

    def is_empty(self) -> bool:
        return self == DraftReservation()
