"""Reservation data models exchanged with the store."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from washbook.schemas.catalog_schema import Location


class ReservationRequest(BaseModel):
    """The single create-reservation command emitted by a submitted wizard."""
    customer_id: Optional[str] = None
    provider_id: str
    service_id: str
    vehicle_id: str
    add_on_ids: list[str] = Field(default_factory=list)
    scheduled_at: datetime
    location: Location
    total_price: Decimal
    estimated_duration: int  # minutes
    notes: Optional[str] = None


class Reservation(ReservationRequest):
    """Reservation as recorded by the store."""
    id: str
    status: str = "pending"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
