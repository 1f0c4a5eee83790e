"""Catalog data models: services, add-ons, vehicles, providers, locations."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCategory(str, Enum):
    """Kinds of wash and detailing work a provider can offer."""
    EXTERIOR_WASH = "EXTERIOR_WASH"
    INTERIOR_CLEANING = "INTERIOR_CLEANING"
    FULL_DETAIL = "FULL_DETAIL"
    WAX_POLISH = "WAX_POLISH"
    ENGINE_CLEAN = "ENGINE_CLEAN"
    HEADLIGHT_RESTORATION = "HEADLIGHT_RESTORATION"
    PAINT_CORRECTION = "PAINT_CORRECTION"
    CERAMIC_COATING = "CERAMIC_COATING"


class AddOn(BaseModel):
    """Optional extra on top of a service, priced and timed independently."""
    id: str
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    duration: int = Field(default=0, ge=0)  # additional minutes
    provider_id: Optional[str] = None
    category: Optional[ServiceCategory] = None


class Service(BaseModel):
    """A provider's bookable offering."""
    id: str
    provider_id: str
    name: str
    category: ServiceCategory
    base_price: Decimal = Field(ge=0)
    duration: int = Field(default=60, gt=0)  # minutes
    description: str = ""
    add_ons: list[AddOn] = Field(default_factory=list)
    on_site: bool = False
    is_active: bool = True


class Vehicle(BaseModel):
    """A customer's vehicle."""
    id: str
    customer_id: str
    make: str
    model: str
    year: Optional[int] = None
    license_plate: Optional[str] = None


class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Location(BaseModel):
    """Where the service should take place."""
    address: str
    coordinates: Optional[Coordinates] = None


class Provider(BaseModel):
    """A mobile wash/detailing business."""
    id: str
    business_name: str
    is_active: bool = True
    rating: float = Field(default=0.0, ge=0, le=5)
