"""Barber domain schemas - Pydantic models for profiles and services"""

from decimal import Decimal

from pydantic import Field

from ...schemas import Barber, BarberCreate, CamelModel, ReviewWithCustomer, Salon, Service


class BarberProfileCreate(BarberCreate):
    """Profile body; the salon is chosen by the barber"""

    salon_id: str


class BarberDetailResponse(CamelModel):
    barber: Barber
    services: list[Service]
    reviews: list[ReviewWithCustomer]
    salon: Salon


class AvailabilityUpdate(CamelModel):
    is_available: bool


class ServicePriceUpdate(CamelModel):
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
