"""Salon domain schemas - Pydantic response models"""

from ...schemas import Barber, CamelModel, Salon


class SalonDetailResponse(CamelModel):
    salon: Salon
    barbers: list[Barber]
