"""Barber service - Business logic for barber profiles and their services"""

import logging
from decimal import Decimal

from ...auth import CurrentUser
from ...exceptions import InconsistentDataError, NotFoundError, PermissionDeniedError, ValidationError
from ...schemas import Barber, Service, ServiceCreate
from ...storage import Storage
from .schemas import BarberDetailResponse, BarberProfileCreate

logger = logging.getLogger(__name__)


class BarberService:
    """Service layer for barber business logic"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def get_detail(self, barber_id: str) -> BarberDetailResponse:
        """Barber with active services, reviews and salon"""
        barber = self.storage.get_barber_by_id(barber_id)
        if not barber:
            raise NotFoundError("Barber", barber_id)

        salon = self.storage.get_salon_by_id(barber.salon_id)
        if not salon:
            raise InconsistentDataError("Salon", barber.salon_id, f"barber {barber.id}")

        return BarberDetailResponse(
            barber=barber,
            services=self.storage.get_services_by_barber(barber.id),
            reviews=self.storage.get_reviews_by_barber(barber.id),
            salon=salon,
        )

    def get_own_profile(self, user: CurrentUser) -> Barber:
        barber = self.storage.get_barbers_by_user_id(user.id)
        if not barber:
            raise NotFoundError("Barber profile", user.id)
        return barber

    def create_profile(self, data: BarberProfileCreate, user: CurrentUser) -> Barber:
        """One profile per barber account, attached to an existing salon"""
        if self.storage.get_barbers_by_user_id(user.id):
            raise ValidationError("Barber profile already exists")
        if not self.storage.get_salon_by_id(data.salon_id):
            raise NotFoundError("Salon", data.salon_id)

        barber = self.storage.create_barber(data, user_id=user.id, salon_id=data.salon_id)
        logger.info(f"💈 Barber profile {barber.id} created for user {user.id} at salon {data.salon_id}")
        return barber

    def set_availability(self, user: CurrentUser, is_available: bool) -> Barber:
        barber = self.get_own_profile(user)
        self.storage.update_barber_availability(barber.id, is_available)
        barber.is_available = is_available
        return barber

    def list_services(self, barber_id: str) -> list[Service]:
        return self.storage.get_services_by_barber(barber_id)

    def create_service(self, data: ServiceCreate, user: CurrentUser) -> Service:
        barber = self.get_own_profile(user)
        service = self.storage.create_service(data, barber_id=barber.id)
        logger.info(f"✂️ Service {service.id} '{service.name}' added for barber {barber.id}")
        return service

    def update_service_price(self, service_id: str, price: Decimal, user: CurrentUser) -> Service:
        """Reprice a service; appointments already booked keep their price"""
        service = self.storage.get_service_by_id(service_id)
        if not service:
            raise NotFoundError("Service", service_id)

        barber = self.get_own_profile(user)
        if service.barber_id != barber.id:
            raise PermissionDeniedError("You can only change your own services")

        self.storage.update_service_price(service_id, price)
        logger.info(f"💲 Service {service_id} repriced {service.price} -> {price}")
        service.price = price
        return service
