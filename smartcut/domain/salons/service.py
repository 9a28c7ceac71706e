"""Salon service - Business logic for salon listing and registration"""

import logging

from ...auth import CurrentUser
from ...exceptions import NotFoundError
from ...schemas import Salon, SalonCreate
from ...storage import Storage
from .schemas import SalonDetailResponse

logger = logging.getLogger(__name__)


class SalonService:
    """Service layer for salon business logic"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def list_public(self) -> list[Salon]:
        """Approved and active salons only"""
        return self.storage.get_salons()

    def get_detail(self, salon_id: str) -> SalonDetailResponse:
        salon = self.storage.get_salon_by_id(salon_id)
        if not salon:
            raise NotFoundError("Salon", salon_id)
        return SalonDetailResponse(salon=salon, barbers=self.storage.get_barbers_by_salon(salon.id))

    def create(self, data: SalonCreate, owner: CurrentUser) -> Salon:
        """New salons wait for admin approval before they are listed"""
        salon = self.storage.create_salon(data, owner_id=owner.id)
        logger.info(f"🏪 Salon {salon.id} '{salon.name}' submitted by {owner.id}, awaiting approval")
        return salon
