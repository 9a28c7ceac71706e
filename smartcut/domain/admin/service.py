"""Admin service - Platform statistics, moderation and oversight"""

import logging

from ...exceptions import NotFoundError
from ...schemas import AppointmentDetails, PlatformStats, Salon, User
from ...storage import Storage

logger = logging.getLogger(__name__)


class AdminService:
    """Service layer for admin operations"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def get_stats(self) -> PlatformStats:
        return self.storage.get_stats()

    def list_appointments(self) -> list[AppointmentDetails]:
        return self.storage.get_all_appointments()

    def list_users(self) -> list[User]:
        return self.storage.get_all_users()

    def list_pending_salons(self) -> list[Salon]:
        return self.storage.get_pending_salons()

    def set_salon_approval(self, salon_id: str, is_approved: bool) -> Salon:
        salon = self.storage.get_salon_by_id(salon_id)
        if not salon:
            raise NotFoundError("Salon", salon_id)

        self.storage.update_salon_approval(salon_id, is_approved)
        logger.info(f"🏪 Salon {salon_id} {'approved' if is_approved else 'unapproved'}")
        salon.is_approved = is_approved
        return salon
