"""Review service - Business logic for customer reviews"""

import logging

from ...auth import CurrentUser
from ...exceptions import NotFoundError, PermissionDeniedError, ValidationError
from ...schemas import Review, ReviewCreate, ReviewWithCustomer
from ...storage import Storage

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for review business logic"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def create(self, data: ReviewCreate, customer: CurrentUser) -> Review:
        """Review a barber for one of the caller's own appointments"""
        appointment = self.storage.get_appointment_by_id(data.appointment_id)
        if not appointment:
            raise NotFoundError("Appointment", data.appointment_id)
        if appointment.customer_id != customer.id:
            raise PermissionDeniedError("You can only review your own appointments")
        if appointment.barber_id != data.barber_id:
            raise ValidationError("Appointment was not with this barber")

        review = self.storage.create_review(data, customer_id=customer.id)
        logger.info(f"⭐ Review {review.id} ({review.rating}/5) for barber {data.barber_id}")
        return review

    def list_for_barber(self, barber_id: str) -> list[ReviewWithCustomer]:
        if not self.storage.get_barber_by_id(barber_id):
            raise NotFoundError("Barber", barber_id)
        return self.storage.get_reviews_by_barber(barber_id)
