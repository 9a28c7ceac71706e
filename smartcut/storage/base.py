"""Storage contract shared by every backend"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, TypeVar

from ..exceptions import InconsistentDataError
from ..schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentDetails,
    AppointmentStatus,
    Barber,
    BarberAppointment,
    BarberCreate,
    CustomerAppointment,
    LoginCredentials,
    PlatformStats,
    Review,
    ReviewCreate,
    ReviewWithCustomer,
    Salon,
    SalonCreate,
    Service,
    ServiceCreate,
    User,
    UserCreate,
)
from ..security_utils import verify_password

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Appointments that still hold the barber's time
ACTIVE_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


def require(record: Optional[T], entity: str, entity_id: str, referenced_by: str) -> T:
    """Return a join target, or fail loudly when the reference is dangling"""
    if record is None:
        logger.error(f"❌ Dangling reference: {entity} {entity_id} (from {referenced_by})")
        raise InconsistentDataError(entity, entity_id, referenced_by)
    return record


class Storage(ABC):
    """
    Keyed storage for users, salons, barbers, services, appointments and reviews.

    Read operations return ``None`` or an empty list when nothing matches.
    Joined reads raise ``InconsistentDataError`` if a referenced record is gone.
    Records returned to callers are detached copies.
    """

    def init(self, seed: bool = False) -> None:
        """Prepare the backend and optionally load the demo fixtures"""
        self._setup()
        if seed and self.is_empty():
            from .seed import seed_storage

            seed_storage(self)

    def close(self) -> None:
        """Release backend resources"""

    @abstractmethod
    def _setup(self) -> None: ...

    @abstractmethod
    def is_empty(self) -> bool: ...

    # User operations
    @abstractmethod
    def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]: ...

    def validate_user(self, credentials: LoginCredentials) -> Optional[User]:
        """Return the user when the email exists and the password matches, else None"""
        user = self.get_user_by_email(credentials.email)
        if user is None:
            return None
        return user if verify_password(credentials.password, user.password) else None

    @abstractmethod
    def get_all_users(self) -> list[User]: ...

    # Salon operations
    @abstractmethod
    def create_salon(self, data: SalonCreate, owner_id: str) -> Salon: ...

    @abstractmethod
    def get_salons(self) -> list[Salon]: ...

    @abstractmethod
    def get_salon_by_id(self, salon_id: str) -> Optional[Salon]: ...

    @abstractmethod
    def get_pending_salons(self) -> list[Salon]: ...

    @abstractmethod
    def update_salon_approval(self, salon_id: str, is_approved: bool) -> None: ...

    # Barber operations
    @abstractmethod
    def create_barber(self, data: BarberCreate, user_id: str, salon_id: str) -> Barber: ...

    @abstractmethod
    def get_barber_by_id(self, barber_id: str) -> Optional[Barber]: ...

    @abstractmethod
    def get_barbers_by_user_id(self, user_id: str) -> Optional[Barber]: ...

    @abstractmethod
    def get_barbers_by_salon(self, salon_id: str) -> list[Barber]: ...

    @abstractmethod
    def update_barber_availability(self, barber_id: str, is_available: bool) -> None: ...

    # Service operations
    @abstractmethod
    def create_service(self, data: ServiceCreate, barber_id: str) -> Service: ...

    @abstractmethod
    def get_services_by_barber(self, barber_id: str) -> list[Service]: ...

    @abstractmethod
    def get_service_by_id(self, service_id: str) -> Optional[Service]: ...

    @abstractmethod
    def update_service_price(self, service_id: str, price: Decimal) -> None: ...

    # Appointment operations
    @abstractmethod
    def create_appointment(
        self, data: AppointmentCreate, customer_id: str, total_price: Decimal
    ) -> Appointment: ...

    @abstractmethod
    def get_appointment_by_id(self, appointment_id: str) -> Optional[Appointment]: ...

    @abstractmethod
    def get_appointments_by_customer(self, customer_id: str) -> list[CustomerAppointment]: ...

    @abstractmethod
    def get_appointments_by_barber(self, barber_id: str) -> list[BarberAppointment]: ...

    @abstractmethod
    def get_all_appointments(self) -> list[AppointmentDetails]: ...

    @abstractmethod
    def get_active_appointments_for_barber(self, barber_id: str) -> list[Appointment]: ...

    @abstractmethod
    def update_appointment_status(self, appointment_id: str, status: AppointmentStatus) -> None: ...

    # Review operations
    @abstractmethod
    def create_review(self, data: ReviewCreate, customer_id: str) -> Review: ...

    @abstractmethod
    def get_reviews_by_barber(self, barber_id: str) -> list[ReviewWithCustomer]: ...

    # Admin operations
    @abstractmethod
    def get_stats(self) -> PlatformStats: ...
