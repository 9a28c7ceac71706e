"""In-process storage backend"""

import logging
import threading
import uuid
from decimal import Decimal
from typing import Optional

from ..schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentDetails,
    AppointmentStatus,
    Barber,
    BarberAppointment,
    BarberCreate,
    CustomerAppointment,
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
    UserPublic,
)
from ..security_utils import hash_password
from ..shared.validators import utcnow
from .base import ACTIVE_STATUSES, Storage, require

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class MemStorage(Storage):
    """
    Dictionary-backed store. Iteration follows insertion order.

    Writes are serialized with a re-entrant lock because sync FastAPI
    endpoints run in a thread pool.
    """

    def __init__(self):
        self._users: dict[str, User] = {}
        self._salons: dict[str, Salon] = {}
        self._barbers: dict[str, Barber] = {}
        self._services: dict[str, Service] = {}
        self._appointments: dict[str, Appointment] = {}
        self._reviews: dict[str, Review] = {}
        self._lock = threading.RLock()

    def _setup(self) -> None:
        logger.info("📦 In-memory storage ready")

    def is_empty(self) -> bool:
        return not self._users

    def close(self) -> None:
        logger.info("📦 In-memory storage closed")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, data: UserCreate) -> User:
        user = User(
            id=_new_id(),
            email=data.email,
            password=hash_password(data.password),
            name=data.name,
            phone=data.phone or None,
            role=data.role,
            created_at=utcnow(),
        )
        with self._lock:
            self._users[user.id] = user
        return user.model_copy(deep=True)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = next((u for u in self._users.values() if u.email == email), None)
            return user.model_copy(deep=True) if user else None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def get_all_users(self) -> list[User]:
        with self._lock:
            return [u.model_copy(deep=True) for u in self._users.values()]

    # ------------------------------------------------------------------
    # Salons
    # ------------------------------------------------------------------

    def create_salon(self, data: SalonCreate, owner_id: str) -> Salon:
        salon = Salon(
            id=_new_id(),
            name=data.name,
            description=data.description or None,
            address=data.address,
            phone=data.phone or None,
            email=data.email or None,
            rating=Decimal("0"),
            review_count=0,
            is_active=True,
            is_approved=False,
            owner_id=owner_id,
            created_at=utcnow(),
        )
        with self._lock:
            self._salons[salon.id] = salon
        return salon.model_copy(deep=True)

    def get_salons(self) -> list[Salon]:
        with self._lock:
            return [
                s.model_copy(deep=True)
                for s in self._salons.values()
                if s.is_approved and s.is_active
            ]

    def get_salon_by_id(self, salon_id: str) -> Optional[Salon]:
        with self._lock:
            salon = self._salons.get(salon_id)
            return salon.model_copy(deep=True) if salon else None

    def get_pending_salons(self) -> list[Salon]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._salons.values() if not s.is_approved]

    def update_salon_approval(self, salon_id: str, is_approved: bool) -> None:
        with self._lock:
            salon = self._salons.get(salon_id)
            if salon:
                salon.is_approved = is_approved

    # ------------------------------------------------------------------
    # Barbers
    # ------------------------------------------------------------------

    def create_barber(self, data: BarberCreate, user_id: str, salon_id: str) -> Barber:
        barber = Barber(
            id=_new_id(),
            user_id=user_id,
            salon_id=salon_id,
            title=data.title,
            bio=data.bio or None,
            specialties=data.specialties or None,
            experience=data.experience,
            rating=Decimal("0"),
            review_count=0,
            is_available=True,
            working_hours=data.working_hours or None,
            created_at=utcnow(),
        )
        with self._lock:
            self._barbers[barber.id] = barber
        return barber.model_copy(deep=True)

    def get_barber_by_id(self, barber_id: str) -> Optional[Barber]:
        with self._lock:
            barber = self._barbers.get(barber_id)
            return barber.model_copy(deep=True) if barber else None

    def get_barbers_by_user_id(self, user_id: str) -> Optional[Barber]:
        with self._lock:
            barber = next((b for b in self._barbers.values() if b.user_id == user_id), None)
            return barber.model_copy(deep=True) if barber else None

    def get_barbers_by_salon(self, salon_id: str) -> list[Barber]:
        with self._lock:
            return [b.model_copy(deep=True) for b in self._barbers.values() if b.salon_id == salon_id]

    def update_barber_availability(self, barber_id: str, is_available: bool) -> None:
        with self._lock:
            barber = self._barbers.get(barber_id)
            if barber:
                barber.is_available = is_available

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def create_service(self, data: ServiceCreate, barber_id: str) -> Service:
        service = Service(
            id=_new_id(),
            barber_id=barber_id,
            name=data.name,
            description=data.description or None,
            duration=data.duration,
            price=data.price,
            is_active=True,
        )
        with self._lock:
            self._services[service.id] = service
        return service.model_copy(deep=True)

    def get_services_by_barber(self, barber_id: str) -> list[Service]:
        with self._lock:
            return [
                s.model_copy(deep=True)
                for s in self._services.values()
                if s.barber_id == barber_id and s.is_active
            ]

    def get_service_by_id(self, service_id: str) -> Optional[Service]:
        with self._lock:
            service = self._services.get(service_id)
            return service.model_copy(deep=True) if service else None

    def update_service_price(self, service_id: str, price: Decimal) -> None:
        with self._lock:
            service = self._services.get(service_id)
            if service:
                service.price = price

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------

    def create_appointment(
        self, data: AppointmentCreate, customer_id: str, total_price: Decimal
    ) -> Appointment:
        appointment = Appointment(
            id=_new_id(),
            customer_id=customer_id,
            barber_id=data.barber_id,
            service_id=data.service_id,
            appointment_date=data.appointment_date,
            status=AppointmentStatus.PENDING,
            notes=data.notes or None,
            total_price=total_price,
            created_at=utcnow(),
        )
        with self._lock:
            self._appointments[appointment.id] = appointment
        return appointment.model_copy(deep=True)

    def get_appointment_by_id(self, appointment_id: str) -> Optional[Appointment]:
        with self._lock:
            appointment = self._appointments.get(appointment_id)
            return appointment.model_copy(deep=True) if appointment else None

    def _join_barber(self, appointment: Appointment) -> Barber:
        return require(
            self._barbers.get(appointment.barber_id), "Barber", appointment.barber_id, f"appointment {appointment.id}"
        )

    def _join_service(self, appointment: Appointment) -> Service:
        return require(
            self._services.get(appointment.service_id),
            "Service",
            appointment.service_id,
            f"appointment {appointment.id}",
        )

    def _join_customer(self, customer_id: str, referenced_by: str) -> User:
        return require(self._users.get(customer_id), "User", customer_id, referenced_by)

    def _join_salon(self, barber: Barber) -> Salon:
        return require(self._salons.get(barber.salon_id), "Salon", barber.salon_id, f"barber {barber.id}")

    def get_appointments_by_customer(self, customer_id: str) -> list[CustomerAppointment]:
        with self._lock:
            results = []
            for appointment in self._appointments.values():
                if appointment.customer_id != customer_id:
                    continue
                barber = self._join_barber(appointment)
                results.append(
                    CustomerAppointment(
                        **appointment.model_dump(),
                        barber=barber.model_dump(),
                        service=self._join_service(appointment).model_dump(),
                        salon=self._join_salon(barber).model_dump(),
                    )
                )
            return results

    def get_appointments_by_barber(self, barber_id: str) -> list[BarberAppointment]:
        with self._lock:
            results = []
            for appointment in self._appointments.values():
                if appointment.barber_id != barber_id:
                    continue
                customer = self._join_customer(appointment.customer_id, f"appointment {appointment.id}")
                results.append(
                    BarberAppointment(
                        **appointment.model_dump(),
                        customer=UserPublic.model_validate(customer),
                        service=self._join_service(appointment).model_dump(),
                    )
                )
            return results

    def get_all_appointments(self) -> list[AppointmentDetails]:
        with self._lock:
            results = []
            for appointment in self._appointments.values():
                barber = self._join_barber(appointment)
                customer = self._join_customer(appointment.customer_id, f"appointment {appointment.id}")
                results.append(
                    AppointmentDetails(
                        **appointment.model_dump(),
                        customer=UserPublic.model_validate(customer),
                        barber=barber.model_dump(),
                        service=self._join_service(appointment).model_dump(),
                        salon=self._join_salon(barber).model_dump(),
                    )
                )
            return results

    def get_active_appointments_for_barber(self, barber_id: str) -> list[Appointment]:
        with self._lock:
            return [
                a.model_copy(deep=True)
                for a in self._appointments.values()
                if a.barber_id == barber_id and a.status in ACTIVE_STATUSES
            ]

    def update_appointment_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        with self._lock:
            appointment = self._appointments.get(appointment_id)
            if appointment:
                appointment.status = AppointmentStatus(status)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def create_review(self, data: ReviewCreate, customer_id: str) -> Review:
        review = Review(
            id=_new_id(),
            customer_id=customer_id,
            barber_id=data.barber_id,
            appointment_id=data.appointment_id,
            rating=data.rating,
            comment=data.comment or None,
            created_at=utcnow(),
        )
        with self._lock:
            self._reviews[review.id] = review
        return review.model_copy(deep=True)

    def get_reviews_by_barber(self, barber_id: str) -> list[ReviewWithCustomer]:
        with self._lock:
            results = []
            for review in self._reviews.values():
                if review.barber_id != barber_id:
                    continue
                customer = self._join_customer(review.customer_id, f"review {review.id}")
                results.append(
                    ReviewWithCustomer(**review.model_dump(), customer=UserPublic.model_validate(customer))
                )
            return results

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def get_stats(self) -> PlatformStats:
        with self._lock:
            salons = list(self._salons.values())
            return PlatformStats(
                total_users=len(self._users),
                total_salons=sum(1 for s in salons if s.is_approved),
                total_appointments=len(self._appointments),
                pending_salons=sum(1 for s in salons if not s.is_approved),
            )
