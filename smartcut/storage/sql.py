"""SQLAlchemy storage backend"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..database import Base, create_db_engine, create_session_factory
from ..exceptions import ValidationError
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


class SqlStorage(Storage):
    """
    Relational store. Each operation runs in its own session and commits
    before returning, so every call completes as one unit.
    """

    def __init__(self, database_url: str):
        self.engine = create_db_engine(database_url)
        self.SessionLocal = create_session_factory(self.engine)
        self._last_stamp = datetime.min
        self._stamp_lock = threading.Lock()

    @contextmanager
    def _session(self):
        """Provide a transactional scope around one store operation."""
        db: Session = self.SessionLocal()
        try:
            yield db
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"⚠️ Integrity error: {e.orig}")
            raise ValidationError("Record conflicts with existing data") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _setup(self) -> None:
        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.info("✅ Database tables created / verified")

    def is_empty(self) -> bool:
        with self._session() as db:
            return db.query(func.count(models.User.id)).scalar() == 0

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")

    def _stamp(self) -> datetime:
        """Creation time, strictly increasing within this store so listings keep insertion order"""
        with self._stamp_lock:
            now = max(utcnow(), self._last_stamp + timedelta(microseconds=1))
            self._last_stamp = now
            return now

    def _add(self, db: Session, row):
        db.add(row)
        db.flush()
        db.refresh(row)
        return row

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, data: UserCreate) -> User:
        with self._session() as db:
            row = self._add(
                db,
                models.User(
                    email=data.email,
                    password=hash_password(data.password),
                    name=data.name,
                    phone=data.phone or None,
                    role=data.role.value,
                    created_at=self._stamp(),
                ),
            )
            return User.model_validate(row)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            row = db.query(models.User).filter(models.User.email == email).first()
            return User.model_validate(row) if row else None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._session() as db:
            row = db.get(models.User, user_id)
            return User.model_validate(row) if row else None

    def get_all_users(self) -> list[User]:
        with self._session() as db:
            rows = db.query(models.User).order_by(models.User.created_at).all()
            return [User.model_validate(r) for r in rows]

    # ------------------------------------------------------------------
    # Salons
    # ------------------------------------------------------------------

    def create_salon(self, data: SalonCreate, owner_id: str) -> Salon:
        with self._session() as db:
            row = self._add(
                db,
                models.Salon(
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
                    created_at=self._stamp(),
                ),
            )
            return Salon.model_validate(row)

    def get_salons(self) -> list[Salon]:
        with self._session() as db:
            rows = (
                db.query(models.Salon)
                .filter(models.Salon.is_approved.is_(True), models.Salon.is_active.is_(True))
                .order_by(models.Salon.created_at)
                .all()
            )
            return [Salon.model_validate(r) for r in rows]

    def get_salon_by_id(self, salon_id: str) -> Optional[Salon]:
        with self._session() as db:
            row = db.get(models.Salon, salon_id)
            return Salon.model_validate(row) if row else None

    def get_pending_salons(self) -> list[Salon]:
        with self._session() as db:
            rows = (
                db.query(models.Salon)
                .filter(models.Salon.is_approved.is_(False))
                .order_by(models.Salon.created_at)
                .all()
            )
            return [Salon.model_validate(r) for r in rows]

    def update_salon_approval(self, salon_id: str, is_approved: bool) -> None:
        with self._session() as db:
            row = db.get(models.Salon, salon_id)
            if row:
                row.is_approved = is_approved

    # ------------------------------------------------------------------
    # Barbers
    # ------------------------------------------------------------------

    def create_barber(self, data: BarberCreate, user_id: str, salon_id: str) -> Barber:
        with self._session() as db:
            row = self._add(
                db,
                models.Barber(
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
                    created_at=self._stamp(),
                ),
            )
            return Barber.model_validate(row)

    def get_barber_by_id(self, barber_id: str) -> Optional[Barber]:
        with self._session() as db:
            row = db.get(models.Barber, barber_id)
            return Barber.model_validate(row) if row else None

    def get_barbers_by_user_id(self, user_id: str) -> Optional[Barber]:
        with self._session() as db:
            row = (
                db.query(models.Barber)
                .filter(models.Barber.user_id == user_id)
                .order_by(models.Barber.created_at)
                .first()
            )
            return Barber.model_validate(row) if row else None

    def get_barbers_by_salon(self, salon_id: str) -> list[Barber]:
        with self._session() as db:
            rows = (
                db.query(models.Barber)
                .filter(models.Barber.salon_id == salon_id)
                .order_by(models.Barber.created_at)
                .all()
            )
            return [Barber.model_validate(r) for r in rows]

    def update_barber_availability(self, barber_id: str, is_available: bool) -> None:
        with self._session() as db:
            row = db.get(models.Barber, barber_id)
            if row:
                row.is_available = is_available

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def create_service(self, data: ServiceCreate, barber_id: str) -> Service:
        with self._session() as db:
            row = self._add(
                db,
                models.Service(
                    barber_id=barber_id,
                    name=data.name,
                    description=data.description or None,
                    duration=data.duration,
                    price=data.price,
                    is_active=True,
                    created_at=self._stamp(),
                ),
            )
            return Service.model_validate(row)

    def get_services_by_barber(self, barber_id: str) -> list[Service]:
        with self._session() as db:
            rows = (
                db.query(models.Service)
                .filter(models.Service.barber_id == barber_id, models.Service.is_active.is_(True))
                .order_by(models.Service.created_at)
                .all()
            )
            return [Service.model_validate(r) for r in rows]

    def get_service_by_id(self, service_id: str) -> Optional[Service]:
        with self._session() as db:
            row = db.get(models.Service, service_id)
            return Service.model_validate(row) if row else None

    def update_service_price(self, service_id: str, price: Decimal) -> None:
        with self._session() as db:
            row = db.get(models.Service, service_id)
            if row:
                row.price = price

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------

    def create_appointment(
        self, data: AppointmentCreate, customer_id: str, total_price: Decimal
    ) -> Appointment:
        with self._session() as db:
            row = self._add(
                db,
                models.Appointment(
                    customer_id=customer_id,
                    barber_id=data.barber_id,
                    service_id=data.service_id,
                    appointment_date=data.appointment_date,
                    status=AppointmentStatus.PENDING.value,
                    notes=data.notes or None,
                    total_price=total_price,
                    created_at=self._stamp(),
                ),
            )
            return Appointment.model_validate(row)

    def get_appointment_by_id(self, appointment_id: str) -> Optional[Appointment]:
        with self._session() as db:
            row = db.get(models.Appointment, appointment_id)
            return Appointment.model_validate(row) if row else None

    @staticmethod
    def _joined_appointments(db: Session):
        return db.query(models.Appointment).options(
            joinedload(models.Appointment.customer),
            joinedload(models.Appointment.service),
            joinedload(models.Appointment.barber).joinedload(models.Barber.salon),
        )

    @staticmethod
    def _related(row: models.Appointment, *names: str) -> dict:
        """Resolve the named join targets of an appointment row, failing on dangling references"""
        ref = f"appointment {row.id}"
        related = {}
        if "customer" in names:
            related["customer"] = UserPublic.model_validate(require(row.customer, "User", row.customer_id, ref))
        barber = None
        if "barber" in names or "salon" in names:
            barber = require(row.barber, "Barber", row.barber_id, ref)
        if "barber" in names:
            related["barber"] = Barber.model_validate(barber)
        if "service" in names:
            related["service"] = Service.model_validate(require(row.service, "Service", row.service_id, ref))
        if "salon" in names:
            related["salon"] = Salon.model_validate(
                require(barber.salon, "Salon", barber.salon_id, f"barber {barber.id}")
            )
        return related

    def get_appointments_by_customer(self, customer_id: str) -> list[CustomerAppointment]:
        with self._session() as db:
            rows = (
                self._joined_appointments(db)
                .filter(models.Appointment.customer_id == customer_id)
                .order_by(models.Appointment.created_at)
                .all()
            )
            return [
                CustomerAppointment(
                    **Appointment.model_validate(row).model_dump(),
                    **self._related(row, "barber", "service", "salon"),
                )
                for row in rows
            ]

    def get_appointments_by_barber(self, barber_id: str) -> list[BarberAppointment]:
        with self._session() as db:
            rows = (
                self._joined_appointments(db)
                .filter(models.Appointment.barber_id == barber_id)
                .order_by(models.Appointment.created_at)
                .all()
            )
            return [
                BarberAppointment(
                    **Appointment.model_validate(row).model_dump(),
                    **self._related(row, "customer", "service"),
                )
                for row in rows
            ]

    def get_all_appointments(self) -> list[AppointmentDetails]:
        with self._session() as db:
            rows = self._joined_appointments(db).order_by(models.Appointment.created_at).all()
            return [
                AppointmentDetails(
                    **Appointment.model_validate(row).model_dump(),
                    **self._related(row, "customer", "barber", "service", "salon"),
                )
                for row in rows
            ]

    def get_active_appointments_for_barber(self, barber_id: str) -> list[Appointment]:
        with self._session() as db:
            rows = (
                db.query(models.Appointment)
                .filter(
                    models.Appointment.barber_id == barber_id,
                    models.Appointment.status.in_([s.value for s in ACTIVE_STATUSES]),
                )
                .order_by(models.Appointment.appointment_date)
                .all()
            )
            return [Appointment.model_validate(r) for r in rows]

    def update_appointment_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        with self._session() as db:
            row = db.get(models.Appointment, appointment_id)
            if row:
                row.status = AppointmentStatus(status).value

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def create_review(self, data: ReviewCreate, customer_id: str) -> Review:
        with self._session() as db:
            row = self._add(
                db,
                models.Review(
                    customer_id=customer_id,
                    barber_id=data.barber_id,
                    appointment_id=data.appointment_id,
                    rating=data.rating,
                    comment=data.comment or None,
                    created_at=self._stamp(),
                ),
            )
            return Review.model_validate(row)

    def get_reviews_by_barber(self, barber_id: str) -> list[ReviewWithCustomer]:
        with self._session() as db:
            rows = (
                db.query(models.Review)
                .options(joinedload(models.Review.customer))
                .filter(models.Review.barber_id == barber_id)
                .order_by(models.Review.created_at)
                .all()
            )
            results = []
            for r in rows:
                customer = require(r.customer, "User", r.customer_id, f"review {r.id}")
                results.append(
                    ReviewWithCustomer(
                        **Review.model_validate(r).model_dump(),
                        customer=UserPublic.model_validate(customer),
                    )
                )
            return results

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def get_stats(self) -> PlatformStats:
        with self._session() as db:
            approved = (
                db.query(func.count(models.Salon.id)).filter(models.Salon.is_approved.is_(True)).scalar()
            )
            pending = (
                db.query(func.count(models.Salon.id)).filter(models.Salon.is_approved.is_(False)).scalar()
            )
            return PlatformStats(
                total_users=db.query(func.count(models.User.id)).scalar(),
                total_salons=approved,
                total_appointments=db.query(func.count(models.Appointment.id)).scalar(),
                pending_salons=pending,
            )
