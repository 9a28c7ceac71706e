"""Appointment service - Business logic for booking and status changes"""

import logging
from typing import Union

from ...auth import CurrentUser
from ...exceptions import (
    BookingConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ...schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    BarberAppointment,
    CustomerAppointment,
    UserRole,
)
from ...storage import Storage
from .lifecycle import check_transition, slot_end, slots_overlap

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(
        self,
        storage: Storage,
        strict_status_transitions: bool = True,
        prevent_double_booking: bool = True,
    ):
        self.storage = storage
        self.strict_status_transitions = strict_status_transitions
        self.prevent_double_booking = prevent_double_booking

    def book(self, data: AppointmentCreate, customer: CurrentUser) -> Appointment:
        """Book a service; the price is captured from the service at this moment"""
        service = self.storage.get_service_by_id(data.service_id)
        if not service:
            raise NotFoundError("Service", data.service_id)
        if service.barber_id != data.barber_id:
            raise ValidationError("Service is not offered by this barber")

        barber = self.storage.get_barber_by_id(data.barber_id)
        if not barber:
            raise NotFoundError("Barber", data.barber_id)
        if not barber.is_available:
            logger.warning(f"⚠️ Booking rejected: barber {barber.id} is not taking bookings")
            raise ValidationError("Barber is not taking bookings")

        if self.prevent_double_booking:
            self._ensure_slot_free(data, service.duration)

        appointment = self.storage.create_appointment(
            data, customer_id=customer.id, total_price=service.price
        )
        logger.info(
            f"📅 Appointment {appointment.id} booked by {customer.id} with barber {data.barber_id} "
            f"at {data.appointment_date.isoformat()} ({service.price})"
        )
        return appointment

    def _ensure_slot_free(self, data: AppointmentCreate, duration: int) -> None:
        for existing in self.storage.get_active_appointments_for_barber(data.barber_id):
            existing_service = self.storage.get_service_by_id(existing.service_id)
            # A booking whose service vanished still blocks its start minute
            existing_duration = existing_service.duration if existing_service else 1
            if slots_overlap(
                data.appointment_date, duration, existing.appointment_date, existing_duration
            ):
                logger.warning(
                    f"⚠️ Booking rejected: barber {data.barber_id} busy until "
                    f"{slot_end(existing.appointment_date, existing_duration).isoformat()}"
                )
                raise BookingConflictError("Barber already has an appointment at that time")

    def get_my_appointments(
        self, user: CurrentUser
    ) -> Union[list[CustomerAppointment], list[BarberAppointment]]:
        """'My appointments' means something different for each role"""
        if user.role == UserRole.CUSTOMER:
            return self.storage.get_appointments_by_customer(user.id)
        elif user.role == UserRole.BARBER:
            barber = self.storage.get_barbers_by_user_id(user.id)
            if not barber:
                raise NotFoundError("Barber profile", user.id)
            return self.storage.get_appointments_by_barber(barber.id)
        elif user.role == UserRole.ADMIN:
            raise PermissionDeniedError("Invalid role for this endpoint")
        raise PermissionDeniedError(f"Unsupported role {user.role}")

    def update_status(
        self, appointment_id: str, status: AppointmentStatus, user: CurrentUser
    ) -> Appointment:
        appointment = self.storage.get_appointment_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment", appointment_id)

        self._ensure_participant(appointment, user)

        if self.strict_status_transitions:
            check_transition(appointment.status, status)

        self.storage.update_appointment_status(appointment_id, status)
        logger.info(
            f"🔄 Appointment {appointment_id}: {appointment.status.value} -> {status.value} (by {user.id})"
        )
        appointment.status = status
        return appointment

    def _ensure_participant(self, appointment: Appointment, user: CurrentUser) -> None:
        if user.role == UserRole.ADMIN:
            return
        if user.role == UserRole.CUSTOMER and appointment.customer_id == user.id:
            return
        if user.role == UserRole.BARBER:
            barber = self.storage.get_barbers_by_user_id(user.id)
            if barber and barber.id == appointment.barber_id:
                return
        raise PermissionDeniedError("You can only update your own appointments")
