"""Appointment router - FastAPI endpoints for bookings"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, Request

from ...auth import CurrentUser, get_current_user
from ...schemas import (
    Appointment,
    AppointmentCreate,
    BarberAppointment,
    CustomerAppointment,
    MessageResponse,
)
from ...storage import Storage, get_storage
from .schemas import AppointmentStatusUpdate
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(
    request: Request, storage: Storage = Depends(get_storage)
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(
        storage,
        strict_status_transitions=request.app.state.strict_status_transitions,
        prevent_double_booking=request.app.state.prevent_double_booking,
    )


@router.post("", response_model=Appointment)
def create_appointment(
    data: AppointmentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment; the status always starts as pending"""
    return service.book(data, current_user)


@router.get("/my", response_model=Union[list[CustomerAppointment], list[BarberAppointment]])
def get_my_appointments(
    current_user: CurrentUser = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Customers get their bookings with barber, service and salon; barbers get their schedule"""
    return service.get_my_appointments(current_user)


@router.patch("/{appointment_id}/status", response_model=MessageResponse)
def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.update_status(appointment_id, data.status, current_user)
    return MessageResponse(message="Appointment status updated")
