"""Appointment domain schemas - request bodies"""

from ...schemas import AppointmentStatus, CamelModel


class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus
