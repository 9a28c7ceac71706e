"""Appointment status lifecycle and time-slot overlap rules"""

from datetime import datetime, timedelta

from ...exceptions import InvalidStatusTransitionError
from ...schemas import AppointmentStatus

# pending -> confirmed/cancelled, confirmed -> completed/cancelled; the rest is terminal
ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.CONFIRMED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def check_transition(current: AppointmentStatus, new: AppointmentStatus) -> None:
    """Raise InvalidStatusTransitionError unless current -> new is a legal move"""
    if not can_transition(current, new):
        raise InvalidStatusTransitionError(current.value, new.value)


def is_terminal(status: AppointmentStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def slot_end(start: datetime, duration_minutes: int) -> datetime:
    return start + timedelta(minutes=duration_minutes)


def slots_overlap(
    start_a: datetime, duration_a: int, start_b: datetime, duration_b: int
) -> bool:
    """Half-open interval overlap: back-to-back slots do not collide"""
    return start_a < slot_end(start_b, duration_b) and start_b < slot_end(start_a, duration_a)
