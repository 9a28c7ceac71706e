from datetime import datetime

import pytest

from smartcut.domain.appointments.lifecycle import (
    can_transition,
    check_transition,
    is_terminal,
    slot_end,
    slots_overlap,
)
from smartcut.exceptions import InvalidStatusTransitionError
from smartcut.schemas import AppointmentStatus

PENDING = AppointmentStatus.PENDING
CONFIRMED = AppointmentStatus.CONFIRMED
COMPLETED = AppointmentStatus.COMPLETED
CANCELLED = AppointmentStatus.CANCELLED


@pytest.mark.parametrize(
    "current,new",
    [
        (PENDING, CONFIRMED),
        (PENDING, CANCELLED),
        (CONFIRMED, COMPLETED),
        (CONFIRMED, CANCELLED),
    ],
)
def test_allowed_transitions(current, new):
    assert can_transition(current, new)
    check_transition(current, new)


@pytest.mark.parametrize(
    "current,new",
    [
        (PENDING, COMPLETED),
        (PENDING, PENDING),
        (CONFIRMED, PENDING),
        (COMPLETED, PENDING),
        (COMPLETED, CANCELLED),
        (CANCELLED, CONFIRMED),
    ],
)
def test_rejected_transitions(current, new):
    assert not can_transition(current, new)
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        check_transition(current, new)
    assert exc_info.value.current == current.value
    assert exc_info.value.requested == new.value
    assert exc_info.value.status_code == 409


def test_terminal_states():
    assert is_terminal(COMPLETED)
    assert is_terminal(CANCELLED)
    assert not is_terminal(PENDING)
    assert not is_terminal(CONFIRMED)


def test_slot_end():
    assert slot_end(datetime(2026, 11, 2, 10, 0), 45) == datetime(2026, 11, 2, 10, 45)


def test_overlapping_slots():
    ten = datetime(2026, 11, 2, 10, 0)

    assert slots_overlap(ten, 45, datetime(2026, 11, 2, 10, 30), 60)
    assert slots_overlap(datetime(2026, 11, 2, 9, 30), 60, ten, 45)
    assert slots_overlap(ten, 45, ten, 45)
    # one slot inside the other
    assert slots_overlap(ten, 120, datetime(2026, 11, 2, 10, 30), 15)


def test_back_to_back_slots_do_not_overlap():
    ten = datetime(2026, 11, 2, 10, 0)

    assert not slots_overlap(ten, 45, datetime(2026, 11, 2, 10, 45), 60)
    assert not slots_overlap(datetime(2026, 11, 2, 9, 15), 45, ten, 45)
