"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Optional

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a phone number while keeping the caller's formatting.

    Accepts anything made of digits, spaces, dashes, dots, parentheses and a
    leading plus, with 7 to 15 digits in total (E.164 upper bound).

    Raises:
        ValueError: If the phone number is invalid
    """
    if not phone:
        return None

    phone = phone.strip()
    if not re.fullmatch(r"\+?[\d\s().-]+", phone):
        raise ValueError("Phone number contains invalid characters")

    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return phone


def validate_hhmm(value: str) -> str:
    """Validate a 24h HH:MM time string"""
    if not _TIME_PATTERN.match(value):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return value


def validate_working_hours(hours: Optional[dict]) -> Optional[dict]:
    """
    Validate a weekly schedule of the form
    {"monday": {"start": "09:00", "end": "18:00"}, ...}.

    Day names are normalized to lowercase. Each day must end after it starts.
    """
    if hours is None:
        return None

    normalized = {}
    for day, window in hours.items():
        key = day.strip().lower()
        if key not in WEEKDAYS:
            raise ValueError(f"Unknown weekday '{day}'")
        if not window.get("start") or not window.get("end"):
            raise ValueError(f"Working hours for {key} need both start and end")
        start = validate_hhmm(window["start"])
        end = validate_hhmm(window["end"])
        # zero-padded HH:MM strings compare chronologically
        if end <= start:
            raise ValueError(f"Working hours for {key} must end after they start")
        normalized[key] = {"start": start, "end": end}
    return normalized


def to_naive_utc(value: datetime) -> datetime:
    """Drop timezone info after converting to UTC; naive values are assumed UTC already"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
