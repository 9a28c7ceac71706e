"""Entity records and insert payloads shared by the store, services and routers.

Attributes are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .shared.validators import to_naive_utc, validate_phone, validate_working_hours


class UserRole(str, Enum):
    CUSTOMER = "customer"
    BARBER = "barber"
    ADMIN = "admin"


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# STORED RECORDS
# ============================================================================


class User(CamelModel):
    id: str
    email: str
    password: str = Field(repr=False)  # bcrypt hash
    name: str
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None


class UserPublic(CamelModel):
    """A user without credentials, safe to return over the wire"""

    id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None


class Salon(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    images: Optional[list[str]] = None
    rating: Decimal = Decimal("0")
    review_count: int = 0
    is_active: bool = True
    is_approved: bool = False
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None


class Barber(CamelModel):
    id: str
    user_id: str
    salon_id: str
    title: str
    bio: Optional[str] = None
    specialties: Optional[list[str]] = None
    experience: Optional[int] = None
    portfolio: Optional[list[str]] = None
    rating: Decimal = Decimal("0")
    review_count: int = 0
    is_available: bool = True
    working_hours: Optional[dict[str, dict[str, str]]] = None
    created_at: Optional[datetime] = None


class Service(CamelModel):
    id: str
    barber_id: str
    name: str
    description: Optional[str] = None
    duration: int
    price: Decimal
    is_active: bool = True


class Appointment(CamelModel):
    id: str
    customer_id: str
    barber_id: str
    service_id: str
    appointment_date: datetime
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None
    total_price: Decimal
    created_at: Optional[datetime] = None


class Review(CamelModel):
    id: str
    customer_id: str
    barber_id: str
    appointment_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


# Joined views


class CustomerAppointment(Appointment):
    """An appointment as its customer sees it"""

    barber: Barber
    service: Service
    salon: Salon


class BarberAppointment(Appointment):
    """An appointment as its barber sees it"""

    customer: UserPublic
    service: Service


class AppointmentDetails(Appointment):
    """An appointment with every related record, for admins"""

    customer: UserPublic
    barber: Barber
    service: Service
    salon: Salon


class ReviewWithCustomer(Review):
    customer: UserPublic


class PlatformStats(CamelModel):
    total_users: int
    total_salons: int
    total_appointments: int
    pending_salons: int


# ============================================================================
# INSERT PAYLOADS
# ============================================================================


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    name: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


class LoginCredentials(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)


class SalonCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    address: str = Field(min_length=1, max_length=500)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


class BarberCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    bio: Optional[str] = None
    specialties: Optional[list[str]] = None
    experience: Optional[int] = Field(default=None, ge=0)
    working_hours: Optional[dict[str, dict[str, str]]] = None

    @field_validator("working_hours")
    @classmethod
    def check_working_hours(cls, v):
        return validate_working_hours(v)


class ServiceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    duration: int = Field(gt=0)  # minutes
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class AppointmentCreate(CamelModel):
    barber_id: str
    service_id: str
    appointment_date: datetime
    notes: Optional[str] = None

    @field_validator("appointment_date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_utc(v)


class ReviewCreate(CamelModel):
    barber_id: str
    appointment_id: str
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


# ============================================================================
# RESPONSES
# ============================================================================


class MessageResponse(BaseModel):
    message: str
