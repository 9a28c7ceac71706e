import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a random UUID4 primary key"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never plaintext
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(String(20), nullable=False, default="customer")  # customer, barber, admin
    profile_image = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    salons = relationship("Salon", back_populates="owner")
    barber_profile = relationship("Barber", back_populates="user", uselist=False)


class Salon(Base):
    __tablename__ = "salons"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    images = Column(JSON, nullable=True)  # list of image URLs
    rating = Column(Numeric(3, 2), default=0)
    review_count = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="salons")
    barbers = relationship("Barber", back_populates="salon")


class Barber(Base):
    __tablename__ = "barbers"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    salon_id = Column(String(36), ForeignKey("salons.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    specialties = Column(JSON, nullable=True)  # e.g., ["Fade Cuts", "Beard Styling"]
    experience = Column(Integer, nullable=True)  # years
    portfolio = Column(JSON, nullable=True)
    rating = Column(Numeric(3, 2), default=0)
    review_count = Column(Integer, default=0)
    is_available = Column(Boolean, default=True, nullable=False)
    working_hours = Column(JSON, nullable=True)  # e.g., {"monday": {"start": "09:00", "end": "18:00"}}
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="barber_profile")
    salon = relationship("Salon", back_populates="barbers")
    services = relationship("Service", back_populates="barber")


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    barber_id = Column(String(36), ForeignKey("barbers.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    barber = relationship("Barber", back_populates="services")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    barber_id = Column(String(36), ForeignKey("barbers.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    appointment_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, completed, cancelled
    notes = Column(Text, nullable=True)
    total_price = Column(Numeric(10, 2), nullable=False)  # snapshot of the service price
    created_at = Column(DateTime, server_default=func.now())

    customer = relationship("User")
    barber = relationship("Barber")
    service = relationship("Service")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    barber_id = Column(String(36), ForeignKey("barbers.id"), nullable=False, index=True)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    customer = relationship("User")
