"""Demo fixtures loaded into an empty store"""

import logging
from decimal import Decimal

from ..schemas import BarberCreate, SalonCreate, ServiceCreate, UserCreate, UserRole

logger = logging.getLogger(__name__)

WEEKDAY_HOURS = {"start": "09:00", "end": "18:00"}


def seed_storage(storage) -> None:
    """Create the demo admin, barber, customer, salon and services"""
    logger.info("🌱 Seeding demo data...")

    storage.create_user(
        UserCreate(
            email="admin@smartcut.com",
            password="admin123",
            name="Admin User",
            role=UserRole.ADMIN,
        )
    )
    barber_user = storage.create_user(
        UserCreate(
            email="marcus@smartcut.com",
            password="barber123",
            name="Marcus Johnson",
            phone="(555) 123-4567",
            role=UserRole.BARBER,
        )
    )
    storage.create_user(
        UserCreate(
            email="john@example.com",
            password="customer123",
            name="John Smith",
            phone="(555) 987-6543",
            role=UserRole.CUSTOMER,
        )
    )

    salon = storage.create_salon(
        SalonCreate(
            name="Premium Cuts",
            description="A modern barbershop specializing in classic and contemporary cuts",
            address="123 Main Street, Downtown",
            phone="(555) 555-0123",
            email="info@premiumcuts.com",
        ),
        owner_id=barber_user.id,
    )
    storage.update_salon_approval(salon.id, True)

    barber = storage.create_barber(
        BarberCreate(
            title="Master Barber",
            bio=(
                "Passionate barber specializing in modern cuts, beard grooming, "
                "and traditional hot towel shaves."
            ),
            specialties=["Fade Cuts", "Beard Styling", "Hot Towel Shave", "Hair Washing"],
            experience=8,
            working_hours={
                "monday": WEEKDAY_HOURS,
                "tuesday": WEEKDAY_HOURS,
                "wednesday": WEEKDAY_HOURS,
                "thursday": WEEKDAY_HOURS,
                "friday": WEEKDAY_HOURS,
                "saturday": {"start": "10:00", "end": "16:00"},
            },
        ),
        user_id=barber_user.id,
        salon_id=salon.id,
    )

    storage.create_service(
        ServiceCreate(
            name="Classic Haircut",
            description="Professional cut with styling",
            duration=45,
            price=Decimal("35.00"),
        ),
        barber_id=barber.id,
    )
    storage.create_service(
        ServiceCreate(
            name="Fade + Beard Trim",
            description="Premium fade with beard styling",
            duration=60,
            price=Decimal("55.00"),
        ),
        barber_id=barber.id,
    )

    logger.info("✅ Demo data seeded (3 users, 1 salon, 1 barber, 2 services)")
