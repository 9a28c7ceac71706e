"""Store contract, run against both the in-memory and the SQL backend"""

from datetime import datetime
from decimal import Decimal

import pytest

from smartcut.exceptions import InconsistentDataError
from smartcut.schemas import (
    AppointmentCreate,
    AppointmentStatus,
    BarberCreate,
    LoginCredentials,
    ReviewCreate,
    SalonCreate,
    ServiceCreate,
    UserCreate,
    UserRole,
)
from smartcut.storage.memory import MemStorage

TEN_AM = datetime(2026, 11, 2, 10, 0)


def _book(store, shop, when=TEN_AM, customer_id=None, service=None):
    service = service or shop["service"]
    return store.create_appointment(
        AppointmentCreate(barber_id=shop["barber"].id, service_id=service.id, appointment_date=when),
        customer_id=customer_id or shop["customer"].id,
        total_price=service.price,
    )


# ============================================================================
# USERS
# ============================================================================


def test_password_is_stored_hashed(store):
    user = store.create_user(UserCreate(email="a@example.com", password="plaintext1", name="A"))

    stored = store.get_user_by_email("a@example.com")
    assert stored.id == user.id
    assert stored.password != "plaintext1"
    assert stored.password.startswith("$2")


def test_user_lookups(store):
    user = store.create_user(
        UserCreate(email="a@example.com", password="secret123", name="A", phone="+1 555 010 9999")
    )

    assert store.get_user_by_id(user.id).email == "a@example.com"
    assert store.get_user_by_id(user.id).phone == "+1 555 010 9999"
    assert store.get_user_by_id(user.id).role == UserRole.CUSTOMER
    assert store.get_user_by_id("missing") is None
    assert store.get_user_by_email("nobody@example.com") is None
    assert [u.id for u in store.get_all_users()] == [user.id]


def test_validate_user(store):
    store.create_user(UserCreate(email="a@example.com", password="secret123", name="A"))

    assert store.validate_user(LoginCredentials(email="a@example.com", password="secret123")).email == (
        "a@example.com"
    )
    assert store.validate_user(LoginCredentials(email="a@example.com", password="wrong-pass")) is None
    assert store.validate_user(LoginCredentials(email="b@example.com", password="secret123")) is None


def test_validate_user_tolerates_malformed_hash(store):
    user = store.create_user(UserCreate(email="a@example.com", password="secret123", name="A"))
    if isinstance(store, MemStorage):
        store._users[user.id].password = "not-a-bcrypt-hash"
    else:
        from smartcut import models

        with store._session() as db:
            db.get(models.User, user.id).password = "not-a-bcrypt-hash"

    assert store.validate_user(LoginCredentials(email="a@example.com", password="secret123")) is None


def test_returned_records_are_copies(store):
    user = store.create_user(UserCreate(email="a@example.com", password="secret123", name="A"))
    user.name = "Changed"

    assert store.get_user_by_id(user.id).name == "A"


# ============================================================================
# SALONS
# ============================================================================


def test_new_salon_waits_for_approval(store):
    owner = store.create_user(
        UserCreate(email="o@example.com", password="secret123", name="O", role=UserRole.BARBER)
    )
    salon = store.create_salon(SalonCreate(name="Cuts", address="1 Main St"), owner_id=owner.id)

    assert salon.is_approved is False
    assert salon.is_active is True
    assert salon.rating == Decimal("0")
    assert salon.review_count == 0
    assert salon.owner_id == owner.id
    assert store.get_salons() == []
    assert [s.id for s in store.get_pending_salons()] == [salon.id]

    store.update_salon_approval(salon.id, True)

    assert [s.id for s in store.get_salons()] == [salon.id]
    assert store.get_pending_salons() == []


def test_salons_listed_in_insertion_order(store):
    owner = store.create_user(
        UserCreate(email="o@example.com", password="secret123", name="O", role=UserRole.BARBER)
    )
    salons = [
        store.create_salon(SalonCreate(name=f"Salon {i}", address="Somewhere"), owner_id=owner.id)
        for i in range(5)
    ]
    for salon in reversed(salons):
        store.update_salon_approval(salon.id, True)

    assert [s.id for s in store.get_salons()] == [s.id for s in salons]


def test_update_salon_approval_unknown_id_is_noop(store):
    store.update_salon_approval("missing", True)
    assert store.get_salon_by_id("missing") is None


def test_stats_count_approved_and_pending_salons(store):
    owner = store.create_user(
        UserCreate(email="o@example.com", password="secret123", name="O", role=UserRole.BARBER)
    )
    salons = [
        store.create_salon(SalonCreate(name=f"Salon {i}", address="Somewhere"), owner_id=owner.id)
        for i in range(3)
    ]
    store.update_salon_approval(salons[0].id, True)

    stats = store.get_stats()

    assert stats.total_users == 1
    assert stats.total_salons == 1
    assert stats.pending_salons == 2
    assert stats.total_salons + stats.pending_salons == len(salons)
    assert stats.total_appointments == 0


# ============================================================================
# BARBERS AND SERVICES
# ============================================================================


def test_services_listed_in_insertion_order(store, shop):
    created = [shop["service"]] + [
        store.create_service(
            ServiceCreate(name=name, duration=30, price=Decimal("20.00")), barber_id=shop["barber"].id
        )
        for name in ("Shave", "Beard Trim", "Afro Cut")
    ]

    assert [s.id for s in store.get_services_by_barber(shop["barber"].id)] == [s.id for s in created]


def test_barber_lookups(store, shop):
    barber = shop["barber"]

    assert barber.is_available is True
    assert barber.rating == Decimal("0")
    assert store.get_barber_by_id(barber.id).title == "Senior Barber"
    assert store.get_barbers_by_user_id(shop["owner"].id).id == barber.id
    assert store.get_barbers_by_user_id(shop["customer"].id) is None
    assert [b.id for b in store.get_barbers_by_salon(shop["salon"].id)] == [barber.id]

    store.update_barber_availability(barber.id, False)
    assert store.get_barber_by_id(barber.id).is_available is False


def test_barber_working_hours_round_trip(store, shop):
    barber = store.create_barber(
        BarberCreate(
            title="Stylist",
            specialties=["Fades"],
            working_hours={"Monday": {"start": "09:00", "end": "17:00"}},
        ),
        user_id=shop["owner"].id,
        salon_id=shop["salon"].id,
    )

    stored = store.get_barber_by_id(barber.id)
    assert stored.specialties == ["Fades"]
    assert stored.working_hours == {"monday": {"start": "09:00", "end": "17:00"}}


def test_services_by_barber(store, shop):
    other = store.create_service(
        ServiceCreate(name="Beard Trim", duration=20, price=Decimal("15.50")), barber_id=shop["barber"].id
    )

    services = {s.id: s for s in store.get_services_by_barber(shop["barber"].id)}
    assert set(services) == {shop["service"].id, other.id}
    assert services[other.id].price == Decimal("15.50")
    assert store.get_services_by_barber("missing") == []
    assert store.get_service_by_id(other.id).duration == 20


# ============================================================================
# APPOINTMENTS
# ============================================================================


def test_appointment_starts_pending(store, shop):
    appointment = _book(store, shop)

    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.appointment_date == TEN_AM
    assert store.get_appointment_by_id(appointment.id).status == AppointmentStatus.PENDING


def test_total_price_is_a_snapshot(store, shop):
    appointment = _book(store, shop)

    store.update_service_price(shop["service"].id, Decimal("55.00"))

    assert store.get_service_by_id(shop["service"].id).price == Decimal("55.00")
    assert store.get_appointment_by_id(appointment.id).total_price == Decimal("35.00")
    assert store.get_appointments_by_customer(shop["customer"].id)[0].total_price == Decimal("35.00")


def test_customer_appointments_are_joined(store, shop):
    mine = _book(store, shop)
    stranger = store.create_user(UserCreate(email="s@example.com", password="secret123", name="S"))
    _book(store, shop, when=datetime(2026, 11, 3, 10, 0), customer_id=stranger.id)

    results = store.get_appointments_by_customer(shop["customer"].id)

    assert [a.id for a in results] == [mine.id]
    assert results[0].barber.id == shop["barber"].id
    assert results[0].service.id == shop["service"].id
    assert results[0].salon.id == shop["salon"].id


def test_barber_appointments_are_joined(store, shop):
    appointment = _book(store, shop)

    results = store.get_appointments_by_barber(shop["barber"].id)

    assert [a.id for a in results] == [appointment.id]
    assert results[0].customer.id == shop["customer"].id
    assert not hasattr(results[0].customer, "password")
    assert results[0].service.name == "Haircut"
    assert store.get_appointments_by_barber("missing") == []


def test_all_appointments_for_admin(store, shop):
    appointment = _book(store, shop)

    results = store.get_all_appointments()

    assert len(results) == 1
    assert results[0].id == appointment.id
    assert results[0].customer.email == "alice@example.com"
    assert results[0].barber.id == shop["barber"].id
    assert results[0].salon.name == "Fresh Fades"
    assert store.get_stats().total_appointments == 1


def test_dangling_reference_is_reported(store, shop):
    store.create_appointment(
        AppointmentCreate(barber_id=shop["barber"].id, service_id="no-such-service", appointment_date=TEN_AM),
        customer_id=shop["customer"].id,
        total_price=Decimal("10.00"),
    )

    with pytest.raises(InconsistentDataError) as exc_info:
        store.get_appointments_by_customer(shop["customer"].id)
    assert exc_info.value.entity == "Service"
    assert exc_info.value.entity_id == "no-such-service"

    with pytest.raises(InconsistentDataError):
        store.get_all_appointments()


def test_store_status_update_is_unguarded(store, shop):
    appointment = _book(store, shop)

    store.update_appointment_status(appointment.id, AppointmentStatus.COMPLETED)
    store.update_appointment_status(appointment.id, AppointmentStatus.PENDING)

    assert store.get_appointment_by_id(appointment.id).status == AppointmentStatus.PENDING


def test_update_status_unknown_id_is_noop(store):
    store.update_appointment_status("missing", AppointmentStatus.CONFIRMED)
    assert store.get_appointment_by_id("missing") is None


def test_active_appointments_exclude_closed_ones(store, shop):
    kept = _book(store, shop)
    cancelled = _book(store, shop, when=datetime(2026, 11, 2, 12, 0))
    store.update_appointment_status(cancelled.id, AppointmentStatus.CANCELLED)

    assert [a.id for a in store.get_active_appointments_for_barber(shop["barber"].id)] == [kept.id]


# ============================================================================
# REVIEWS
# ============================================================================


def test_reviews_carry_their_customer(store, shop):
    appointment = _book(store, shop)
    review = store.create_review(
        ReviewCreate(barber_id=shop["barber"].id, appointment_id=appointment.id, rating=5, comment="Great"),
        customer_id=shop["customer"].id,
    )

    results = store.get_reviews_by_barber(shop["barber"].id)

    assert [r.id for r in results] == [review.id]
    assert results[0].rating == 5
    assert results[0].customer.name == "Alice"
    assert store.get_reviews_by_barber("missing") == []


# ============================================================================
# SEEDING
# ============================================================================


def test_seed_only_fills_an_empty_store(store):
    from smartcut.storage.seed import seed_storage

    seed_storage(store)
    store.init(seed=True)

    assert len(store.get_all_users()) == 3
    assert store.validate_user(LoginCredentials(email="marcus@smartcut.com", password="barber123"))
    salons = store.get_salons()
    assert [s.name for s in salons] == ["Premium Cuts"]
    barber = store.get_barbers_by_salon(salons[0].id)[0]
    prices = {s.name: s.price for s in store.get_services_by_barber(barber.id)}
    assert prices == {"Classic Haircut": Decimal("35.00"), "Fade + Beard Trim": Decimal("55.00")}
    assert barber.working_hours["saturday"] == {"start": "10:00", "end": "16:00"}
    assert "sunday" not in barber.working_hours
