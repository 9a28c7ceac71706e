import os

# Must be set before smartcut.config is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_DATA", "false")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from smartcut.main import create_app  # noqa: E402
from smartcut.schemas import (  # noqa: E402
    BarberCreate,
    SalonCreate,
    ServiceCreate,
    UserCreate,
    UserRole,
)
from smartcut.storage import MemStorage, SqlStorage  # noqa: E402

from .helpers import login  # noqa: E402


def make_storage(backend: str):
    return MemStorage() if backend == "memory" else SqlStorage("sqlite://")


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """An empty, initialized store for each backend"""
    storage = make_storage(request.param)
    storage.init()
    yield storage
    storage.close()


@pytest.fixture
def shop(store):
    """A customer, a barber at an approved salon, and one 45 minute service"""
    customer = store.create_user(
        UserCreate(email="alice@example.com", password="secret123", name="Alice", role=UserRole.CUSTOMER)
    )
    owner = store.create_user(
        UserCreate(email="bob@example.com", password="secret123", name="Bob", role=UserRole.BARBER)
    )
    salon = store.create_salon(SalonCreate(name="Fresh Fades", address="1 High St"), owner_id=owner.id)
    store.update_salon_approval(salon.id, True)
    barber = store.create_barber(BarberCreate(title="Senior Barber"), user_id=owner.id, salon_id=salon.id)
    service = store.create_service(
        ServiceCreate(name="Haircut", duration=45, price=Decimal("35.00")), barber_id=barber.id
    )
    return {
        "customer": customer,
        "owner": owner,
        "salon": salon,
        "barber": barber,
        "service": service,
    }


@pytest.fixture(params=["memory", "sql"])
def client(request):
    """API client over a seeded store"""
    app = create_app(storage=make_storage(request.param), seed=True)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    return login(client, "admin@smartcut.com")


@pytest.fixture
def barber_headers(client):
    return login(client, "marcus@smartcut.com")


@pytest.fixture
def customer_headers(client):
    return login(client, "john@example.com")


@pytest.fixture
def seeded(client):
    """Ids of the seeded salon, barber and services"""
    salon = client.get("/api/salons").json()[0]
    detail = client.get(f"/api/salons/{salon['id']}").json()
    barber = detail["barbers"][0]
    services = {s["name"]: s for s in client.get(f"/api/barbers/{barber['id']}/services").json()}
    return {"salon": salon, "barber": barber, "services": services}
