"""Barber router - FastAPI endpoints for barber profiles and services"""

from fastapi import APIRouter, Depends

from ...auth import CurrentUser, require_barber
from ...schemas import Barber, Service, ServiceCreate
from ...storage import Storage, get_storage
from .schemas import AvailabilityUpdate, BarberDetailResponse, BarberProfileCreate, ServicePriceUpdate
from .service import BarberService

router = APIRouter(prefix="/api/barbers", tags=["Barbers"])
services_router = APIRouter(prefix="/api/services", tags=["Services"])


def get_barber_service(storage: Storage = Depends(get_storage)) -> BarberService:
    """Dependency injection for BarberService"""
    return BarberService(storage)


# ============================================================================
# BARBER PROFILES
# ============================================================================


@router.post("", response_model=Barber)
def create_barber_profile(
    data: BarberProfileCreate,
    current_user: CurrentUser = Depends(require_barber),
    service: BarberService = Depends(get_barber_service),
):
    return service.create_profile(data, current_user)


@router.patch("/me/availability", response_model=Barber)
def update_availability(
    data: AvailabilityUpdate,
    current_user: CurrentUser = Depends(require_barber),
    service: BarberService = Depends(get_barber_service),
):
    """Pause or resume taking bookings"""
    return service.set_availability(current_user, data.is_available)


@router.get("/{barber_id}", response_model=BarberDetailResponse)
def get_barber(barber_id: str, service: BarberService = Depends(get_barber_service)):
    return service.get_detail(barber_id)


@router.get("/{barber_id}/services", response_model=list[Service])
def list_barber_services(barber_id: str, service: BarberService = Depends(get_barber_service)):
    return service.list_services(barber_id)


# ============================================================================
# SERVICES
# ============================================================================


@services_router.post("", response_model=Service)
def create_service(
    data: ServiceCreate,
    current_user: CurrentUser = Depends(require_barber),
    service: BarberService = Depends(get_barber_service),
):
    return service.create_service(data, current_user)


@services_router.patch("/{service_id}/price", response_model=Service)
def update_service_price(
    service_id: str,
    data: ServicePriceUpdate,
    current_user: CurrentUser = Depends(require_barber),
    service: BarberService = Depends(get_barber_service),
):
    return service.update_service_price(service_id, data.price, current_user)
