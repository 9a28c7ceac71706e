"""Salon router - FastAPI endpoints for salons"""

from fastapi import APIRouter, Depends

from ...auth import CurrentUser, require_barber
from ...schemas import Salon, SalonCreate
from ...storage import Storage, get_storage
from .schemas import SalonDetailResponse
from .service import SalonService

router = APIRouter(prefix="/api/salons", tags=["Salons"])


def get_salon_service(storage: Storage = Depends(get_storage)) -> SalonService:
    """Dependency injection for SalonService"""
    return SalonService(storage)


@router.get("", response_model=list[Salon])
def list_salons(service: SalonService = Depends(get_salon_service)):
    return service.list_public()


@router.get("/{salon_id}", response_model=SalonDetailResponse)
def get_salon(salon_id: str, service: SalonService = Depends(get_salon_service)):
    """Salon with its barbers"""
    return service.get_detail(salon_id)


@router.post("", response_model=Salon)
def create_salon(
    data: SalonCreate,
    current_user: CurrentUser = Depends(require_barber),
    service: SalonService = Depends(get_salon_service),
):
    return service.create(data, current_user)
