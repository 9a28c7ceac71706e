"""Admin router - FastAPI endpoints restricted to admins"""

from fastapi import APIRouter, Depends

from ...auth import require_admin
from ...schemas import AppointmentDetails, MessageResponse, PlatformStats, Salon, UserPublic
from ...storage import Storage, get_storage
from .schemas import SalonApprovalUpdate
from .service import AdminService

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def get_admin_service(storage: Storage = Depends(get_storage)) -> AdminService:
    """Dependency injection for AdminService"""
    return AdminService(storage)


@router.get("/stats", response_model=PlatformStats)
def get_stats(service: AdminService = Depends(get_admin_service)):
    return service.get_stats()


@router.get("/appointments", response_model=list[AppointmentDetails])
def list_appointments(service: AdminService = Depends(get_admin_service)):
    return service.list_appointments()


@router.get("/users", response_model=list[UserPublic])
def list_users(service: AdminService = Depends(get_admin_service)):
    """All accounts, without password hashes"""
    return service.list_users()


@router.get("/salons/pending", response_model=list[Salon])
def list_pending_salons(service: AdminService = Depends(get_admin_service)):
    return service.list_pending_salons()


@router.patch("/salons/{salon_id}/approve", response_model=MessageResponse)
def approve_salon(
    salon_id: str,
    data: SalonApprovalUpdate,
    service: AdminService = Depends(get_admin_service),
):
    service.set_salon_approval(salon_id, data.is_approved)
    return MessageResponse(message="Salon approval status updated")
