"""Review router - FastAPI endpoints for reviews"""

from fastapi import APIRouter, Depends

from ...auth import CurrentUser, get_current_user
from ...schemas import Review, ReviewCreate, ReviewWithCustomer
from ...storage import Storage, get_storage
from .service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


def get_review_service(storage: Storage = Depends(get_storage)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(storage)


@router.post("", response_model=Review)
def create_review(
    data: ReviewCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.create(data, current_user)


@router.get("/barber/{barber_id}", response_model=list[ReviewWithCustomer])
def list_barber_reviews(barber_id: str, service: ReviewService = Depends(get_review_service)):
    return service.list_for_barber(barber_id)
