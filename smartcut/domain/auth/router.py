"""Auth router - FastAPI endpoints for registration and login"""

from fastapi import APIRouter, Depends

from ...auth import CurrentUser, get_current_user
from ...schemas import LoginCredentials, UserCreate
from ...storage import Storage, get_storage
from .schemas import AuthResponse, AuthUser
from .service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def get_auth_service(storage: Storage = Depends(get_storage)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(storage)


@router.post("/register", response_model=AuthResponse)
def register(data: UserCreate, service: AuthService = Depends(get_auth_service)):
    return service.register(data)


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginCredentials, service: AuthService = Depends(get_auth_service)):
    return service.login(credentials)


@router.get("/me", response_model=AuthUser)
def me(
    current_user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Return the account behind the bearer token"""
    return service.get_profile(current_user.id)
