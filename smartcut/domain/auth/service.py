"""Auth service - Registration, login and profile lookup"""

import logging

from fastapi import HTTPException

from ...exceptions import NotFoundError, ValidationError
from ...schemas import LoginCredentials, User, UserCreate, UserRole
from ...security_utils import create_access_token
from ...storage import Storage
from .schemas import AuthResponse, AuthUser

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for credential issuance"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def _issue(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.role.value)
        return AuthResponse(token=token, user=AuthUser.model_validate(user))

    def register(self, data: UserCreate) -> AuthResponse:
        """Create an account and sign the caller in"""
        if data.role == UserRole.ADMIN:
            raise ValidationError("Admin accounts cannot be self-registered")
        if self.storage.get_user_by_email(data.email):
            logger.warning(f"⚠️ Registration rejected, email already in use: {data.email}")
            raise ValidationError("User already exists")

        user = self.storage.create_user(data)
        logger.info(f"✅ Registered user {user.id} ({user.role.value})")
        return self._issue(user)

    def login(self, credentials: LoginCredentials) -> AuthResponse:
        user = self.storage.validate_user(credentials)
        if not user:
            logger.warning(f"⚠️ Failed login for {credentials.email}")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        logger.info(f"🔑 User {user.id} logged in")
        return self._issue(user)

    def get_profile(self, user_id: str) -> User:
        user = self.storage.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user
