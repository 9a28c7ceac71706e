"""Auth domain schemas - Pydantic models for token responses"""

from ...schemas import CamelModel, UserRole


class AuthUser(CamelModel):
    """The subset of a user returned alongside a token"""

    id: str
    email: str
    name: str
    role: UserRole


class AuthResponse(CamelModel):
    token: str
    user: AuthUser
