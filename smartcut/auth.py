import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .schemas import UserRole
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Identity carried by a verified bearer token"""

    id: str
    role: UserRole


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """Get current user from the bearer token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        logger.warning(f"⚠️ Token for {payload.get('sub')} carries unknown role {payload.get('role')!r}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return CurrentUser(id=payload["sub"], role=role)


def require_role(*roles: UserRole):
    """Build a dependency that only lets the given roles through"""
    allowed = ", ".join(r.value for r in roles)

    async def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            logger.warning(f"⚠️ User {current_user.id} ({current_user.role.value}) denied; needs {allowed}")
            raise HTTPException(status_code=403, detail=f"{roles[0].value.capitalize()} access required")
        return current_user

    return checker


require_admin = require_role(UserRole.ADMIN)
require_barber = require_role(UserRole.BARBER)
