# Standard library imports
from collections.abc import Awaitable, Callable

# Third-party imports
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.db import get_async_session
from app.db_selectors.admin import get_admin_user_by_id
from app.models.admin.admin_user import STATEWIDE_ROLES, AdminRole, AdminUser
from app.settings import settings

# Tokens are minted by the external auth provider after OTP login; "sub" is the admin id
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/token", auto_error=False)


async def get_current_admin(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> AdminUser:
    """Get the active administrator identified by the bearer token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        admin_id: str | None = payload.get("sub")
        if admin_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    admin = await get_admin_user_by_id(db, admin_id)
    if admin is None:
        raise credentials_exception

    if not admin.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin account is deactivated")

    return admin


def require_roles(*roles: AdminRole) -> Callable[..., Awaitable[AdminUser]]:
    """Dependency factory restricting an endpoint to the given roles."""
    allowed = frozenset(roles)

    async def checker(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if admin.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to perform this action",
            )
        return admin

    return checker


# User management is limited to statewide administrators
require_user_manager = require_roles(*STATEWIDE_ROLES)
