"""Shared API dependencies for authentication and authorization."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from vouchboard.core.permissions import Permission, has_permission
from vouchboard.core.security import decode_access_token
from vouchboard.db.session import get_db
from vouchboard.models import User

# HTTP Bearer scheme for JWT authentication; auto_error is off so a missing
# header is reported as 401 rather than FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_user_id(subject: object) -> int:
    """Decode the ``sub`` claim into a user id.

    Raises:
        HTTPException: If the subject is missing or not an integer
    """
    if subject is None:
        raise _credentials_error()
    try:
        return int(str(subject))
    except ValueError as err:
        raise _credentials_error() from err


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or names an unknown
            user; 403 if the account is banned
    """
    if credentials is None:
        raise _credentials_error("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    user_id = _decode_user_id(payload.get("sub"))
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _credentials_error("User not found")
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is banned",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_permission(permission: Permission) -> Callable[[User], User]:
    """Build a dependency that admits only users holding ``permission``."""

    def _dependency(current_user: CurrentUserDep) -> User:
        if not has_permission(current_user.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role '{current_user.role.value}' is not authorized to access this route",
            )
        return current_user

    return _dependency


AdminUserDep = Annotated[User, Depends(require_permission(Permission.ACCESS_ADMIN))]
