# core/deps.py
"""
FastAPI dependencies for authentication and authorization.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader, OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User
from core.security import decode_token

# Bearer token from the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)
# Legacy desktop shell header
session_header = APIKeyHeader(name="X-Session-Token", auto_error=False)


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """Raised when user lacks required permissions."""
    def __init__(self, detail: str = "Admin access required"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


async def get_token(
    bearer: Annotated[str | None, Depends(oauth2_scheme)],
    header_token: Annotated[str | None, Depends(session_header)],
) -> str | None:
    """Session token from either supported header, bearer first."""
    return bearer or header_token


async def get_current_user(
    token: Annotated[str | None, Depends(get_token)],
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Dependency to get the current authenticated user from the session token.

    Raises:
        AuthenticationError: If token is missing, invalid, revoked, or user not found
    """
    if token is None:
        raise AuthenticationError()

    payload = decode_token(token)
    if payload is None:
        raise AuthenticationError("Invalid or expired session")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, str(user_id))
    if user is None:
        raise AuthenticationError("User not found")

    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency that requires the admin role."""
    if not current_user.is_admin():
        raise AuthorizationError()
    return current_user


def get_client_ip(request: Request) -> str | None:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


# Type aliases for cleaner endpoint signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
SessionToken = Annotated[str | None, Depends(get_token)]
ClientIp = Annotated[str | None, Depends(get_client_ip)]
