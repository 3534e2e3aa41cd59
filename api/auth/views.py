# api/auth/views.py
"""
Authentication and user management endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.security import create_session_token, revoke_token
from core.deps import AdminUser, CurrentUser, SessionToken
from .models import (
    AuthProfile,
    LoginRequest,
    LoginResponse,
    PasswordReset,
    UserCreate,
    UserRead,
)
from . import db_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/auth/login", response_model=LoginResponse, summary="Login and get a session token")
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    user = await db_manager.authenticate(db, credentials.email, credentials.password)
    if user is None:
        logger.warning("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_session_token({"sub": user.id, "role": user.role})
    logger.info("User %s logged in", user.id)
    return LoginResponse(user=AuthProfile.model_validate(user), token=token)


@router.post("/auth/logout", summary="End the current session")
async def logout(current_user: CurrentUser, token: SessionToken) -> dict:
    if token:
        revoke_token(token)
    logger.info("User %s logged out", current_user.id)
    return {"success": True}


@router.get("/auth/me", response_model=AuthProfile, summary="Get current user")
async def get_me(current_user: CurrentUser) -> AuthProfile:
    return AuthProfile.model_validate(current_user)


# --- Admin endpoints for user management ---

@router.get("/users", response_model=list[UserRead], summary="List all users (admin)")
async def list_users(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> list[UserRead]:
    users = await db_manager.list_users(db)
    return [UserRead.model_validate(u) for u in users]


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user (admin)",
)
async def create_user(
    user_data: UserCreate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    try:
        user = await db_manager.create_user(db, user_data)
    except db_manager.DuplicateEmailError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}", summary="Delete user (admin)")
async def delete_user(
    user_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete yourself",
        )
    try:
        await db_manager.delete_user(db, user_id)
    except db_manager.UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return {"success": True}


@router.put("/users/{user_id}/password", summary="Reset a password")
async def reset_password(
    user_id: str,
    request: PasswordReset,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    """Admins may reset anyone's password, users only their own."""
    if not current_user.is_admin() and current_user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized to change this password",
        )
    try:
        await db_manager.set_password(db, user_id, request.password)
    except db_manager.UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return {"success": True}
