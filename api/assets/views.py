# api/assets/views.py
"""
Asset inventory endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser, CurrentUser
from .models import AssetPayload
from . import db_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=list[AssetPayload],
    summary="List assets",
)
async def list_assets_endpoint(
    current_user: CurrentUser,  # Any authenticated user can browse the inventory
    db: AsyncSession = Depends(get_session),
) -> list[AssetPayload]:
    assets = await db_manager.list_assets(db)
    return [AssetPayload.model_validate(a) for a in assets]


@router.post(
    "",
    response_model=AssetPayload,
    summary="Create or update an asset",
)
async def upsert_asset_endpoint(
    payload: AssetPayload,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> AssetPayload:
    """
    Upsert an asset by id. Admin only.
    """
    try:
        asset = await db_manager.upsert_asset(db, payload)
    except db_manager.DuplicateTagError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    logger.info("Asset %s saved by %s", asset.id, admin.id)
    return AssetPayload.model_validate(asset)


@router.delete(
    "/{asset_id}",
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    """
    Delete an asset. Admin only. Referencing records are left untouched.
    """
    try:
        await db_manager.delete_asset(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    logger.info("Asset %s deleted by %s", asset_id, admin.id)
    return {"success": True}
