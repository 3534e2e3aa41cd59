# api/maintenance/views.py
"""
Maintenance log endpoints. Admin only.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser
from .models import MaintenancePayload
from . import db_manager

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("", response_model=list[MaintenancePayload], summary="List maintenance logs")
async def list_logs_endpoint(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> list[MaintenancePayload]:
    logs = await db_manager.list_logs(db)
    return [MaintenancePayload.model_validate(m) for m in logs]


@router.post("", response_model=MaintenancePayload, summary="Create or update a maintenance log")
async def upsert_log_endpoint(
    payload: MaintenancePayload,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> MaintenancePayload:
    log = await db_manager.upsert_log(db, payload)
    return MaintenancePayload.model_validate(log)
