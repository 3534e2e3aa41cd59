# api/dashboard/views.py
"""
Dashboard and aggregate statistics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser
from .models import DashboardSummary
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get inventory overview statistics",
)
async def get_summary_endpoint(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> DashboardSummary:
    """
    Asset counts by status and category, inventory value, open work.
    """
    data = await db_manager.get_summary(db)
    return DashboardSummary(**data)
