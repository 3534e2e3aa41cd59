# api/assignments/views.py
"""
Assignment endpoints. Admin only.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser
from .models import AssignmentPayload
from . import db_manager

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("", response_model=list[AssignmentPayload], summary="List assignments")
async def list_assignments_endpoint(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> list[AssignmentPayload]:
    assignments = await db_manager.list_assignments(db)
    return [AssignmentPayload.model_validate(a) for a in assignments]


@router.post("", response_model=AssignmentPayload, summary="Create or update an assignment")
async def upsert_assignment_endpoint(
    payload: AssignmentPayload,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> AssignmentPayload:
    """
    Existing assignments only take returnedDate, notes and isActive changes.
    """
    assignment = await db_manager.upsert_assignment(db, payload)
    return AssignmentPayload.model_validate(assignment)
