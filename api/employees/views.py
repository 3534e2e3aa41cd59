# api/employees/views.py
"""
Employee directory endpoints. Admin only.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser
from .models import EmployeePayload
from . import db_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeePayload], summary="List employees")
async def list_employees_endpoint(
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> list[EmployeePayload]:
    employees = await db_manager.list_employees(db)
    return [EmployeePayload.model_validate(e) for e in employees]


@router.post("", response_model=EmployeePayload, summary="Create or update an employee")
async def upsert_employee_endpoint(
    payload: EmployeePayload,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> EmployeePayload:
    try:
        employee = await db_manager.upsert_employee(db, payload)
    except db_manager.EmailConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    logger.info("Employee %s saved by %s", employee.id, admin.id)
    return EmployeePayload.model_validate(employee)


@router.delete("/{employee_id}", summary="Delete an employee")
async def delete_employee_endpoint(
    employee_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> dict:
    try:
        await db_manager.delete_employee(db, employee_id)
    except db_manager.EmployeeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    logger.info("Employee %s deleted by %s", employee_id, admin.id)
    return {"success": True}
