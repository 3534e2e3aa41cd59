# api/employees/db_manager.py
"""
Business logic for the employee directory.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from db_models.employee import Employee
from .models import EmployeePayload
from . import queries


class EmployeeNotFoundError(Exception):
    """Raised when employee doesn't exist."""
    pass


class EmailConflictError(Exception):
    """Raised when the linked user's new email is taken by another account."""
    pass


async def list_employees(db: AsyncSession) -> list[Employee]:
    result = await db.execute(queries.select_all_employees())
    return list(result.scalars().all())


async def upsert_employee(db: AsyncSession, payload: EmployeePayload) -> Employee:
    """
    Insert or overwrite an employee and keep the linked login email in step.

    Both writes commit together.

    Raises:
        EmailConflictError: If the linked user cannot take the new email
    """
    values = payload.model_dump(mode="python")
    employee = await db.get(Employee, payload.id)
    if employee is None:
        employee = Employee(**values)
        db.add(employee)
    else:
        for field, value in values.items():
            setattr(employee, field, value)

    try:
        await db.execute(queries.sync_linked_user_email(payload.id, payload.email))
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise EmailConflictError(f"Email {payload.email} is already used by another account") from exc

    await db.refresh(employee)
    return employee


async def delete_employee(db: AsyncSession, employee_id: str) -> None:
    """
    Delete an employee. Assignments and assets that reference it are kept.

    Raises:
        EmployeeNotFoundError: If employee doesn't exist
    """
    employee = await db.get(Employee, employee_id)
    if employee is None:
        raise EmployeeNotFoundError(f"Employee {employee_id} not found")
    await db.delete(employee)
    await db.commit()
