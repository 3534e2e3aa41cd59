# api/auth/db_manager.py
"""
Business logic for login accounts.
"""
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import get_password_hash, verify_password
from db_models.employee import Employee
from db_models.user import User, UserRole
from api.employees import queries as employee_queries
from .models import UserCreate


class UserNotFoundError(Exception):
    """Raised when user doesn't exist."""
    pass


class DuplicateEmailError(Exception):
    """Raised when the email is already registered."""
    pass


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10].upper()}"


async def authenticate(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user if the credentials match, else None."""
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.name.asc()))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """
    Create a login account, linking it to the employee with the same email.

    When no such employee exists and ``should_create_employee`` is set, the
    employee record is created in the same transaction.

    Raises:
        DuplicateEmailError: If email already registered
    """
    result = await db.execute(select(User).where(User.email == data.email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError("Email already exists")

    result = await db.execute(employee_queries.select_employee_by_email(data.email))
    employee = result.scalars().first()
    employee_id = employee.id if employee else None

    if employee_id is None and data.should_create_employee:
        employee_id = new_id("EMP")
        db.add(Employee(
            id=employee_id,
            name=data.name,
            email=data.email,
            department=data.department or "Staff",
            role="Administrator" if data.role == UserRole.ADMIN.value else "Employee",
            join_date=date.today(),
        ))

    user = User(
        id=new_id("USR"),
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        employee_id=employee_id,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    await db.delete(user)
    await db.commit()


async def set_password(db: AsyncSession, user_id: str, password: str) -> None:
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    user.hashed_password = get_password_hash(password)
    await db.commit()
