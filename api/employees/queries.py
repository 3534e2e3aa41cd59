# api/employees/queries.py
"""
SQLAlchemy query builders for employee operations.
"""
from sqlalchemy import select, update

from db_models.employee import Employee
from db_models.user import User


def select_all_employees():
    """Select all employees ordered by name."""
    return select(Employee).order_by(Employee.name.asc())


def select_employee_by_email(email: str):
    """Select an employee by email address."""
    return select(Employee).where(Employee.email == email)


def sync_linked_user_email(employee_id: str, email: str):
    """Copy an employee's email onto the user account linked to it."""
    return update(User).where(User.employee_id == employee_id).values(email=email)
