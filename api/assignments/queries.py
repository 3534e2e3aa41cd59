# api/assignments/queries.py
"""
SQLAlchemy query builders for assignment operations.
"""
from sqlalchemy import select, func

from db_models.assignment import Assignment


def select_all_assignments():
    """Select all assignments, newest borrow first."""
    return select(Assignment).order_by(Assignment.borrow_date.desc())


def count_active_assignments():
    """Count assignments that have not been returned."""
    return select(func.count(Assignment.id)).where(Assignment.is_active == True)
