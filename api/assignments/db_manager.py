# api/assignments/db_manager.py
"""
Business logic for asset assignments.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.assignment import Assignment
from .models import AssignmentPayload
from . import queries

# Columns a repeated save may change; the checkout itself is fixed once recorded
MUTABLE_FIELDS = ("returned_date", "notes", "is_active")


async def list_assignments(db: AsyncSession) -> list[Assignment]:
    result = await db.execute(queries.select_all_assignments())
    return list(result.scalars().all())


async def upsert_assignment(db: AsyncSession, payload: AssignmentPayload) -> Assignment:
    """
    Record a new assignment, or update the return fields of an existing one.
    """
    assignment = await db.get(Assignment, payload.id)
    if assignment is None:
        assignment = Assignment(**payload.model_dump(mode="python"))
        db.add(assignment)
    else:
        for field in MUTABLE_FIELDS:
            setattr(assignment, field, getattr(payload, field))

    await db.commit()
    await db.refresh(assignment)
    return assignment
