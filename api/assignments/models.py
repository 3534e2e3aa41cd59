# api/assignments/models.py
from datetime import date

from pydantic import Field

from core.schemas import CamelModel


class AssignmentPayload(CamelModel):
    """Asset checked out to an employee."""
    id: str = Field(..., min_length=1, max_length=50)
    asset_id: str
    employee_id: str
    borrow_date: date
    expected_return_date: date | None = None
    returned_date: date | None = None
    notes: str | None = None
    is_active: bool = True
