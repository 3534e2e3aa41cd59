# api/employees/models.py
from datetime import date

from pydantic import EmailStr, Field

from core.schemas import CamelModel


class EmployeePayload(CamelModel):
    """Full employee record; POST upserts by id."""
    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    department: str = ""
    role: str = ""
    join_date: date
    avatar: str | None = None
