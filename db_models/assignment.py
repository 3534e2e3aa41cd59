# db_models/assignment.py
from datetime import date

from sqlalchemy import String, Boolean, Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    # Plain references, no cascade
    asset_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    employee_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    borrow_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    returned_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
