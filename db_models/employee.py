# db_models/employee.py
from datetime import date

from sqlalchemy import String, Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Intended unique; users are linked to employees by this address
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    department: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    join_date: Mapped[date] = mapped_column(Date, nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
