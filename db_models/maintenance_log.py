# db_models/maintenance_log.py
import datetime
from enum import Enum

from sqlalchemy import String, Date, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class MaintenanceStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class MaintenanceLog(Base):
    __tablename__ = "maintenance_logs"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    asset_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=MaintenanceStatus.IN_PROGRESS.value,
    )
