# db_models/asset.py
from datetime import date
from enum import Enum

from sqlalchemy import String, Date, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class AssetStatus(str, Enum):
    AVAILABLE = "Available"
    ASSIGNED = "Assigned"
    IN_REPAIR = "In Repair"
    RETIRED = "Retired"
    LOST = "Lost"
    DAMAGED = "Damaged"


class AssetCondition(str, Enum):
    NEW = "New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    DAMAGED = "Damaged"


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    # Human-readable tag / barcode
    tag: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Free text so new categories need no migration
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.AVAILABLE.value,
    )
    condition: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetCondition.GOOD.value,
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Employee ID; no FK so deleting an employee leaves the reference dangling
    assigned_to: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)

    image: Mapped[str | None] = mapped_column(Text, nullable=True)
