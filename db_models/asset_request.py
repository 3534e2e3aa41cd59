# db_models/asset_request.py
from datetime import date
from enum import Enum

from sqlalchemy import String, Date, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class RequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CLOSED = "Closed"


class AssetRequest(Base):
    """Service ticket raised by an employee."""
    __tablename__ = "asset_requests"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    employee_id: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=RequestStatus.PENDING.value,
    )
    request_date: Mapped[date] = mapped_column(Date, nullable=False)

    meta: Mapped["RequestMetadata | None"] = relationship(
        "RequestMetadata",
        back_populates="request",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class RequestMetadata(Base):
    """Who filed a request and from where; kept apart from the ticket itself."""
    __tablename__ = "request_metadata"

    id: Mapped[str] = mapped_column(String(60), primary_key=True)
    request_id: Mapped[str] = mapped_column(
        ForeignKey("asset_requests.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    user_id: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    user_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    request_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)

    request: Mapped[AssetRequest] = relationship(
        "AssetRequest",
        back_populates="meta",
    )
