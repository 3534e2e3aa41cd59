# api/requests/models.py
from datetime import date, datetime

from pydantic import Field

from core.schemas import CamelModel
from db_models.asset_request import RequestStatus


class RequestPayload(CamelModel):
    """Service ticket as submitted by a client."""
    id: str = Field(..., min_length=1, max_length=50)
    employee_id: str | None = None
    category: str = Field(..., min_length=1, max_length=100)
    reason: str = ""
    status: RequestStatus = RequestStatus.PENDING
    request_date: date


class RequestRead(RequestPayload):
    """Ticket with who filed it and how many chat messages it has."""
    user_id: str | None = None
    user_name: str | None = None
    user_email: str | None = None
    request_ip: str | None = None
    message_count: int = 0


class MessageCreate(CamelModel):
    message: str = Field(..., min_length=1)


class MessageRead(CamelModel):
    id: str
    request_id: str
    sender_id: str
    sender_name: str
    message: str
    timestamp: datetime
