# api/requests/db_manager.py
"""
Business logic for service requests (tickets) and ticket chat.
"""
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset_request import AssetRequest, RequestMetadata
from db_models.ticket_message import TicketMessage
from db_models.user import User
from .models import RequestPayload, RequestRead
from . import queries


class RequestNotFoundError(Exception):
    """Raised when request doesn't exist."""
    pass


class RequestAccessError(Exception):
    """Raised when a non-admin touches someone else's request."""
    pass


def _to_read(request: AssetRequest, meta: RequestMetadata | None, message_count: int) -> RequestRead:
    return RequestRead(
        id=request.id,
        employee_id=request.employee_id,
        category=request.category,
        reason=request.reason,
        status=request.status,
        request_date=request.request_date,
        user_id=meta.user_id if meta else None,
        user_name=meta.user_name if meta else None,
        user_email=meta.user_email if meta else None,
        request_ip=meta.request_ip if meta else None,
        message_count=message_count or 0,
    )


def _can_access(user: User, request: AssetRequest) -> bool:
    if user.is_admin():
        return True
    if user.employee_id and request.employee_id == user.employee_id:
        return True
    return request.meta is not None and request.meta.user_id == user.id


async def list_requests(db: AsyncSession, user: User) -> list[RequestRead]:
    result = await db.execute(queries.select_requests_for(user))
    return [_to_read(req, meta, count) for req, meta, count in result.all()]


async def get_request_for(db: AsyncSession, user: User, request_id: str) -> AssetRequest:
    """
    Load a request the user may see.

    Raises:
        RequestNotFoundError: If request doesn't exist
        RequestAccessError: If the user may not see it
    """
    request = await db.get(AssetRequest, request_id)
    if request is None:
        raise RequestNotFoundError(f"Request {request_id} not found")
    if not _can_access(user, request):
        raise RequestAccessError(f"Not allowed to access request {request_id}")
    return request


async def upsert_request(
    db: AsyncSession,
    user: User,
    payload: RequestPayload,
    client_ip: str | None,
) -> AssetRequest:
    """
    Create or update a request and record who filed it.

    Non-admins always file for their own employee record, whatever the
    payload says.
    """
    if user.is_admin():
        employee_id = payload.employee_id or user.employee_id
    else:
        employee_id = user.employee_id

    request = await db.get(AssetRequest, payload.id)
    if request is None:
        request = AssetRequest(
            id=payload.id,
            employee_id=employee_id,
            category=payload.category,
            reason=payload.reason,
            status=payload.status.value,
            request_date=payload.request_date,
        )
        db.add(request)
    else:
        if not _can_access(user, request):
            raise RequestAccessError(f"Not allowed to modify request {payload.id}")
        request.status = payload.status.value
        request.category = payload.category
        request.reason = payload.reason

    if request.meta is None:
        request.meta = RequestMetadata(
            id=f"META-{payload.id}",
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            request_ip=client_ip,
        )
    else:
        request.meta.user_name = user.name
        request.meta.user_email = user.email
        request.meta.request_ip = client_ip

    await db.commit()
    await db.refresh(request)
    return request


async def list_messages(db: AsyncSession, user: User, request_id: str) -> list[TicketMessage]:
    await get_request_for(db, user, request_id)
    result = await db.execute(queries.select_messages_for_request(request_id))
    return list(result.scalars().all())


async def add_message(db: AsyncSession, user: User, request_id: str, text: str) -> TicketMessage:
    """Append a chat message from the current user."""
    await get_request_for(db, user, request_id)
    message = TicketMessage(
        id=f"MSG-{uuid.uuid4().hex[:12].upper()}",
        request_id=request_id,
        sender_id=user.id,
        sender_name=user.name,
        message=text,
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message
