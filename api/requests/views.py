# api/requests/views.py
"""
Service request (ticket) endpoints and ticket chat.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import ClientIp, CurrentUser
from .models import MessageCreate, MessageRead, RequestPayload, RequestRead
from . import db_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/requests", tags=["requests"])


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, db_manager.RequestNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))


@router.get("", response_model=list[RequestRead], summary="List requests")
async def list_requests_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[RequestRead]:
    """
    Admins get every request, users only their own. Each carries messageCount
    so clients can spot new replies.
    """
    return await db_manager.list_requests(db, current_user)


@router.post("", response_model=RequestPayload, summary="Create or update a request")
async def upsert_request_endpoint(
    payload: RequestPayload,
    current_user: CurrentUser,
    client_ip: ClientIp,
    db: AsyncSession = Depends(get_session),
) -> RequestPayload:
    try:
        request = await db_manager.upsert_request(db, current_user, payload, client_ip)
    except db_manager.RequestAccessError as exc:
        raise _http_error(exc) from exc

    logger.info("Request %s saved by %s (status %s)", request.id, current_user.id, request.status)
    return RequestPayload.model_validate(request)


@router.get(
    "/{request_id}/messages",
    response_model=list[MessageRead],
    summary="List messages on a request",
)
async def list_messages_endpoint(
    request_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[MessageRead]:
    try:
        messages = await db_manager.list_messages(db, current_user, request_id)
    except (db_manager.RequestNotFoundError, db_manager.RequestAccessError) as exc:
        raise _http_error(exc) from exc
    return [MessageRead.model_validate(m) for m in messages]


@router.post(
    "/{request_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post a message on a request",
)
async def add_message_endpoint(
    request_id: str,
    payload: MessageCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MessageRead:
    try:
        message = await db_manager.add_message(db, current_user, request_id, payload.message)
    except (db_manager.RequestNotFoundError, db_manager.RequestAccessError) as exc:
        raise _http_error(exc) from exc
    return MessageRead.model_validate(message)
