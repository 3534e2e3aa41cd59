# api/requests/queries.py
"""
SQLAlchemy query builders for service requests and their messages.
"""
from sqlalchemy import select, func, or_

from db_models.asset_request import AssetRequest, RequestMetadata, RequestStatus
from db_models.ticket_message import TicketMessage
from db_models.user import User


def message_count_subquery():
    """Correlated count of chat messages per request."""
    return (
        select(func.count(TicketMessage.id))
        .where(TicketMessage.request_id == AssetRequest.id)
        .correlate(AssetRequest)
        .scalar_subquery()
    )


def select_requests_for(user: User):
    """
    Select requests with metadata and message count, newest first.

    Admins see everything; other users only requests filed for their
    employee record or by their account.
    """
    stmt = (
        select(AssetRequest, RequestMetadata, message_count_subquery().label("message_count"))
        .outerjoin(RequestMetadata, RequestMetadata.request_id == AssetRequest.id)
        .order_by(AssetRequest.request_date.desc(), AssetRequest.id.desc())
    )
    if not user.is_admin():
        conditions = [RequestMetadata.user_id == user.id]
        if user.employee_id:
            conditions.append(AssetRequest.employee_id == user.employee_id)
        stmt = stmt.where(or_(*conditions))
    return stmt


def count_pending_requests():
    """Count requests waiting for a decision."""
    return (
        select(func.count(AssetRequest.id))
        .where(AssetRequest.status == RequestStatus.PENDING.value)
    )


def select_messages_for_request(request_id: str):
    """Select a request's messages oldest first."""
    return (
        select(TicketMessage)
        .where(TicketMessage.request_id == request_id)
        .order_by(TicketMessage.timestamp.asc())
    )
