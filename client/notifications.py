# client/notifications.py
"""
User-facing notification sinks.

Delivery is best effort: a sink only fires when the platform supports it and
the user granted permission, and a failing sink never breaks the caller.
"""
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    @property
    def permission_granted(self) -> bool: ...

    def is_supported(self) -> bool: ...

    async def request_permission(self) -> bool: ...

    def notify(self, title: str, body: str) -> None: ...


class LogNotificationSink:
    """Writes notifications to the log. Always supported and permitted."""

    permission_granted = True

    def is_supported(self) -> bool:
        return True

    async def request_permission(self) -> bool:
        return True

    def notify(self, title: str, body: str) -> None:
        logger.info("[notification] %s: %s", title, body)


class CallbackNotificationSink:
    """
    Delegates to a host-provided callable (desktop shell, chat bridge...).

    Args:
        send: Called with (title, body) for each notification
        ask_permission: Async callable returning whether the user allowed
            notifications; when omitted permission is granted on request
    """

    def __init__(
        self,
        send: Callable[[str, str], None],
        ask_permission: Callable[[], Awaitable[bool]] | None = None,
    ):
        self._send = send
        self._ask_permission = ask_permission
        self.permission_granted = False

    def is_supported(self) -> bool:
        return True

    async def request_permission(self) -> bool:
        if self._ask_permission is None:
            self.permission_granted = True
        else:
            self.permission_granted = bool(await self._ask_permission())
        return self.permission_granted

    def notify(self, title: str, body: str) -> None:
        self._send(title, body)


def deliver(sink: NotificationSink, title: str, body: str) -> bool:
    """Raise a notification if permitted. Returns whether it was sent."""
    if not sink.is_supported() or not sink.permission_granted:
        return False
    try:
        sink.notify(title, body)
    except Exception:
        logger.exception("Notification sink failed for %r", title)
        return False
    return True
