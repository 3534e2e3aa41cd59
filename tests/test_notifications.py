import logging

import pytest

from client.notifications import CallbackNotificationSink, LogNotificationSink, deliver
from fakes import RecordingNotifier


def test_deliver_requires_permission():
    sink = RecordingNotifier()
    assert deliver(sink, "Title", "Body") is False
    assert sink.sent == []


@pytest.mark.anyio
async def test_deliver_after_permission_granted():
    sink = RecordingNotifier()
    await sink.request_permission()
    assert deliver(sink, "Title", "Body") is True
    assert sink.sent == [("Title", "Body")]


@pytest.mark.anyio
async def test_unsupported_sink_is_skipped():
    sink = RecordingNotifier(supported=False)
    await sink.request_permission()
    assert deliver(sink, "Title", "Body") is False


@pytest.mark.anyio
async def test_failing_sink_is_logged_not_raised(caplog):
    def explode(title, body):
        raise RuntimeError("display gone")

    sink = CallbackNotificationSink(explode)
    await sink.request_permission()
    with caplog.at_level(logging.ERROR, logger="client.notifications"):
        assert deliver(sink, "Title", "Body") is False
    assert "Notification sink failed" in caplog.text


@pytest.mark.anyio
async def test_callback_sink_asks_host_for_permission():
    sent = []

    async def deny():
        return False

    sink = CallbackNotificationSink(lambda t, b: sent.append((t, b)), ask_permission=deny)
    assert await sink.request_permission() is False
    assert deliver(sink, "Title", "Body") is False
    assert sent == []


def test_log_sink(caplog):
    with caplog.at_level(logging.INFO, logger="client.notifications"):
        assert deliver(LogNotificationSink(), "New Reply", "New message on ticket REQ-1")
    assert "New Reply: New message on ticket REQ-1" in caplog.text
