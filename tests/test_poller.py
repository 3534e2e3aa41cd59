import asyncio
import logging

import pytest

from client.models import Collection, RequestStatus
from client.poller import ChangeDetectionPoller
from client.store import ReconciliationStore
from fakes import (
    ADMIN,
    USER,
    FakeRemote,
    RecordingNotifier,
    StaticIdentity,
    make_asset,
    make_employee,
    make_request,
    settle,
)

# Long enough that timers never fire unless a test asks for it
IDLE = 3600.0


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def notifier():
    return RecordingNotifier()


def build(remote, notifier, identity=ADMIN, request_interval=IDLE, refresh_interval=IDLE):
    session = StaticIdentity(identity)
    store = ReconciliationStore(remote, identity=session)
    poller = ChangeDetectionPoller(
        remote, store, session, notifier,
        request_interval=request_interval,
        refresh_interval=refresh_interval,
    )
    return poller, store


@pytest.mark.anyio
async def test_first_load_never_notifies(remote, notifier):
    remote.seed(
        Collection.REQUESTS,
        make_request("REQ-1", message_count=2),
        make_request("REQ-2", message_count=0),
        make_request("REQ-3", message_count=7),
    )
    poller, store = build(remote, notifier)

    assert await poller.start()
    assert notifier.sent == []
    assert poller.initial_load_done
    assert poller.message_counts == {"REQ-1": 2, "REQ-2": 0, "REQ-3": 7}
    assert [r.id for r in store.requests] == ["REQ-1", "REQ-2", "REQ-3"]
    await poller.stop()


@pytest.mark.anyio
async def test_new_pending_ticket_notifies_admin_once(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    poller, _ = build(remote, notifier)
    await poller.start()

    remote.seed(
        Collection.REQUESTS,
        make_request("REQ-1", message_count=2),
        make_request("REQ-2", message_count=0, user_name="John Smith", category="Headset"),
    )
    await poller.poll_requests()

    assert notifier.sent == [("New Asset Request", "John Smith requested Headset")]
    await poller.stop()


@pytest.mark.anyio
@pytest.mark.parametrize(
    "identity, status",
    [(USER, RequestStatus.PENDING), (ADMIN, RequestStatus.APPROVED)],
)
async def test_new_ticket_silent_unless_admin_and_pending(remote, notifier, identity, status):
    poller, _ = build(remote, notifier, identity=identity)
    await poller.start()

    remote.seed(Collection.REQUESTS, make_request("REQ-2", status=status))
    await poller.poll_requests()

    assert notifier.sent == []
    assert poller.message_counts == {"REQ-2": 0}
    await poller.stop()


@pytest.mark.anyio
async def test_new_reply_notifies_once_per_tick(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    poller, _ = build(remote, notifier, identity=USER)
    await poller.start()

    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=5))
    await poller.poll_requests()

    assert notifier.sent == [("New Reply", "New message on ticket REQ-1")]
    assert poller.message_counts == {"REQ-1": 5}

    # Nothing changed since: no repeat
    await poller.poll_requests()
    assert len(notifier.sent) == 1
    await poller.stop()


@pytest.mark.anyio
async def test_vanished_ticket_dropped_silently(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1"), make_request("REQ-2"))
    poller, store = build(remote, notifier)
    await poller.start()

    remote.seed(Collection.REQUESTS, make_request("REQ-2"))
    await poller.poll_requests()

    assert notifier.sent == []
    assert poller.message_counts == {"REQ-2": 0}
    assert [r.id for r in store.requests] == ["REQ-2"]
    await poller.stop()


@pytest.mark.anyio
async def test_failed_fetch_keeps_previous_snapshot(remote, notifier, caplog):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=1))
    poller, store = build(remote, notifier)
    await poller.start()

    remote.fail_list.add(Collection.REQUESTS)
    with caplog.at_level(logging.WARNING, logger="client.poller"):
        await poller.poll_requests()

    assert [r.id for r in store.requests] == ["REQ-1"]
    assert poller.message_counts == {"REQ-1": 1}
    assert "keeping previous snapshot" in caplog.text

    # Next successful tick still detects the reply
    remote.fail_list.clear()
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    await poller.poll_requests()
    assert [t for t, _ in notifier.sent] == ["New Reply"]
    await poller.stop()


@pytest.mark.anyio
async def test_failed_first_load_still_suppresses(remote, notifier):
    remote.fail_list.add(Collection.REQUESTS)
    poller, _ = build(remote, notifier)
    await poller.start()
    assert not poller.initial_load_done

    remote.fail_list.clear()
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=3))
    await poller.poll_requests()

    assert notifier.sent == []
    assert poller.initial_load_done
    await poller.stop()


# --- Heavy refresh ---

@pytest.mark.anyio
async def test_refresh_for_admin_loads_everything(remote, notifier):
    remote.seed(Collection.ASSETS, make_asset("AST-1"))
    remote.seed(Collection.EMPLOYEES, make_employee("EMP-1"))
    poller, store = build(remote, notifier, identity=ADMIN)
    await poller.start()

    assert [a.id for a in store.assets] == ["AST-1"]
    assert [e.id for e in store.employees] == ["EMP-1"]
    for collection in Collection:
        assert remote.list_calls(collection) == 1
    await poller.stop()


@pytest.mark.anyio
async def test_refresh_for_user_skips_admin_collections(remote, notifier):
    remote.seed(Collection.ASSETS, make_asset("AST-1"))
    remote.seed(Collection.EMPLOYEES, make_employee("EMP-1"))
    poller, store = build(remote, notifier, identity=USER)
    await poller.start()

    assert [a.id for a in store.assets] == ["AST-1"]
    assert store.employees == []
    assert remote.list_calls(Collection.EMPLOYEES) == 0
    assert remote.list_calls(Collection.ASSIGNMENTS) == 0
    assert remote.list_calls(Collection.MAINTENANCE) == 0
    await poller.stop()


@pytest.mark.anyio
async def test_refresh_failure_is_per_collection(remote, notifier):
    remote.seed(Collection.EMPLOYEES, make_employee("EMP-1"))
    poller, store = build(remote, notifier)
    await poller.start()

    remote.fail_list.add(Collection.EMPLOYEES)
    remote.seed(Collection.EMPLOYEES, make_employee("EMP-1"), make_employee("EMP-2"))
    remote.seed(Collection.ASSETS, make_asset("AST-NEW"))
    await poller.refresh_collections()

    assert [a.id for a in store.assets] == ["AST-NEW"]
    assert [e.id for e in store.employees] == ["EMP-1"]
    await poller.stop()


# --- Lifecycle ---

@pytest.mark.anyio
async def test_start_requires_identity(remote, notifier):
    poller, _ = build(remote, notifier, identity=None)
    assert await poller.start() is False
    assert not poller.running
    assert remote.calls == []


@pytest.mark.anyio
async def test_permission_requested_once(remote, notifier):
    poller, _ = build(remote, notifier)
    await poller.start()
    await poller.stop()
    await poller.start()
    await poller.stop()
    assert notifier.permission_requests == 1


@pytest.mark.anyio
async def test_denied_permission_disables_notifications(remote):
    notifier = RecordingNotifier(grant=False)
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=1))
    poller, _ = build(remote, notifier)
    await poller.start()

    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=4))
    await poller.poll_requests()

    assert notifier.sent == []
    assert poller.message_counts == {"REQ-1": 4}
    await poller.stop()


@pytest.mark.anyio
async def test_timers_drive_polling(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=0))
    poller, _ = build(remote, notifier, request_interval=0.01)
    await poller.start()

    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=1))
    for _ in range(100):
        if notifier.sent:
            break
        await asyncio.sleep(0.01)

    assert notifier.sent == [("New Reply", "New message on ticket REQ-1")]
    await poller.stop()


@pytest.mark.anyio
async def test_overlapping_tick_is_skipped(remote, notifier, caplog):
    poller, _ = build(remote, notifier, request_interval=0.01)
    await poller.start()

    remote.list_gate = asyncio.Event()
    before = remote.list_calls(Collection.REQUESTS)
    with caplog.at_level(logging.WARNING, logger="client.poller"):
        await asyncio.sleep(0.1)

    # One tick stuck in flight, the rest skipped
    assert remote.list_calls(Collection.REQUESTS) == before + 1
    assert "Skipping requests tick" in caplog.text

    await poller.stop()
    remote.list_gate.set()


@pytest.mark.anyio
async def test_stop_clears_state(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    remote.seed(Collection.ASSETS, make_asset("AST-1"))
    poller, store = build(remote, notifier)
    await poller.start()

    await poller.stop()

    assert not poller.running
    assert poller.message_counts == {}
    assert not poller.initial_load_done
    for collection in Collection:
        assert store.snapshot(collection) == []


@pytest.mark.anyio
async def test_no_notification_after_stop(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    poller, store = build(remote, notifier, request_interval=0.01)
    await poller.start()
    await poller.stop()

    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=9))
    await asyncio.sleep(0.05)

    assert notifier.sent == []
    assert store.requests == []


@pytest.mark.anyio
async def test_tick_in_flight_during_stop_is_discarded(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=2))
    poller, store = build(remote, notifier)
    await poller.start()

    remote.list_gate = asyncio.Event()
    remote.seed(Collection.REQUESTS, make_request("REQ-1", message_count=3))
    tick = asyncio.create_task(poller.poll_requests())
    await settle()

    await poller.stop()
    remote.list_gate.set()
    await tick

    assert notifier.sent == []
    assert store.requests == []
    assert poller.message_counts == {}


def timer_tasks(poller):
    return [
        t for t in asyncio.all_tasks()
        if not t.done()
        and t.get_coro().__qualname__ == "ChangeDetectionPoller._every"
        and t.get_coro().cr_frame.f_locals.get("self") is poller
    ]


@pytest.mark.anyio
async def test_restart_during_first_load_arms_one_pair_of_timers(remote, notifier):
    remote.seed(Collection.REQUESTS, make_request("REQ-1"))
    poller, _ = build(remote, notifier)
    remote.list_gate = asyncio.Event()

    first = asyncio.create_task(poller.start())
    await settle()
    await poller.stop()
    second = asyncio.create_task(poller.start())
    await settle()
    remote.list_gate.set()

    assert await first is False
    assert await second is True
    assert poller.running
    assert len(timer_tasks(poller)) == 2

    await poller.stop()
    await settle()
    assert timer_tasks(poller) == []
