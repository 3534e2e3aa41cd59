# client/poller.py
"""
Change-Detection Poller.

Two fixed-cadence timers while a session is active:

* requests tick: refetch tickets, compare message counts with the last seen
  values and notify about new tickets (admins, Pending only) and new replies
* refresh tick: refetch assets, plus employees/assignments/maintenance for
  admins, and replace them wholesale

The first requests pass after ``start()`` only records counts. A tick that is
still running when its timer fires again is skipped, not queued.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable

from client.models import AssetRequest, AuthProfile, Collection, RequestStatus
from client.notifications import NotificationSink, deliver
from client.remote import RemoteStoreError
from client.store import IdentitySource, ReconciliationStore, RemoteStore

logger = logging.getLogger(__name__)

ADMIN_COLLECTIONS = (Collection.EMPLOYEES, Collection.ASSIGNMENTS, Collection.MAINTENANCE)


class ChangeDetectionPoller:
    def __init__(
        self,
        remote: RemoteStore,
        store: ReconciliationStore,
        session: IdentitySource,
        notifier: NotificationSink,
        request_interval: float = 8.0,
        refresh_interval: float = 60.0,
    ):
        self.remote = remote
        self.store = store
        self.session = session
        self.notifier = notifier
        self.request_interval = request_interval
        self.refresh_interval = refresh_interval

        self._message_counts: dict[str, int] = {}
        self._initial_load_done = False
        self._permission_requested = False
        self._active = False
        self._generation = 0
        self._timers: list[asyncio.Task] = []
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def running(self) -> bool:
        return self._active

    @property
    def initial_load_done(self) -> bool:
        return self._initial_load_done

    @property
    def message_counts(self) -> dict[str, int]:
        return dict(self._message_counts)

    async def start(self) -> bool:
        """Populate state for the current identity and arm both timers."""
        if self._active:
            return True
        identity = self.session.get_current_identity()
        if identity is None:
            logger.warning("Poller not started: no authenticated identity")
            return False

        self._active = True
        self._generation += 1
        generation = self._generation
        await self._ask_permission_once()

        await self.poll_requests()
        await self.refresh_collections()
        # stopped (and maybe restarted) during the first pass
        if not self._active or generation != self._generation:
            return False

        self._timers = [
            asyncio.create_task(self._every("requests", self.request_interval, self.poll_requests)),
            asyncio.create_task(self._every("refresh", self.refresh_interval, self.refresh_collections)),
        ]
        logger.info(
            "Poller started for %s (requests every %ss, refresh every %ss)",
            identity.email, self.request_interval, self.refresh_interval,
        )
        return True

    async def stop(self) -> None:
        """Cancel timers and in-flight ticks, then forget everything."""
        self._active = False
        self._generation += 1

        tasks = [*self._timers, *self._in_flight.values()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        self._timers = []
        self._in_flight = {}
        self._message_counts = {}
        self._initial_load_done = False
        self.store.clear()
        logger.info("Poller stopped")

    async def _ask_permission_once(self) -> None:
        if self._permission_requested or not self.notifier.is_supported():
            return
        self._permission_requested = True
        try:
            granted = await self.notifier.request_permission()
        except Exception:
            logger.exception("Notification permission request failed")
            return
        if not granted:
            logger.info("Notifications not permitted, continuing without them")

    async def _every(self, name: str, interval: float, tick: Callable[[], Awaitable[None]]) -> None:
        while self._active:
            await asyncio.sleep(interval)
            previous = self._in_flight.get(name)
            if previous is not None and not previous.done():
                logger.warning("Skipping %s tick: previous one still running", name)
                continue
            self._in_flight[name] = asyncio.create_task(self._guarded(name, tick))

    async def _guarded(self, name: str, tick: Callable[[], Awaitable[None]]) -> None:
        try:
            await tick()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Unexpected error in %s tick", name)

    # ---------- Ticks ----------

    async def poll_requests(self) -> None:
        """Fetch tickets, raise notifications for changes, publish to the store."""
        try:
            requests = await self.remote.list(Collection.REQUESTS)
        except RemoteStoreError as exc:
            logger.warning("Request poll failed, keeping previous snapshot: %s", exc)
            return

        if not self._active:
            return

        if self._initial_load_done:
            viewer = self.session.get_current_identity()
            for request in requests:
                self._detect_change(request, viewer)

        self._message_counts = {r.id: r.message_count for r in requests}
        self.store.replace(Collection.REQUESTS, requests)
        self._initial_load_done = True

    def _detect_change(self, request: AssetRequest, viewer: AuthProfile | None) -> None:
        previous = self._message_counts.get(request.id)
        if previous is None:
            if viewer is not None and viewer.is_admin and request.status == RequestStatus.PENDING:
                who = request.user_name or request.employee_id or "An employee"
                deliver(self.notifier, "New Asset Request", f"{who} requested {request.category}")
        elif request.message_count > previous:
            deliver(self.notifier, "New Reply", f"New message on ticket {request.id}")

    async def refresh_collections(self) -> None:
        """Replace the heavier collections wholesale; each fetch fails on its own."""
        identity = self.session.get_current_identity()
        if identity is None:
            return

        collections = [Collection.ASSETS]
        if identity.is_admin:
            collections.extend(ADMIN_COLLECTIONS)

        for collection in collections:
            try:
                items = await self.remote.list(collection)
            except RemoteStoreError as exc:
                logger.warning("Refreshing %s failed, keeping previous snapshot: %s", collection.value, exc)
                continue
            if not self._active:
                return
            self.store.replace(collection, items)
