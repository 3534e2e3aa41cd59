# client/app.py
"""
Composition root of the client core.

One ``AssetGuardClient`` per running process: it owns the HTTP connection
pool, the session, the store and the poller, and ties their lifecycles
together (login starts polling, logout and teardown stop it).
"""
import logging

import httpx

from client.models import AuthProfile
from client.notifications import LogNotificationSink, NotificationSink
from client.poller import ChangeDetectionPoller
from client.remote import AuthClient, RemoteStoreClient, RemoteStoreError
from client.session import FileSessionStorage, SessionHolder, SessionStorage
from client.store import Clock, ReconciliationStore, utc_now
from config import AppSettings, settings as default_settings

logger = logging.getLogger(__name__)


class AssetGuardClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        session: SessionHolder,
        remote: RemoteStoreClient,
        store: ReconciliationStore,
        poller: ChangeDetectionPoller,
    ):
        self.http = http
        self.session = session
        self.remote = remote
        self.store = store
        self.poller = poller

    @classmethod
    async def create(
        cls,
        settings: AppSettings | None = None,
        *,
        notifier: NotificationSink | None = None,
        storage: SessionStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock = utc_now,
    ) -> "AssetGuardClient":
        """
        Wire up every component and resume a stored session if there is one.

        Args:
            settings: Defaults to the settings for the current MODE
            notifier: Defaults to writing notifications to the log
            storage: Defaults to the file at ``settings.SESSION_FILE``
            transport: Custom httpx transport (e.g. ASGI app in tests)
            clock: Source of "now" for the store
        """
        settings = settings or default_settings
        base_url = settings.API_BASE_URL.rstrip("/") + "/"
        http = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.HTTP_TIMEOUT,
            transport=transport,
        )

        session = SessionHolder(
            AuthClient(http),
            storage or FileSessionStorage(settings.SESSION_FILE),
        )
        remote = RemoteStoreClient(http, token_provider=session.get_token)
        store = ReconciliationStore(remote, identity=session, clock=clock)
        poller = ChangeDetectionPoller(
            remote,
            store,
            session,
            notifier or LogNotificationSink(),
            request_interval=settings.REQUEST_POLL_INTERVAL,
            refresh_interval=settings.FULL_REFRESH_INTERVAL,
        )
        client = cls(http, session, remote, store, poller)

        if session.restore() is not None:
            await poller.start()
        return client

    @property
    def identity(self) -> AuthProfile | None:
        return self.session.get_current_identity()

    async def login(self, email: str, password: str) -> bool:
        """Returns False (and logs) when the login is rejected or fails."""
        if self.poller.running:
            await self.logout()
        try:
            await self.session.login(email, password)
        except RemoteStoreError as exc:
            logger.warning("Login failed for %s: %s", email, exc)
            return False
        await self.poller.start()
        return True

    async def logout(self) -> None:
        # writes still carry the outgoing token
        await self.store.flush()
        await self.poller.stop()
        await self.session.logout()

    async def teardown(self) -> None:
        """Let pending writes settle, stop polling, release the connection pool."""
        await self.store.flush()
        await self.poller.stop()
        await self.http.aclose()
