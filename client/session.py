# client/session.py
"""
Session Holder: who is logged in, and the token every remote call carries.

The identity and token are mirrored to durable storage on login and restored
at startup. A stored payload that does not look like a current session is
discarded rather than trusted.
"""
import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from client.models import AuthProfile, Session
from client.remote import AuthClient, RemoteStoreError

logger = logging.getLogger(__name__)


class SessionStorage(Protocol):
    def load(self) -> str | None: ...
    def save(self, payload: str) -> None: ...
    def clear(self) -> None: ...


class FileSessionStorage:
    """Session payload in a JSON file (desktop shell profile directory)."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemorySessionStorage:
    def __init__(self, payload: str | None = None):
        self.payload = payload

    def load(self) -> str | None:
        return self.payload

    def save(self, payload: str) -> None:
        self.payload = payload

    def clear(self) -> None:
        self.payload = None


class SessionHolder:
    """Single source of truth for the logged-in identity."""

    def __init__(self, auth: AuthClient, storage: SessionStorage):
        self._auth = auth
        self._storage = storage
        self._session: Session | None = None

    def get_current_identity(self) -> AuthProfile | None:
        return self._session.user if self._session else None

    def get_token(self) -> str | None:
        return self._session.token if self._session else None

    def restore(self) -> AuthProfile | None:
        """Load a stored session, discarding anything of the wrong shape."""
        try:
            payload = self._storage.load()
        except UnicodeDecodeError:
            logger.info("Clearing unreadable stored session")
            self._clear_storage()
            return None
        except OSError as exc:
            logger.warning("Failed to read stored session: %s", exc)
            return None
        if not payload:
            return None

        try:
            self._session = Session.model_validate_json(payload)
        except ValidationError:
            logger.info("Clearing stored session in an outdated format")
            self._session = None
            self._clear_storage()
            return None

        logger.info("Restored session for %s (%s)", self._session.user.email, self._session.user.role)
        return self._session.user

    async def login(self, email: str, password: str) -> Session:
        """
        Authenticate and persist the new session.

        Raises:
            LoginError: If the credentials are rejected
            RemoteStoreError: If the server cannot be reached
        """
        session = await self._auth.login(email, password)
        self._session = session
        try:
            self._storage.save(session.model_dump_json(by_alias=True))
        except OSError as exc:
            logger.warning("Failed to persist session: %s", exc)
        logger.info("Logged in as %s (%s)", session.user.email, session.user.role)
        return session

    async def logout(self) -> None:
        """Tell the server (best effort) and forget the session locally."""
        token = self.get_token()
        if token:
            try:
                await self._auth.logout(token)
            except RemoteStoreError as exc:
                logger.warning("Logout request failed: %s", exc)

        self._session = None
        self._clear_storage()

    def _clear_storage(self) -> None:
        try:
            self._storage.clear()
        except OSError as exc:
            logger.warning("Failed to clear stored session: %s", exc)
