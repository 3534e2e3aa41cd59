# client/remote.py
"""
HTTP access to the AssetGuard REST API.

Plain request functions: no caching, no retries. Every failure, whether
transport, HTTP status, missing session or malformed body, surfaces as
``RemoteStoreError`` so callers can treat them all alike.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
from pydantic import TypeAdapter, ValidationError

from client.models import Collection, ENTITY_TYPES, Entity, Session, TicketMessage

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]

_messages_adapter = TypeAdapter(list[TicketMessage])
_list_adapters = {
    collection: TypeAdapter(list[entity_type]) for collection, entity_type in ENTITY_TYPES.items()
}


class RemoteStoreError(Exception):
    """Raised when a remote call does not succeed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LoginError(RemoteStoreError):
    """Raised when the server rejects the credentials."""
    pass


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("error") or body)
    return str(body)


async def _send(http: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    try:
        response = await http.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise RemoteStoreError(f"{method} {url} failed: {exc}") from exc
    logger.debug("%s %s -> %s", method, url, response.status_code)
    if response.is_error:
        raise RemoteStoreError(
            f"{method} {url} returned {response.status_code}: {_error_detail(response)}",
            status_code=response.status_code,
        )
    return response


class AuthClient:
    """Login and logout calls; these run before/after a token exists."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def login(self, email: str, password: str) -> Session:
        """
        Exchange credentials for an identity and session token.

        Raises:
            LoginError: If the credentials are rejected
            RemoteStoreError: For any other failure
        """
        try:
            response = await _send(
                self._http, "POST", "auth/login",
                json={"email": email, "password": password},
            )
        except RemoteStoreError as exc:
            if exc.status_code in (401, 422):
                raise LoginError("Invalid email or password", exc.status_code) from exc
            raise
        try:
            return Session.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteStoreError(f"Malformed login response: {exc}") from exc

    async def logout(self, token: str) -> None:
        await _send(
            self._http, "POST", "auth/logout",
            headers={"Authorization": f"Bearer {token}"},
        )


class RemoteStoreClient:
    """
    Collection-level access to the API, attributed with the session token.

    Args:
        http: Shared client whose ``base_url`` points at ``/api/v1``
        token_provider: Returns the current session token or None
    """

    def __init__(self, http: httpx.AsyncClient, token_provider: TokenProvider):
        self._http = http
        self._token_provider = token_provider

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider()
        if not token:
            raise RemoteStoreError("No active session", status_code=401)
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return await _send(self._http, method, url, headers=self._auth_headers(), **kwargs)

    async def list(self, collection: Collection) -> list[Entity]:
        response = await self._request("GET", collection.value)
        try:
            return _list_adapters[collection].validate_python(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteStoreError(f"Malformed {collection.value} list: {exc}") from exc

    async def upsert(self, collection: Collection, entity: Entity) -> None:
        await self._request("POST", collection.value, json=entity.to_wire())

    async def delete(self, collection: Collection, entity_id: str) -> None:
        await self._request("DELETE", f"{collection.value}/{entity_id}")

    async def list_messages(self, ticket_id: str) -> list[TicketMessage]:
        response = await self._request("GET", f"requests/{ticket_id}/messages")
        try:
            return _messages_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteStoreError(f"Malformed message list: {exc}") from exc

    async def send_message(self, ticket_id: str, text: str) -> TicketMessage:
        response = await self._request(
            "POST", f"requests/{ticket_id}/messages", json={"message": text}
        )
        try:
            return TicketMessage.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteStoreError(f"Malformed message: {exc}") from exc
