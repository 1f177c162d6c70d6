"""
Authenticated request gateway

Every authenticated call goes through RequestGateway.request(). It injects the
current bearer token, and when the server answers 401 while a refresh token is
available it renews the session once and retries the call exactly once with
the new token. Renewal is coalesced across concurrent callers: however many
requests fail together, one renewal request is made and, if it fails, the
session is cleared and the expiry hook fires once.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from ._base_client import API_KEY_HEADER, decode_response, send_request
from ._singleflight import SingleFlight
from .credentials import CredentialStore
from .exceptions import ContextAnchorError, SessionExpiredError
from .session import SessionManager

logger = logging.getLogger(__name__)


def _has_header(headers: Dict[str, str], name: str) -> bool:
    name = name.lower()
    return any(key.lower() == name for key in headers)


class RequestGateway:
    """Single choke point for authenticated network calls"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        store: CredentialStore,
        session_manager: SessionManager,
        api_key: Optional[str] = None,
        on_session_expired: Optional[Callable[[], Any]] = None,
    ):
        """
        Args:
            http_client: Shared async HTTP client (base URL already set)
            store: Credential store holding the current session
            session_manager: Used to renew the session on 401
            api_key: Static API key; when set, calls carry X-API-Key and never renew
            on_session_expired: Called once each time a failed renewal ends the session
        """
        self._http_client = http_client
        self._store = store
        self._session_manager = session_manager
        self._api_key = api_key
        self._on_session_expired = on_session_expired
        self._recovery: SingleFlight[str] = SingleFlight()

    @property
    def uses_api_key(self) -> bool:
        return bool(self._api_key)

    async def send(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Make an authenticated request and decode its body.

        Args:
            path: Request path relative to the base URL (e.g. "/documents")
            method: HTTP method
            headers: Extra headers; an explicit Authorization header is kept as-is
            **kwargs: Passed to httpx (json, params, content, ...)

        Returns:
            Decoded JSON body, text, or None for "no content"

        Raises:
            ApiError: Non-2xx response (subclass chosen by status)
            SessionExpiredError: Renewal failed and the session was cleared
            NetworkError: Transport failure
        """
        response = await self.request(method, path, headers=headers, **kwargs)
        return decode_response(response)

    async def request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Same pipeline as send() but returns the raw terminal response"""
        headers = dict(headers or {})

        if self._api_key:
            headers.setdefault(API_KEY_HEADER, self._api_key)
            return await send_request(self._http_client, method, path, headers=headers, **kwargs)

        sent_token: Optional[str] = None
        if not _has_header(headers, "Authorization"):
            sent_token = self._store.access_token
            if sent_token:
                headers["Authorization"] = f"Bearer {sent_token}"

        response = await send_request(self._http_client, method, path, headers=headers, **kwargs)
        if response.status_code != 401:
            return response

        if not self._store.refresh_token:
            logger.debug(f"{method} {path} returned 401 with no refresh token available")
            return response

        access_token = await self._recover(sent_token)
        headers = {k: v for k, v in headers.items() if k.lower() != "authorization"}
        headers["Authorization"] = f"Bearer {access_token}"

        logger.debug(f"Retrying {method} {path} with renewed credentials")
        return await send_request(self._http_client, method, path, headers=headers, **kwargs)

    async def _recover(self, stale_token: Optional[str]) -> str:
        """
        Get a usable access token after a 401.

        A token different from the one the failed call carried means another
        caller already renewed; it is reused without a new renewal.
        """
        current = self._store.access_token
        if stale_token and current and current != stale_token:
            return current

        await self._recovery.do(self._renew_or_expire)

        # Read back from the store: the retry must use the latest credential
        current = self._store.access_token
        if not current:
            raise SessionExpiredError()
        return current

    async def _renew_or_expire(self) -> str:
        try:
            return await self._session_manager.renew()
        except ContextAnchorError as e:
            logger.warning(f"Session expired: {e.message}")
            self._session_manager.invalidate()
            self._notify_expired()
            raise SessionExpiredError() from e

    def _notify_expired(self) -> None:
        if self._on_session_expired is None:
            return
        try:
            self._on_session_expired()
        except Exception:
            logger.exception("on_session_expired hook raised")
