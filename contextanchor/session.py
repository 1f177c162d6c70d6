"""
Session lifecycle: login, registration, renewal and logout

The SessionManager talks to the unauthenticated ``/auth/*`` endpoints directly
(they must never go through the renewal pipeline of the gateway) and writes
every successful result into the injected CredentialStore.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ._base_client import build_error, decode_response, send_request
from ._singleflight import SingleFlight
from .credentials import CredentialStore
from .exceptions import (
    ApiError,
    AuthError,
    ContextAnchorError,
    NoRefreshCredentialError,
    RenewalFailedError,
)
from .types.session import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    Session,
    UserProfile,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """Performs login, registration, logout and credential renewal"""

    def __init__(self, http_client: httpx.AsyncClient, store: CredentialStore):
        self._http_client = http_client
        self._store = store
        self._renewal: SingleFlight[str] = SingleFlight()
        # Bumped whenever the stored session is replaced or dropped outside a renewal
        self._epoch = 0

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def is_authenticated(self) -> bool:
        return self._store.read() is not None

    def current_user(self) -> Optional[UserProfile]:
        """Return the signed-in user's profile, restored from the store"""
        session = self._store.read()
        return session.user if session else None

    async def _authenticate(self, path: str, payload: dict) -> Session:
        response = await send_request(self._http_client, "POST", path, json=payload)

        # Invalid credentials / duplicate registration are the caller's fault
        if 400 <= response.status_code < 500:
            raise build_error(response, error_class=AuthError)

        body = decode_response(response)
        try:
            session = Session.model_validate(body)
        except PydanticValidationError as e:
            logger.warning(f"{path} returned an unreadable session: {e}")
            raise ApiError("Unreadable session in response", response.status_code, body) from e

        self._epoch += 1
        self._store.write(session)
        return session

    def invalidate(self) -> None:
        """Drop the stored session and discard any renewal still in flight"""
        self._epoch += 1
        self._store.clear()

    async def login(self, email: str, password: str) -> Session:
        """
        Sign in and store the resulting session.

        Args:
            email: User email address
            password: User password

        Returns:
            Session: Access/refresh tokens and the user profile

        Raises:
            AuthError: Credentials rejected (4xx)
            NetworkError: Transport failure
            ApiError: Server error
        """
        data = LoginRequest(email=email, password=password).to_wire()
        session = await self._authenticate("/auth/login", data)
        logger.info(f"Logged in as {session.user.email} (tenant {session.user.tenant_name})")
        return session

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        organization_name: str,
    ) -> Session:
        """
        Provision a new tenant with its owning user and sign in as that user.

        Args:
            full_name: Display name of the owner
            email: Owner email address
            password: Password (minimum 8 characters)
            organization_name: Name of the new tenant

        Returns:
            Session: Same shape as login's result

        Raises:
            AuthError: Registration refused (e.g. email already registered)
            NetworkError: Transport failure
            ApiError: Server error
        """
        data = RegisterRequest(
            full_name=full_name,
            email=email,
            password=password,
            organization_name=organization_name,
        ).to_wire()
        session = await self._authenticate("/auth/register", data)
        logger.info(f"Registered {session.user.email} for tenant {session.user.tenant_name}")
        return session

    async def renew(self) -> str:
        """
        Exchange the stored refresh token for a new session.

        Concurrent calls share a single in-flight renewal request.

        Returns:
            str: The new access token

        Raises:
            NoRefreshCredentialError: No refresh token stored (no request made)
            RenewalFailedError: The server refused the refresh token, or the
                renewal request could not be delivered
        """
        return await self._renewal.do(self._renew)

    async def _renew(self) -> str:
        refresh_token = self._store.refresh_token
        if not refresh_token:
            raise NoRefreshCredentialError()

        epoch = self._epoch
        data = RefreshRequest(refresh_token=refresh_token).to_wire()
        try:
            response = await send_request(self._http_client, "POST", "/auth/refresh", json=data)
            session = Session.model_validate(decode_response(response))
        except ContextAnchorError as e:
            logger.warning(f"Session renewal failed: {e.message}")
            raise RenewalFailedError("Refresh failed", e.status_code, e.body) from e
        except PydanticValidationError as e:
            logger.warning(f"Session renewal returned an unreadable session: {e}")
            raise RenewalFailedError("Refresh failed", response.status_code) from e

        if epoch != self._epoch:
            logger.warning("Session changed while renewing, discarding renewed session")
            # A login that landed meanwhile stays in place
            current = self._store.access_token
            if current:
                return current
            raise RenewalFailedError("Session was cleared during renewal")

        self._store.write(session)
        logger.info("Session renewed")
        return session.access_token

    async def logout(self) -> None:
        """
        Invalidate the session remotely (best effort) and clear it locally.

        A failed remote call is logged and ignored; the local session is
        cleared regardless.
        """
        access_token = self._store.access_token
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        try:
            response = await send_request(self._http_client, "POST", "/auth/logout", headers=headers)
            decode_response(response)
        except ContextAnchorError as e:
            logger.info(f"Remote logout failed, clearing local session anyway: {e.message}")
        finally:
            self.invalidate()
        logger.info("Logged out")
