"""Asynchronous ContextAnchor client"""

import logging
from typing import Any, Callable, Optional

import httpx

from ._base_client import BaseClient
from .config import settings
from .credentials import CredentialStore, FileCredentialStore, InMemoryCredentialStore
from .gateway import RequestGateway
from .resources import (
    AsyncApiKeysResource,
    AsyncAuditResource,
    AsyncChatResource,
    AsyncDocumentsResource,
    AsyncHealthResource,
)
from .session import SessionManager
from .upload import UploadChannel

logger = logging.getLogger(__name__)


class AsyncClient(BaseClient):
    """
    Asynchronous client for the ContextAnchor RAG platform.

    Every authenticated call goes through one gateway that attaches the
    current access token and transparently renews the session when it
    expires mid-request.

    Example:
        >>> async with AsyncClient() as client:
        ...     await client.auth.login("a@b.com", "secret123")
        ...     document = await client.documents.upload("handbook.pdf")
        ...     async for documents in client.documents.watch([document]):
        ...         print(documents[0].status)
        ...     conversation = client.chat.conversation()
        ...     reply = await conversation.send("What is X?", [document.id])
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        credential_store: Optional[CredentialStore] = None,
        on_session_expired: Optional[Callable[[], Any]] = None,
        poll_interval: Optional[float] = None,
        upload_chunk_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize asynchronous ContextAnchor client.

        Unset arguments fall back to ``contextanchor.config.settings``
        (CONTEXTANCHOR_* environment variables).

        Args:
            base_url: Base URL for API (default: http://localhost:8080/api/v1)
            api_key: Static API key for server-to-server use; disables session renewal
            timeout: Request timeout in seconds (default: 60.0)
            credential_store: Where the session lives (default: file store when
                CONTEXTANCHOR_SESSION_FILE is set, in-memory otherwise)
            on_session_expired: Called once whenever a failed renewal ends the session
            poll_interval: Seconds between document status refreshes (default: 3.0)
            upload_chunk_size: Bytes per streamed upload chunk (default: 64 KiB)
            transport: Custom httpx transport (testing, proxies)

        Example:
            >>> client = AsyncClient(base_url="https://rag.example.com/api/v1")
            >>> # or for server-to-server calls:
            >>> client = AsyncClient(api_key="ctx_...")
        """
        super().__init__(
            base_url or settings.BASE_URL,
            timeout if timeout is not None else settings.TIMEOUT,
            api_key if api_key is not None else settings.API_KEY,
            settings.USER_AGENT,
        )
        self.poll_interval = poll_interval if poll_interval is not None else settings.POLL_INTERVAL

        if credential_store is None:
            credential_store = (
                FileCredentialStore(settings.session_file)
                if settings.session_file
                else InMemoryCredentialStore()
            )
        self.credentials = credential_store

        # Initialize async HTTP client
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._get_headers(),
            follow_redirects=True,
            transport=transport,
        )

        self.auth = SessionManager(self._http_client, self.credentials)
        self.gateway = RequestGateway(
            self._http_client,
            self.credentials,
            self.auth,
            api_key=self.api_key,
            on_session_expired=on_session_expired,
        )
        self.uploads = UploadChannel(
            self.gateway,
            chunk_size=upload_chunk_size or settings.UPLOAD_CHUNK_SIZE,
        )

        # Initialize async resource instances
        self.documents = AsyncDocumentsResource(self)
        self.chat = AsyncChatResource(self)
        self.api_keys = AsyncApiKeysResource(self)
        self.audit = AsyncAuditResource(self)
        self.health = AsyncHealthResource(self)

        logger.debug(f"ContextAnchor client for {self.base_url} ({'api key' if self.api_key else 'session'} auth)")

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make an authenticated request and return the decoded body.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            path: Request path (e.g., "/documents")
            **kwargs: Additional arguments passed to httpx (json, params, headers, ...)

        Raises:
            ApiError: Non-2xx response (subclass chosen by status code)
            SessionExpiredError: Session could not be renewed
            NetworkError: Transport failure
        """
        return await self.gateway.send(path, method, **kwargs)
