"""Base client implementation with shared HTTP plumbing and error mapping"""

import logging
from typing import Any, Dict, Optional

import httpx

from .version import __version__
from .exceptions import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    PayloadTooLargeError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Header carrying a static API key for server-to-server callers
API_KEY_HEADER = "X-API-Key"

_STATUS_ERRORS = {
    400: ValidationError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    413: PayloadTooLargeError,
    422: ValidationError,
}


def default_user_agent() -> str:
    return f"contextanchor-python/{__version__}"


def _read_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when possible, else text, None when empty"""
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(response: httpx.Response, body: Any) -> str:
    """Pick the human-readable message out of an error response"""
    if isinstance(body, dict):
        for field in ("message", "detail", "error"):
            value = body.get(field)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()
    return response.reason_phrase or f"HTTP {response.status_code} error"


def build_error(response: httpx.Response, body: Any = None, error_class: Optional[type] = None) -> ApiError:
    """
    Map an error response to the matching exception.

    Args:
        response: HTTP response with a non-2xx status
        body: Decoded body (read from the response when omitted)
        error_class: Force a specific ApiError subclass

    Returns:
        ApiError subclass instance carrying message, status code and body
    """
    if body is None:
        body = _read_body(response)
    message = error_message(response, body)
    status_code = response.status_code

    if error_class is not None:
        return error_class(message, status_code, body)

    if status_code == 429:
        retry_after = response.headers.get("Retry-After")
        return RateLimitError(
            message,
            status_code,
            body,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )
    if status_code >= 500:
        return ServerError(message, status_code, body)
    return _STATUS_ERRORS.get(status_code, ApiError)(message, status_code, body)


def decode_response(response: httpx.Response) -> Any:
    """
    Decode a terminal response or raise for its status.

    "No content" gives None. Non-2xx statuses raise the matching ApiError.
    """
    body = _read_body(response)
    if not response.is_success:
        raise build_error(response, body)
    return body


async def send_request(
    http_client: httpx.AsyncClient,
    method: str,
    path: str,
    **kwargs: Any,
) -> httpx.Response:
    """
    Issue one HTTP call, translating transport failures into NetworkError.

    Raises:
        NetworkError: No response reached the client
    """
    try:
        return await http_client.request(method, path, **kwargs)
    except httpx.TransportError as e:
        logger.warning(f"{method} {path} failed before a response arrived: {e}")
        raise NetworkError(f"Network error: {e}") from e


class BaseClient:
    """
    Base client with shared configuration for the HTTP connection.

    This class provides:
    - HTTP client management
    - Default headers
    - Context manager support
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        api_key: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize base client.

        Args:
            base_url: Base URL for API (e.g. http://localhost:8080/api/v1)
            timeout: Request timeout in seconds (default: 60.0)
            api_key: Optional static API key (sent as X-API-Key)
            user_agent: User-Agent header value

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key or None
        self.user_agent = user_agent or default_user_agent()

        # Will be set by subclasses
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> Dict[str, str]:
        """
        Get default headers sent with every request

        Returns:
            Dict with User-Agent and Accept
        """
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client"""
        if self._http_client:
            await self._http_client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False
