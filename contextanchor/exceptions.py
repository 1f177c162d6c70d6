"""Exception classes for the ContextAnchor client"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds a caller has to handle"""

    NETWORK = "network"
    API = "api"
    AUTH = "auth"
    NO_REFRESH_CREDENTIAL = "no_refresh_credential"
    RENEWAL_FAILED = "renewal_failed"
    SESSION_EXPIRED = "session_expired"
    NO_RESOURCE_SELECTED = "no_resource_selected"
    EMPTY_QUESTION = "empty_question"


class ContextAnchorError(Exception):
    """Base exception for all ContextAnchor client errors"""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class NetworkError(ContextAnchorError):
    """Raised when no response reached the client (status 0)"""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network error", body: Any = None):
        super().__init__(message, status_code=0, body=body)


class ApiError(ContextAnchorError):
    """Raised for any non-2xx response from an authenticated call"""

    kind = ErrorKind.API


class ValidationError(ApiError):
    """Raised when the server rejects the request payload (400, 422)"""
    pass


class AuthenticationError(ApiError):
    """Raised when the credential is missing or rejected (401)"""
    pass


class PermissionDeniedError(ApiError):
    """Raised when the user lacks permission for the resource (403)"""
    pass


class NotFoundError(ApiError):
    """Raised when the resource is not found (404)"""
    pass


class PayloadTooLargeError(ApiError):
    """Raised when an upload exceeds the server's size limit (413)"""
    pass


class RateLimitError(ApiError):
    """Raised when the rate limit is exceeded (429)"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 429,
        body: Any = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message, status_code, body)
        self.retry_after = retry_after


class ServerError(ApiError):
    """Raised for server errors (5xx)"""
    pass


class AuthError(ApiError):
    """Raised when login or registration is refused"""

    kind = ErrorKind.AUTH


class SessionError(ContextAnchorError):
    """Base class for failures that end the current session"""
    pass


class NoRefreshCredentialError(SessionError):
    """Raised when renewal is requested but no refresh credential is stored"""

    kind = ErrorKind.NO_REFRESH_CREDENTIAL

    def __init__(self, message: str = "No refresh token"):
        super().__init__(message)


class RenewalFailedError(SessionError):
    """Raised when the server refuses to renew the session"""

    kind = ErrorKind.RENEWAL_FAILED


class SessionExpiredError(SessionError):
    """Raised after a failed renewal has cleared the session"""

    kind = ErrorKind.SESSION_EXPIRED

    def __init__(self, message: str = "Session expired", status_code: Optional[int] = 401):
        super().__init__(message, status_code)


class LocalValidationError(ContextAnchorError):
    """Base class for input rejected before any network call"""
    pass


class NoResourceSelectedError(LocalValidationError):
    """Raised when a chat message is sent without any document selected"""

    kind = ErrorKind.NO_RESOURCE_SELECTED

    def __init__(self, message: str = "Please select at least one document to search"):
        super().__init__(message)


class EmptyQuestionError(LocalValidationError):
    """Raised when a chat message has no text"""

    kind = ErrorKind.EMPTY_QUESTION

    def __init__(self, message: str = "Question cannot be blank"):
        super().__init__(message)
