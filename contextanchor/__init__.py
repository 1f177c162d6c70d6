"""ContextAnchor client - Python client for the ContextAnchor RAG platform"""

from .async_client import AsyncClient
from .config import ClientSettings, settings
from .conversation import ConversationOrchestrator
from .credentials import CredentialStore, FileCredentialStore, InMemoryCredentialStore
from .exceptions import (
    ErrorKind,
    ContextAnchorError,
    NetworkError,
    ApiError,
    ValidationError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    PayloadTooLargeError,
    RateLimitError,
    ServerError,
    AuthError,
    SessionError,
    NoRefreshCredentialError,
    RenewalFailedError,
    SessionExpiredError,
    LocalValidationError,
    NoResourceSelectedError,
    EmptyQuestionError,
)
from .gateway import RequestGateway
from .poller import ResourcePoller, merge_by_id
from .session import SessionManager
from .upload import UploadChannel
from .version import __version__

__all__ = [
    "AsyncClient",
    "ClientSettings",
    "settings",
    "ConversationOrchestrator",
    "CredentialStore",
    "FileCredentialStore",
    "InMemoryCredentialStore",
    "RequestGateway",
    "ResourcePoller",
    "merge_by_id",
    "SessionManager",
    "UploadChannel",
    "ErrorKind",
    "ContextAnchorError",
    "NetworkError",
    "ApiError",
    "ValidationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "PayloadTooLargeError",
    "RateLimitError",
    "ServerError",
    "AuthError",
    "SessionError",
    "NoRefreshCredentialError",
    "RenewalFailedError",
    "SessionExpiredError",
    "LocalValidationError",
    "NoResourceSelectedError",
    "EmptyQuestionError",
    "__version__",
]
