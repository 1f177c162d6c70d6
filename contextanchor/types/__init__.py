"""Type definitions for the ContextAnchor client"""

from .session import (
    UserProfile,
    Session,
    LoginRequest,
    RegisterRequest,
    RefreshRequest,
)
from .documents import DocumentStatus, Document
from .chat import (
    MessageRole,
    Source,
    Message,
    ChatRequest,
    ChatAnswer,
    ConversationMessage,
    Conversation,
)
from .api_keys import ApiKey, CreatedApiKey
from .audit import AuditAction, AuditEntry, AuditPage
from .health import HealthStatus

__all__ = [
    "UserProfile",
    "Session",
    "LoginRequest",
    "RegisterRequest",
    "RefreshRequest",
    "DocumentStatus",
    "Document",
    "MessageRole",
    "Source",
    "Message",
    "ChatRequest",
    "ChatAnswer",
    "ConversationMessage",
    "Conversation",
    "ApiKey",
    "CreatedApiKey",
    "AuditAction",
    "AuditEntry",
    "AuditPage",
    "HealthStatus",
]
