"""Type definitions for the Audit API"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from ._base import CamelModel


class AuditAction(str, Enum):
    """Action names recorded by the server"""

    USER_REGISTER = "USER_REGISTER"
    USER_LOGIN = "USER_LOGIN"
    USER_LOGIN_FAILED = "USER_LOGIN_FAILED"
    TOKEN_REFRESH = "TOKEN_REFRESH"
    USER_LOGOUT = "USER_LOGOUT"
    DOCUMENT_UPLOAD = "DOCUMENT_UPLOAD"
    DOCUMENT_DELETE = "DOCUMENT_DELETE"
    DOCUMENT_PROCESSING_COMPLETE = "DOCUMENT_PROCESSING_COMPLETE"
    DOCUMENT_PROCESSING_FAILED = "DOCUMENT_PROCESSING_FAILED"
    CHAT_QUERY = "CHAT_QUERY"
    CONVERSATION_DELETE = "CONVERSATION_DELETE"
    API_KEY_CREATED = "API_KEY_CREATED"
    API_KEY_REVOKED = "API_KEY_REVOKED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class AuditEntry(CamelModel):
    """Server-authored audit record (read-only)"""

    model_config = ConfigDict(frozen=True)

    id: str
    tenant_id: Optional[str] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    action: str
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    request_path: Optional[str] = None
    created_at: Optional[datetime] = None


class AuditPage(CamelModel):
    """One page of audit entries"""

    content: List[AuditEntry] = Field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    number: int = Field(0, description="Zero-based page index")
    size: int = 20
