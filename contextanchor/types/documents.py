"""Type definitions for the Documents API"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from ._base import CamelModel


class DocumentStatus(str, Enum):
    """Server-side processing stages of an uploaded document"""

    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    CHUNKING = "CHUNKING"
    EMBEDDING = "EMBEDDING"
    READY = "READY"
    ERROR = "ERROR"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.READY, DocumentStatus.ERROR)


class Document(CamelModel):
    """Schema for document responses"""

    id: str
    original_name: str
    content_type: Optional[str] = Field(None, description="MIME type")
    file_size_bytes: Optional[int] = Field(None, alias="fileSize", description="File size in bytes")
    page_count: Optional[int] = None
    chunk_count: Optional[int] = Field(None, description="Number of chunks created")
    status: DocumentStatus = Field(..., description="Processing status")
    error_message: Optional[str] = Field(None, description="Error message if processing failed")
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal
