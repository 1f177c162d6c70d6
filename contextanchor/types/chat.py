"""Type definitions for the Chat API"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from ._base import CamelModel


class MessageRole(str, Enum):
    """Message roles"""
    USER = "user"
    ASSISTANT = "assistant"


class Source(CamelModel):
    """Document chunk an answer was grounded on"""

    document_id: Optional[str] = None
    document_name: str
    chunk_index: int = Field(..., description="Chunk position in document")
    chunk_content: str
    page_number: Optional[int] = None
    similarity_score: Optional[float] = Field(None, description="Similarity score (0-1)")


class Message(CamelModel):
    """Single entry of a conversation's message log"""

    role: MessageRole
    content: str
    sources: Optional[List[Source]] = None


class ChatRequest(CamelModel):
    """Request schema for the chat endpoint"""

    question: str = Field(..., min_length=1)
    document_ids: List[str] = Field(..., min_length=1, description="Documents to search")
    conversation_id: Optional[str] = Field(None, description="Conversation to continue")


class ChatAnswer(CamelModel):
    """Answer to a chat question, with its citations"""

    conversation_id: str
    answer: str
    sources: List[Source] = Field(default_factory=list)
    timestamp: Optional[datetime] = None


class ConversationMessage(CamelModel):
    """Message as stored in a server-side conversation"""

    id: Optional[str] = None
    role: MessageRole
    content: str
    created_at: Optional[datetime] = None


class Conversation(CamelModel):
    """Conversation with its full message history"""

    id: str
    title: Optional[str] = None
    messages: List[ConversationMessage] = Field(default_factory=list)
    document_ids: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
