"""Chat resource implementation"""

from typing import TYPE_CHECKING, Iterable, List, Optional

from ..conversation import ConversationOrchestrator
from ..types.chat import ChatAnswer, ChatRequest, Conversation

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncChatResource:
    """Asynchronous Chat resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def send(
        self,
        question: str,
        document_ids: Iterable[str],
        conversation_id: Optional[str] = None,
    ) -> ChatAnswer:
        """
        Ask a question answered from the selected documents.

        Args:
            question: Question text
            document_ids: Documents to search (at least one)
            conversation_id: Continue an existing conversation (None starts one)

        Returns:
            ChatAnswer: Answer, source citations and the conversation id
        """
        data = ChatRequest(
            question=question,
            document_ids=list(document_ids),
            conversation_id=conversation_id,
        ).to_wire()
        response = await self._client.gateway.send("/chat", "POST", json=data)
        return ChatAnswer.model_validate(response)

    async def list_conversations(self) -> List[Conversation]:
        """List conversations, most recently updated first"""
        data = await self._client.gateway.send("/chat/conversations")
        return [Conversation.model_validate(item) for item in data or []]

    async def get_conversation(self, conversation_id: str) -> Conversation:
        """
        Get a conversation with its full message history.

        Raises:
            NotFoundError: Conversation not found
        """
        data = await self._client.gateway.send(f"/chat/conversations/{conversation_id}")
        return Conversation.model_validate(data)

    async def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation and all its messages"""
        await self._client.gateway.send(f"/chat/conversations/{conversation_id}", "DELETE")

    def conversation(self, conversation_id: Optional[str] = None) -> ConversationOrchestrator:
        """
        Create a local conversation with optimistic sends.

        Args:
            conversation_id: Continue this conversation (load its history with
                ``await conversation.open(conversation_id)``)
        """
        return ConversationOrchestrator(self, conversation_id=conversation_id)
