"""
Optimistic chat exchanges with rollback

Sending a question is a two-phase local transaction over the message log:
the user's message is applied tentatively before the request leaves, then
either confirmed (the assistant's answer is inserted right after it) or
reverted (the user's message is removed and the input text handed back).
Each exchange tracks its own user message, so rapid or overlapping sends
never remove or answer the wrong entry.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from .exceptions import EmptyQuestionError, NoResourceSelectedError
from .types.chat import ChatAnswer, Message, MessageRole

if TYPE_CHECKING:
    from .resources.chat import AsyncChatResource

logger = logging.getLogger(__name__)


class PendingExchange:
    """Tentatively applied user message awaiting confirm or revert"""

    def __init__(self, orchestrator: "ConversationOrchestrator", question: str):
        self._orchestrator = orchestrator
        self.generation = orchestrator.generation
        self.user_message = Message(role=MessageRole.USER, content=question)
        self.settled = False

    @property
    def stale(self) -> bool:
        return self.generation != self._orchestrator.generation

    def apply(self) -> None:
        self._orchestrator._messages.append(self.user_message)

    def _index(self) -> int:
        for i, message in enumerate(self._orchestrator._messages):
            if message is self.user_message:
                return i
        return -1

    def commit(self, answer: ChatAnswer) -> Optional[Message]:
        """Insert the assistant reply after the user message; None if superseded"""
        self.settled = True
        if self.stale:
            logger.debug("Dropping chat answer for a conversation that is no longer open")
            return None

        reply = Message(
            role=MessageRole.ASSISTANT,
            content=answer.answer,
            sources=list(answer.sources),
        )
        index = self._index()
        self._orchestrator._messages.insert(index + 1, reply)
        self._orchestrator._adopt(answer.conversation_id)
        return reply

    def revert(self) -> bool:
        """Remove the user message; False if the conversation moved on meanwhile"""
        self.settled = True
        if self.stale:
            return False
        index = self._index()
        if index >= 0:
            del self._orchestrator._messages[index]
        return True


class ConversationOrchestrator:
    """
    Local view of one conversation, kept in sync with the chat API.

    Example:
        >>> conversation = client.chat.conversation()
        >>> reply = await conversation.send("What is X?", ["d1"])
        >>> conversation.conversation_id  # assigned by the server
    """

    def __init__(
        self,
        chat: "AsyncChatResource",
        conversation_id: Optional[str] = None,
        messages: Optional[Iterable[Message]] = None,
    ):
        self._chat = chat
        self.conversation_id = conversation_id
        self._messages: List[Message] = list(messages or [])
        self.draft = ""
        self.generation = 0
        self._pending = 0

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def is_anonymous(self) -> bool:
        return self.conversation_id is None

    @property
    def sending(self) -> bool:
        return self._pending > 0

    def _adopt(self, conversation_id: Optional[str]) -> None:
        # Anonymous -> identified happens once, on the first successful exchange
        if self.conversation_id is None and conversation_id:
            self.conversation_id = conversation_id
            logger.debug(f"Conversation identified as {conversation_id}")

    async def send(self, text: str, document_ids: Iterable[str]) -> Optional[Message]:
        """
        Ask a question within this conversation.

        Args:
            text: Question text
            document_ids: Documents to search (at least one)

        Returns:
            Message: The assistant's reply, or None when the conversation was
            replaced (new_conversation/open) before the answer arrived

        Raises:
            EmptyQuestionError: Blank text (no request made)
            NoResourceSelectedError: No document selected (no request made)
            ApiError / NetworkError / SessionExpiredError: The request failed;
                the user message was rolled back and ``draft`` holds the text
        """
        question = (text or "").strip()
        if not question:
            raise EmptyQuestionError()
        document_ids = list(document_ids or [])
        if not document_ids:
            raise NoResourceSelectedError()

        exchange = PendingExchange(self, question)
        exchange.apply()
        self.draft = ""
        self._pending += 1
        try:
            answer = await self._chat.send(question, document_ids, self.conversation_id)
        except BaseException as e:
            if exchange.revert():
                self.draft = text
            logger.warning(f"Chat request failed, message rolled back: {e}")
            raise
        finally:
            self._pending -= 1

        return exchange.commit(answer)

    def new_conversation(self) -> None:
        """Start over with an empty, anonymous conversation"""
        self.generation += 1
        self.conversation_id = None
        self._messages = []
        self.draft = ""

    async def open(self, conversation_id: str) -> None:
        """
        Replace the local state with a stored conversation's history.

        If loading fails the orchestrator falls back to a new anonymous
        conversation and the error is re-raised.
        """
        self.generation += 1
        generation = self.generation
        try:
            conversation = await self._chat.get_conversation(conversation_id)
        except BaseException:
            if generation == self.generation:
                self.new_conversation()
            raise

        if generation != self.generation:
            return

        self.conversation_id = conversation.id
        self._messages = [
            Message(role=m.role, content=m.content) for m in conversation.messages
        ]
        self.draft = ""
