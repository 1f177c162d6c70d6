"""Resource classes for the ContextAnchor client"""

from .documents import AsyncDocumentsResource
from .chat import AsyncChatResource
from .api_keys import AsyncApiKeysResource
from .audit import AsyncAuditResource
from .health import AsyncHealthResource

__all__ = [
    "AsyncDocumentsResource",
    "AsyncChatResource",
    "AsyncApiKeysResource",
    "AsyncAuditResource",
    "AsyncHealthResource",
]
