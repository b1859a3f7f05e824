"""Conversation core for mockchat.

Framework-independent state machine: data models, the in-memory store,
the reply simulator and the orchestrator that ties them together.
"""

from .errors import MockChatError, ResponseError
from .identifiers import DEFAULT_TITLE, TITLE_MAX_LENGTH, generate_id, generate_title
from .models import Conversation, Message, Sender
from .store import ConversationStore
from .simulator import ResponseSimulator
from .orchestrator import ChatOrchestrator
from .factory import create_orchestrator

__all__ = [
    "DEFAULT_TITLE",
    "TITLE_MAX_LENGTH",
    "ChatOrchestrator",
    "Conversation",
    "ConversationStore",
    "Message",
    "MockChatError",
    "ResponseError",
    "ResponseSimulator",
    "Sender",
    "create_orchestrator",
    "generate_id",
    "generate_title",
]
