"""
Mockchat: a two-pane chat client with simulated assistant replies.

Each module hides a specific design decision: the chat core owns the
conversation state machine, responders own where replies come from, and
the ui and cli packages own presentation.
"""

__version__ = "0.1.0"

from .chat import (
    ChatOrchestrator,
    Conversation,
    ConversationStore,
    Message,
    ResponseSimulator,
    Sender,
    create_orchestrator,
    generate_id,
    generate_title,
)
from .responders import ResponseProvider, create_response_provider

__all__ = [
    "ChatOrchestrator",
    "Conversation",
    "ConversationStore",
    "Message",
    "ResponseProvider",
    "ResponseSimulator",
    "Sender",
    "create_orchestrator",
    "create_response_provider",
    "generate_id",
    "generate_title",
]
