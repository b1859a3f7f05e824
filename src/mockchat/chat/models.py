"""Data models for conversations and messages.

Both models are immutable values: every state transition produces a new
instance, so a Conversation handed to a renderer never changes under it.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .identifiers import DEFAULT_TITLE, generate_title


class Sender(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque unique identifier")
    text: str = Field(min_length=1, description="Message content")
    sender: Sender = Field(description="Who wrote the message")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER


class Conversation(BaseModel):
    """A titled, ordered thread of messages."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque unique identifier")
    title: str = Field(default=DEFAULT_TITLE, description="Display title")
    messages: tuple[Message, ...] = Field(
        default=(),
        description="Messages in chronological order"
    )
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def with_message(self, message: Message) -> "Conversation":
        """Return a copy with ``message`` appended.

        The first user message also sets the title; later messages
        leave it untouched.

        Args:
            message: The message to append

        Returns:
            New Conversation with refreshed ``updated_at``
        """
        update: dict = {
            "messages": (*self.messages, message),
            "updated_at": datetime.now(),
        }
        if not self.messages and message.is_user:
            update["title"] = generate_title(message.text)
        return self.model_copy(update=update)
