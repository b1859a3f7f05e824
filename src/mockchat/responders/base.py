"""Abstract base class for response providers.

This module hides the design decision of where assistant replies come
from. The orchestrator only ever talks to this interface, so a canned
provider can be swapped for a real backend without touching it.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..chat.models import Message


class ResponseProvider(ABC):
    """Abstract source of assistant replies.

    Supports async context manager protocol for resource cleanup:
        async with provider:
            text = await provider.respond(conversation_id, history)
    """

    @abstractmethod
    async def respond(self, conversation_id: str, history: Sequence[Message]) -> str:
        """Produce the text of the next assistant reply.

        Args:
            conversation_id: Conversation being answered
            history: Messages of the conversation, oldest first, ending
                with the user message(s) to answer

        Returns:
            Non-empty reply text
        """

    async def close(self) -> None:
        """Release any resources held by the provider."""

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """Get the provider type identifier."""

    async def __aenter__(self) -> "ResponseProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
