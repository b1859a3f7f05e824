"""Simulated assistant replies.

Hides how a reply is produced: an artificial latency, a call to the
response provider, and the append of the assistant message to the store.
"""

import asyncio
import math
import random
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from .errors import ResponseError
from .identifiers import generate_id, truncate
from .models import Message, Sender
from .store import ConversationStore

if TYPE_CHECKING:
    from ..responders.base import ResponseProvider

DEFAULT_MIN_DELAY = 1.0
DEFAULT_MAX_DELAY = 2.0


class ResponseSimulator:
    """Produces one assistant reply per call after a random delay.

    The reply is appended to the conversation as it exists when the
    delay ends, never to the snapshot captured at call time.
    """

    def __init__(
        self,
        store: ConversationStore,
        provider: "ResponseProvider",
        min_delay: float = DEFAULT_MIN_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        rng: random.Random | None = None,
    ) -> None:
        if min_delay < 0 or max_delay < 0:
            raise ValueError("Reply delays must not be negative")
        if max_delay < min_delay:
            raise ValueError(
                f"max_delay ({max_delay}) must be >= min_delay ({min_delay})"
            )
        self._store = store
        self._provider = provider
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._rng = rng or random.Random()
        self._debug_callback: Callable[[str, str, str], None] | None = None

    @property
    def provider(self) -> "ResponseProvider":
        return self._provider

    def set_debug_callback(self, callback: Callable[[str, str, str], None] | None) -> None:
        """Set callback for debug logging.

        Args:
            callback: Function(level, component, message)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Simulator", message)

    def delay(self) -> float:
        """Draw a latency in seconds from [min_delay, max_delay)."""
        span = self._max_delay - self._min_delay
        value = self._min_delay + self._rng.random() * span
        if span > 0:
            # float rounding can land exactly on max_delay
            value = min(value, math.nextafter(self._max_delay, self._min_delay))
        return value

    async def simulate(
        self,
        conversation_id: str,
        new_messages: Sequence[Message],
        snapshot: Sequence[Message],
    ) -> Message | None:
        """Wait, then append one assistant reply to the conversation.

        Args:
            conversation_id: Conversation to answer
            new_messages: The user message(s) that triggered this reply
            snapshot: Conversation messages at the time of the send; passed
                to the provider as context only

        Returns:
            The assistant message, or None if the conversation was deleted
            before the reply was ready

        Raises:
            ResponseError: If the provider fails
        """
        self._store.mark_pending(conversation_id)
        try:
            wait = self.delay()
            self._debug(
                "info",
                f"Replying to {len(new_messages)} message(s) in {conversation_id} "
                f"after {wait:.2f}s"
            )
            await asyncio.sleep(wait)

            try:
                text = await self._provider.respond(conversation_id, tuple(snapshot))
            except Exception as e:
                raise ResponseError(
                    conversation_id,
                    f"{self._provider.provider_type} provider failed: {e}"
                ) from e
            if not text or not text.strip():
                raise ResponseError(
                    conversation_id,
                    f"{self._provider.provider_type} provider returned an empty reply"
                )

            reply = Message(
                id=generate_id(),
                text=text,
                sender=Sender.ASSISTANT,
            )
            self._debug("debug", f"Reply preview: {truncate(text, 60)}")

            if self._store.append_message(conversation_id, reply) is None:
                self._debug("warning", f"Conversation {conversation_id} is gone, reply dropped")
                return None
            return reply
        finally:
            self._store.clear_pending(conversation_id)
