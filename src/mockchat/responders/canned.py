"""Canned and echo response providers.

Replies are produced locally without any I/O.
"""

import random
from collections.abc import Sequence
from pathlib import Path

from ..chat.models import Message
from .base import ResponseProvider

DEFAULT_RESPONSES: tuple[str, ...] = (
    "That's an interesting question! Let me think about that for a moment.",
    "I'd be happy to help you with that. Here's what I think about it...",
    "Great question! This is a complex topic that requires careful consideration.",
    "I appreciate your curiosity. Let me provide you with some insights.",
    "That's something many people wonder about. Here's my perspective...",
    "Absolutely! This is a fascinating area to explore.",
    "I see what you're asking. The answer involves several key points.",
)


def load_responses(path: str | Path) -> tuple[str, ...]:
    """Read canned responses from a text file, one per non-blank line.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no responses
    """
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    responses = tuple(line.strip() for line in lines if line.strip())
    if not responses:
        raise ValueError(f"No responses found in {path}")
    return responses


class CannedResponseProvider(ResponseProvider):
    """Picks a reply uniformly at random from a fixed set."""

    def __init__(
        self,
        responses: Sequence[str] = DEFAULT_RESPONSES,
        rng: random.Random | None = None,
    ) -> None:
        if not responses:
            raise ValueError("Canned response set must not be empty")
        if any(not r.strip() for r in responses):
            raise ValueError("Canned responses must not be blank")
        self._responses = tuple(responses)
        self._rng = rng or random.Random()

    @property
    def responses(self) -> tuple[str, ...]:
        return self._responses

    async def respond(self, conversation_id: str, history: Sequence[Message]) -> str:
        return self._rng.choice(self._responses)

    @property
    def provider_type(self) -> str:
        return "canned"


class EchoResponseProvider(ResponseProvider):
    """Replies by repeating the most recent user message."""

    def __init__(self, prefix: str = "You said: ") -> None:
        self._prefix = prefix

    async def respond(self, conversation_id: str, history: Sequence[Message]) -> str:
        for message in reversed(history):
            if message.is_user:
                return f"{self._prefix}{message.text}"
        return f"{self._prefix}(nothing)"

    @property
    def provider_type(self) -> str:
        return "echo"
