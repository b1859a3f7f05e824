"""Identifier and title helpers for conversations.

Hides how ids are drawn and how conversation titles are derived
from the first user message.
"""

import secrets
import string
from collections.abc import Container

ID_LENGTH = 7
TITLE_MAX_LENGTH = 30
TITLE_ELLIPSIS = "..."
DEFAULT_TITLE = "New Conversation"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(existing: Container[str] | None = None) -> str:
    """Generate a short opaque identifier.

    Args:
        existing: Optional collection of ids already in use. The generator
            draws again until the new id is not among them.

    Returns:
        A lowercase base-36 string of ``ID_LENGTH`` characters
    """
    while True:
        new_id = "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))
        if existing is None or new_id not in existing:
            return new_id


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + TITLE_ELLIPSIS
    return text


def generate_title(first_message: str) -> str:
    """Derive a conversation title from its first message.

    Messages longer than ``TITLE_MAX_LENGTH`` are cut and get an ellipsis.
    """
    return truncate(first_message, TITLE_MAX_LENGTH)
