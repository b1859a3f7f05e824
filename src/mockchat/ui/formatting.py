"""Text formatting utilities for the TUI.

Hides how timestamps, ages and previews are presented.
"""

from datetime import datetime

from .config import MESSAGE_TIME_FORMAT, SIDEBAR_PREVIEW_LENGTH


def format_message_time(timestamp: datetime) -> str:
    """Format a message timestamp as hours and minutes."""
    return timestamp.strftime(MESSAGE_TIME_FORMAT)


def format_age(timestamp: datetime, now: datetime | None = None) -> str:
    """Format how long ago ``timestamp`` was, e.g. "5m ago".

    Args:
        timestamp: Point in time to describe
        now: Reference time (default: current time)
    """
    now = now or datetime.now()
    seconds = max(0, int((now - timestamp).total_seconds()))
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def preview(text: str, limit: int = SIDEBAR_PREVIEW_LENGTH) -> str:
    """Collapse whitespace and cut ``text`` to a single-line preview."""
    flat = " ".join(text.split())
    if len(flat) > limit:
        return flat[: limit - 1] + "…"
    return flat


def message_count_label(count: int) -> str:
    """Return "1 message" / "N messages"."""
    return f"{count} message" if count == 1 else f"{count} messages"
