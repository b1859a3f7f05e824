"""Terminal UI module for mockchat.

Provides a Textual-based TUI over the chat core.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (sidebar, bubbles, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- screens.py: Modal dialogs (delete confirmation)
- formatting.py: Timestamp and preview formatting
- app.py: Application orchestration (user interaction flow)
"""

from .app import MockChatApp, run_textual_tui
from .config import LogLevel
from .widgets import (
    ChatInputBar,
    ChatWindow,
    ConversationSidebar,
    DebugPanel,
    MessageBubble,
)

__all__ = [
    "ChatInputBar",
    "ChatWindow",
    "ConversationSidebar",
    "DebugPanel",
    "LogLevel",
    "MessageBubble",
    "MockChatApp",
    "run_textual_tui",
]
