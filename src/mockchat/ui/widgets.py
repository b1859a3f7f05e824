"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Conversation list rendering in the sidebar
- Message bubble layout and copy-on-click
- Input handling, history and the loading lock
- Log rendering and level filtering

Widgets hold no conversation state of their own; the app pushes store
snapshots into them.
"""

from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..chat.models import Conversation
from ..chat.models import Message as ChatMessage
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    NEW_CHAT_LABEL,
    SEND_LABEL,
    SENDING_LABEL,
    WELCOME_SUBTITLE,
    WELCOME_TITLE,
    LogLevel,
)
from .formatting import format_age, format_message_time, message_count_label, preview


def _copy_text(widget: Static | Vertical | RichLog, text: str, label: str) -> None:
    """Copy to the system clipboard, falling back to the terminal (OSC 52)."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


# ----------------------------------------------------------------------
# Sidebar
# ----------------------------------------------------------------------


class ConversationItem(Horizontal):
    """One row in the sidebar: title, last activity and a delete button."""

    def __init__(self, conversation: Conversation, active: bool = False, *args, **kwargs) -> None:
        classes = "conversation-item -active" if active else "conversation-item"
        super().__init__(*args, classes=classes, **kwargs)
        self.conversation_id = conversation.id
        self._conversation = conversation

    def compose(self):
        conversation = self._conversation
        last = conversation.last_message
        detail = preview(last.text) if last else "No messages yet"
        with Vertical(classes="conversation-text"):
            yield Static(conversation.title, markup=False, classes="conversation-title")
            yield Static(detail, markup=False, classes="conversation-preview")
            yield Static(format_age(conversation.updated_at), classes="conversation-age")
        yield Button("✕", classes="delete-btn").with_tooltip("Delete conversation")

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(ConversationSidebar.Selected(self.conversation_id))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(ConversationSidebar.DeleteRequested(self.conversation_id))


class ConversationSidebar(Vertical):
    """List of conversations with a "new chat" button."""

    BORDER_TITLE = "Conversations"

    class Selected(Message):
        """Posted when the user clicks a conversation."""

        def __init__(self, conversation_id: str) -> None:
            super().__init__()
            self.conversation_id = conversation_id

    class DeleteRequested(Message):
        """Posted when the user clicks a conversation's delete button."""

        def __init__(self, conversation_id: str) -> None:
            super().__init__()
            self.conversation_id = conversation_id

    class NewRequested(Message):
        """Posted when the user asks for a new conversation."""

    def compose(self):
        yield Button(NEW_CHAT_LABEL, id="new-chat-btn", variant="primary")
        yield VerticalScroll(id="conversation-list")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-chat-btn":
            event.stop()
            self.post_message(self.NewRequested())

    async def update_conversations(
        self,
        conversations: Sequence[Conversation],
        active_id: str | None,
    ) -> None:
        """Re-render the list from a store snapshot."""
        container = self.query_one("#conversation-list", VerticalScroll)
        await container.remove_children()
        if conversations:
            await container.mount(*(
                ConversationItem(c, active=c.id == active_id) for c in conversations
            ))
        else:
            await container.mount(Static("No conversations yet", classes="sidebar-empty"))
        self.border_subtitle = str(len(conversations))


# ----------------------------------------------------------------------
# Chat area
# ----------------------------------------------------------------------


class WelcomePanel(Vertical):
    """Shown when no conversation is active."""

    def compose(self):
        yield Static(WELCOME_TITLE, id="welcome-title")
        yield Static(WELCOME_SUBTITLE, id="welcome-subtitle")
        yield Button(NEW_CHAT_LABEL, id="welcome-new-btn", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "welcome-new-btn":
            event.stop()
            self.post_message(ConversationSidebar.NewRequested())


class ChatHeader(Vertical):
    """Title and message count of the active conversation."""

    title_text = ""
    count_text = ""

    def compose(self):
        yield Static("", markup=False, id="chat-title")
        yield Static("", id="chat-count")

    def update_header(self, conversation: Conversation) -> None:
        self.title_text = conversation.title
        self.count_text = message_count_label(conversation.message_count)
        self.query_one("#chat-title", Static).update(self.title_text)
        self.query_one("#chat-count", Static).update(self.count_text)


class MessageBubble(Vertical):
    """A single rendered message. Clicking copies its text."""

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        role_class = "user-message" if message.is_user else "assistant-message"
        super().__init__(*args, classes=f"message-bubble {role_class}", **kwargs)
        self.message = message

    def compose(self):
        if self.message.is_user:
            yield Static(self.message.text, markup=False, classes="message-content")
        else:
            yield Markdown(self.message.text, classes="message-content")
        yield Static(format_message_time(self.message.timestamp), classes="message-time")

    def on_click(self, event: Click) -> None:
        event.stop()
        _copy_text(self, self.message.text, "Message")


class ChatWindow(VerticalScroll):
    """Scrollable message list of the active conversation.

    Only messages not yet on screen are mounted; switching conversation
    re-renders from scratch.
    """

    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._conversation_id: str | None = None
        self._rendered_ids: list[str] = []

    @property
    def rendered_ids(self) -> list[str]:
        return list(self._rendered_ids)

    async def show_conversation(self, conversation: Conversation) -> None:
        """Render ``conversation``, mounting only what changed."""
        message_ids = [m.id for m in conversation.messages]
        same_thread = (
            conversation.id == self._conversation_id
            and message_ids[:len(self._rendered_ids)] == self._rendered_ids
        )
        if not same_thread:
            self._rendered_ids = []
            self._conversation_id = conversation.id
            await self.remove_children()

        new_messages = conversation.messages[len(self._rendered_ids):]
        if new_messages:
            self._rendered_ids.extend(m.id for m in new_messages)
            await self.mount(*(MessageBubble(m) for m in new_messages))
            self.scroll_end(animate=False)

    async def clear_conversation(self) -> None:
        if self._conversation_id is None:
            return
        self._conversation_id = None
        self._rendered_ids = []
        await self.remove_children()

    def get_last_response(self) -> str | None:
        """Text of the last assistant bubble on screen."""
        for bubble in reversed(list(self.query(MessageBubble))):
            if not bubble.message.is_user:
                return bubble.message.text
        return None


class TypingIndicator(Static):
    """Shows "Assistant is typing..." while a reply is pending."""

    def on_mount(self) -> None:
        self.update(Text("Assistant is typing...", style="italic"))
        self.display = False

    def set_pending(self, pending: bool) -> None:
        self.display = pending


class HistoryInput(Input):
    """Single-line input that recalls earlier submissions with Up/Down."""

    BINDINGS = [
        Binding("up", "history_previous", "Previous", show=False),
        Binding("down", "history_next", "Next", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._cursor: int | None = None  # position in _history while browsing
        self._draft = ""

    def _show(self, text: str) -> None:
        self.value = text
        self.cursor_position = len(text)

    def action_history_previous(self) -> None:
        if not self._history:
            return
        if self._cursor is None:
            self._draft = self.value
            self._cursor = len(self._history)
        self._cursor = max(self._cursor - 1, 0)
        self._show(self._history[self._cursor])

    def action_history_next(self) -> None:
        if self._cursor is None:
            return
        self._cursor += 1
        if self._cursor < len(self._history):
            self._show(self._history[self._cursor])
        else:
            self._cursor = None
            self._show(self._draft)

    def remember(self, text: str) -> None:
        """Record a submitted line and stop browsing."""
        if text and text not in self._history[-1:]:
            self._history.append(text)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._cursor = None
        self._draft = ""


class ChatInputBar(Horizontal):
    """Input box and Send button, locked while a reply is pending."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._loading = False

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button(SEND_LABEL, id="send-btn", variant="primary", disabled=True)

    @property
    def loading(self) -> bool:
        return self._loading

    def on_input_changed(self, event: Input.Changed) -> None:
        self._sync_button()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _sync_button(self) -> None:
        value = self.query_one("#chat-input", HistoryInput).value
        button = self.query_one("#send-btn", Button)
        button.disabled = self._loading or not value.strip()
        button.label = SENDING_LABEL if self._loading else SEND_LABEL

    def _submit(self) -> None:
        if self._loading:
            return
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value
        if value.strip():
            text_input.remember(value)
            text_input.value = ""
            self._sync_button()
            self.post_message(self.Submitted(value))

    def set_loading(self, loading: bool) -> None:
        """Lock or unlock the input while a reply is pending."""
        if loading == self._loading:
            return
        self._loading = loading
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.disabled = loading
        self._sync_button()
        if not loading:
            text_input.focus()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


# ----------------------------------------------------------------------
# Log panel
# ----------------------------------------------------------------------


class DebugPanel(RichLog):
    """Trace of core events: store changes, reply scheduling, failures.

    Hidden until ``--log-level`` is given or Ctrl+D is pressed. Events
    below ``log_level`` are dropped. Clicking copies the plain text.
    """

    BORDER_TITLE = "Log"

    LEVEL_STYLES = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "bold red",
    }

    COMPONENT_STYLES = {
        "TUI": "cyan",
        "Chat": "green",
        "Store": "bright_blue",
        "Simulator": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=True, **kwargs)
        self.log_level = log_level
        self._entries: list[str] = []
        self.border_subtitle = "hidden"

    @property
    def entries(self) -> list[str]:
        """Plain-text copies of the entries written so far."""
        return list(self._entries)

    def log_event(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Write one entry unless it is below the panel's threshold.

        Args:
            component: Emitting component (TUI, Chat, Store, Simulator)
            message: Log message, truncated when very long
            level: One of the LogLevel values
        """
        if level < self.log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", "dim"),
            (f"{LogLevel.name(level):<7} ", self.LEVEL_STYLES.get(level, "white")),
            (f"[{component}] ", self.COMPONENT_STYLES.get(component, "white")),
            message,
        )
        self._entries.append(line.plain)
        self.write(line)

    def set_visible(self, visible: bool) -> None:
        self.display = visible
        self.border_subtitle = f"level {LogLevel.name(self.log_level)}" if visible else "hidden"

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        self.set_visible(not self.display)
        return self.display

    def on_click(self, event: Click) -> None:
        event.stop()
        if not self._entries:
            self.app.notify("Log is empty", timeout=2)
            return
        _copy_text(self, "\n".join(self._entries), "Log")
