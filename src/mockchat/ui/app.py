"""Main Textual TUI application.

Renders the conversation store and forwards user intents to the
ChatOrchestrator. Every store change re-renders the views; the widgets
never mutate conversations themselves.
"""

import asyncio
import contextlib

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..chat.orchestrator import ChatOrchestrator
from .config import LogLevel
from .screens import ConfirmDeleteScreen
from .styles import APP_CSS
from .themes import SLATE_DARK
from .widgets import (
    ChatHeader,
    ChatInputBar,
    ChatWindow,
    ConversationSidebar,
    DebugPanel,
    TypingIndicator,
    WelcomePanel,
)


class MockChatApp(App):
    """Textual TUI for chatting with a simulated assistant."""

    CSS = APP_CSS
    TITLE = "Chat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_conversation", "New Chat", priority=True),
        Binding("ctrl+x", "delete_conversation", "Delete", priority=True),
        Binding("ctrl+up", "previous_conversation", "Prev", show=False),
        Binding("ctrl+down", "next_conversation", "Next", show=False),
        Binding("ctrl+r", "copy_last_response", "Copy Reply", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        orchestrator: ChatOrchestrator,
        log_level: str | None = None,
        confirm_delete: bool = True,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._log_level = log_level
        self._confirm_delete = confirm_delete
        self._unsubscribe = None
        self._refresh_scheduled = False

    @property
    def orchestrator(self) -> ChatOrchestrator:
        return self._orchestrator

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ConversationSidebar(id="sidebar")

        with Vertical(id="chat-area"):
            yield WelcomePanel(id="welcome")
            with Vertical(id="conversation-view"):
                yield ChatHeader(id="chat-header")
                yield ChatWindow(id="chat-window")
                yield TypingIndicator(id="typing-indicator")
                yield ChatInputBar(id="chat-input-bar")
            yield DebugPanel(id="debug-panel")

        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(SLATE_DARK)
        self.theme = SLATE_DARK.name

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.set_visible(True)
            log_panel.log_event(
                "TUI", f"Log panel enabled at {LogLevel.name(log_panel.log_level)}", LogLevel.INFO
            )

        self._orchestrator.set_debug_callback(self._route_log)
        self._orchestrator.set_error_callback(self._on_reply_error)
        self._orchestrator.set_scheduler(self._run_reply)
        self._unsubscribe = self._orchestrator.store.subscribe(self._on_store_changed)

        provider = self._orchestrator.simulator.provider
        self.sub_title = f"{provider.provider_type} replies | session-only"
        await self.refresh_views()

    def on_unmount(self) -> None:
        """Detach from the store when app exits."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._orchestrator.set_scheduler(None)
        self._orchestrator.set_debug_callback(None)
        self._orchestrator.set_error_callback(None)

    # ------------------------------------------------------------------
    # Store -> views
    # ------------------------------------------------------------------

    def _on_store_changed(self) -> None:
        """Coalesce store notifications into one refresh per message cycle."""
        if not self._refresh_scheduled:
            self._refresh_scheduled = True
            self.call_later(self._scheduled_refresh)

    async def _scheduled_refresh(self) -> None:
        self._refresh_scheduled = False
        await self.refresh_views()

    async def refresh_views(self) -> None:
        """Render the current store state into every widget."""
        orchestrator = self._orchestrator
        sidebar = self.query_one("#sidebar", ConversationSidebar)
        await sidebar.update_conversations(
            orchestrator.conversations, orchestrator.active_conversation_id
        )

        active = orchestrator.active_conversation
        welcome = self.query_one("#welcome", WelcomePanel)
        view = self.query_one("#conversation-view", Vertical)
        window = self.query_one("#chat-window", ChatWindow)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        if active is None:
            welcome.display = True
            view.display = False
            await window.clear_conversation()
            return

        welcome.display = False
        view.display = True
        self.query_one("#chat-header", ChatHeader).update_header(active)
        await window.show_conversation(active)
        pending = orchestrator.is_pending(active.id)
        self.query_one("#typing-indicator", TypingIndicator).set_pending(pending)
        input_bar.set_loading(not orchestrator.input_enabled)

    def _route_log(self, level: str, component: str, message: str) -> None:
        """Route core log events to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_event(component, message, LogLevel.from_string(level))

    def _on_reply_error(self, conversation_id: str, error: Exception) -> None:
        self.notify(f"Reply failed: {str(error)[:60]}", severity="error", timeout=5)

    def _run_reply(self, coro) -> None:
        """Run a reply coroutine as a Textual worker."""
        self.run_worker(coro, group="replies", description="simulated reply")

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def on_conversation_sidebar_new_requested(self, event: ConversationSidebar.NewRequested) -> None:
        self.action_new_conversation()

    def on_conversation_sidebar_selected(self, event: ConversationSidebar.Selected) -> None:
        self._orchestrator.select_conversation(event.conversation_id)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_conversation_sidebar_delete_requested(
        self, event: ConversationSidebar.DeleteRequested
    ) -> None:
        self._orchestrator.delete_conversation(event.conversation_id)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._orchestrator.send_message(event.value)

    def action_new_conversation(self) -> None:
        """Start a new conversation."""
        self._orchestrator.new_conversation()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_delete_conversation(self) -> None:
        """Delete the active conversation, asking first if configured."""
        active = self._orchestrator.active_conversation
        if active is None:
            self.notify("No conversation selected", severity="warning", timeout=2)
            return

        conversation_id = active.id
        if not self._confirm_delete:
            self._orchestrator.delete_conversation(conversation_id)
            return

        def on_dismiss(confirmed: bool | None) -> None:
            if confirmed:
                self._orchestrator.delete_conversation(conversation_id)
                self.notify("Conversation deleted", timeout=2)

        self.push_screen(ConfirmDeleteScreen(active.title), on_dismiss)

    def _select_relative(self, step: int) -> None:
        conversations = self._orchestrator.conversations
        if not conversations:
            return
        ids = [c.id for c in conversations]
        active_id = self._orchestrator.active_conversation_id
        if active_id in ids:
            index = (ids.index(active_id) + step) % len(ids)
        else:
            index = 0 if step > 0 else len(ids) - 1
        self._orchestrator.select_conversation(ids[index])

    def action_previous_conversation(self) -> None:
        """Select the conversation above the active one."""
        self._select_relative(-1)

    def action_next_conversation(self) -> None:
        """Select the conversation below the active one."""
        self._select_relative(1)

    def action_copy_last_response(self) -> None:
        """Copy last assistant reply to clipboard."""
        window = self.query_one("#chat-window", ChatWindow)
        response = window.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Reply copied")
        else:
            self.notify("No reply to copy", severity="warning")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    orchestrator: ChatOrchestrator,
    log_level: str | None = None,
    confirm_delete: bool = True,
) -> None:
    """Run the Textual TUI.

    Args:
        orchestrator: Chat core to drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
        confirm_delete: Ask before deleting with Ctrl+X
    """
    app = MockChatApp(
        orchestrator=orchestrator,
        log_level=log_level,
        confirm_delete=confirm_delete,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await orchestrator.aclose()
