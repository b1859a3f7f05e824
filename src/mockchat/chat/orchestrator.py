"""Conversation orchestrator.

Wires user intents (new, send, select, delete) to store mutations and
schedules simulated replies. This is the only place where the order
"user message visible, then reply requested" is decided.
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

from .errors import ResponseError
from .identifiers import generate_id, truncate
from .models import Conversation, Message, Sender
from .simulator import ResponseSimulator
from .store import ConversationStore

DebugCallback = Callable[[str, str, str], None]
ErrorCallback = Callable[[str, Exception], None]
Scheduler = Callable[[Coroutine[Any, Any, None]], Any]


class ChatOrchestrator:
    """Control component between the UI and the conversation store.

    Each public operation is a single synchronous state transition. The
    only asynchronous part is the reply, which is handed to ``scheduler``
    (an asyncio task on the running loop by default).
    """

    def __init__(
        self,
        store: ConversationStore,
        simulator: ResponseSimulator,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._store = store
        self._simulator = simulator
        self._scheduler = scheduler
        self._tasks: set[asyncio.Task] = set()
        self._debug_callback: DebugCallback | None = None
        self._error_callback: ErrorCallback | None = None

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def simulator(self) -> ResponseSimulator:
        return self._simulator

    def set_scheduler(self, scheduler: Scheduler | None) -> None:
        """Replace the function used to run reply coroutines."""
        self._scheduler = scheduler

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set callback for debug logging.

        The callback is forwarded to the store and the simulator.

        Args:
            callback: Function(level, component, message)
        """
        self._debug_callback = callback
        self._store.set_debug_callback(callback)
        self._simulator.set_debug_callback(callback)

    def set_error_callback(self, callback: ErrorCallback | None) -> None:
        """Set callback invoked with (conversation_id, error) when a reply fails."""
        self._error_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def conversations(self) -> tuple[Conversation, ...]:
        return self._store.conversations

    @property
    def active_conversation_id(self) -> str | None:
        return self._store.active_conversation_id

    @property
    def active_conversation(self) -> Conversation | None:
        return self._store.active_conversation

    @property
    def is_loading(self) -> bool:
        return self._store.is_loading

    def is_pending(self, conversation_id: str) -> bool:
        return self._store.is_pending(conversation_id)

    @property
    def input_enabled(self) -> bool:
        """False while the active conversation waits for its reply."""
        active_id = self._store.active_conversation_id
        return active_id is None or not self._store.is_pending(active_id)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def new_conversation(self) -> Conversation:
        """Create an empty conversation, prepend it and make it active."""
        conversation = Conversation(id=generate_id(self._store.ids()))
        self._store.add(conversation)
        self._store.set_active(conversation.id)
        self._debug("info", f"New conversation {conversation.id}")
        return conversation

    def send_message(self, text: str) -> Message | None:
        """Append a user message to the active conversation and request a reply.

        Starts a new conversation when none is active (or the active id
        no longer resolves). Whitespace-only text is ignored.

        Args:
            text: Message text as entered

        Returns:
            The user message, or None if nothing was sent
        """
        if not text.strip():
            self._debug("debug", "Ignored empty message")
            return None

        conversation = self._store.active_conversation
        if conversation is None:
            conversation = self.new_conversation()

        message = Message(id=generate_id(), text=text, sender=Sender.USER)
        updated = self._store.append_message(conversation.id, message)
        if updated is None:
            raise RuntimeError(f"Conversation {conversation.id} vanished during send")

        self._debug("info", f"Sent to {conversation.id}: '{truncate(text, 50)}'")
        self._schedule(self._respond(updated.id, (message,), updated.messages))
        return message

    def select_conversation(self, conversation_id: str) -> None:
        """Make ``conversation_id`` active, whether or not it exists."""
        self._store.set_active(conversation_id)
        if conversation_id not in self._store:
            self._debug("debug", f"Selected unknown conversation {conversation_id}")

    def delete_conversation(self, conversation_id: str) -> bool:
        """Delete a conversation; pending replies for it become no-ops.

        Returns:
            True if the conversation existed
        """
        removed = self._store.remove(conversation_id)
        if removed:
            self._debug("info", f"Deleted conversation {conversation_id}")
        else:
            self._debug("debug", f"Delete ignored, no conversation {conversation_id}")
        return removed

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> None:
        if self._scheduler is not None:
            self._scheduler(coro)
            return
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _respond(
        self,
        conversation_id: str,
        new_messages: tuple[Message, ...],
        snapshot: tuple[Message, ...],
    ) -> None:
        try:
            await self._simulator.simulate(conversation_id, new_messages, snapshot)
        except ResponseError as e:
            self._debug("error", f"Reply failed for {conversation_id}: {e}")
            if self._error_callback:
                self._error_callback(conversation_id, e)

    async def wait_idle(self) -> None:
        """Wait until every reply scheduled on the default scheduler is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        """Cancel in-flight replies and close the response provider."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._simulator.provider.close()
        self._debug("debug", "Orchestrator closed")
