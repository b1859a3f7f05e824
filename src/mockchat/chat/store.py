"""In-memory conversation store.

This module hides the design decisions about:
- How conversations are ordered (new ones first, appends keep position)
- How the active conversation is referenced (weakly, by id)
- Which conversations are waiting for a reply
- How observers learn about changes

The store is an owned state container: the application creates one and
discards it on exit. Nothing here is persisted.
"""

from collections.abc import Callable, Iterator

from .models import Conversation, Message

Listener = Callable[[], None]


class ConversationStore:
    """Ordered collection of conversations plus UI selection state.

    All mutations happen on a single event loop thread, so no locking
    is done. Listeners are called synchronously after every mutation.
    """

    def __init__(self) -> None:
        self._conversations: list[Conversation] = []
        self._active_id: str | None = None
        self._pending: dict[str, int] = {}
        self._listeners: list[Listener] = []
        self._debug_callback: Callable[[str, str, str], None] | None = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_debug_callback(self, callback: Callable[[str, str, str], None] | None) -> None:
        """Set callback for debug logging.

        Args:
            callback: Function(level, component, message)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Store", message)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def conversations(self) -> tuple[Conversation, ...]:
        """Snapshot of all conversations in display order."""
        return tuple(self._conversations)

    @property
    def active_conversation_id(self) -> str | None:
        return self._active_id

    @property
    def active_conversation(self) -> Conversation | None:
        """The active conversation, or None if the id resolves to nothing."""
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    @property
    def is_loading(self) -> bool:
        """True while any conversation waits for a reply."""
        return bool(self._pending)

    @property
    def pending_ids(self) -> frozenset[str]:
        return frozenset(self._pending)

    def get(self, conversation_id: str) -> Conversation | None:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def ids(self) -> set[str]:
        return {c.id for c in self._conversations}

    def is_pending(self, conversation_id: str) -> bool:
        return conversation_id in self._pending

    def __len__(self) -> int:
        return len(self._conversations)

    def __contains__(self, conversation_id: object) -> bool:
        return any(c.id == conversation_id for c in self._conversations)

    def __iter__(self) -> Iterator[Conversation]:
        return iter(tuple(self._conversations))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, conversation: Conversation) -> None:
        """Prepend a conversation.

        Raises:
            ValueError: If a conversation with the same id exists
        """
        if conversation.id in self:
            raise ValueError(f"Conversation already exists: {conversation.id}")
        self._conversations.insert(0, conversation)
        self._debug("debug", f"Added conversation {conversation.id}")
        self._notify()

    def append_message(self, conversation_id: str, message: Message) -> Conversation | None:
        """Append a message to the live record of a conversation.

        The append is applied to whatever the store holds right now, so
        concurrent appends to the same conversation are all retained.

        Returns:
            The updated conversation, or None if the id is not present
        """
        for index, conversation in enumerate(self._conversations):
            if conversation.id == conversation_id:
                updated = conversation.with_message(message)
                self._conversations[index] = updated
                self._debug(
                    "debug",
                    f"Appended {message.sender.value} message to {conversation_id} "
                    f"({updated.message_count} total)"
                )
                self._notify()
                return updated
        self._debug("debug", f"Dropped message for missing conversation {conversation_id}")
        return None

    def remove(self, conversation_id: str) -> bool:
        """Remove a conversation.

        Clears the active id if it pointed at the removed conversation.

        Returns:
            True if a conversation was removed
        """
        for index, conversation in enumerate(self._conversations):
            if conversation.id == conversation_id:
                del self._conversations[index]
                if self._active_id == conversation_id:
                    self._active_id = None
                self._debug("debug", f"Removed conversation {conversation_id}")
                self._notify()
                return True
        return False

    def set_active(self, conversation_id: str | None) -> None:
        """Set the active conversation id without checking existence."""
        self._active_id = conversation_id
        self._notify()

    def mark_pending(self, conversation_id: str) -> None:
        """Record that a reply for the conversation is in flight."""
        self._pending[conversation_id] = self._pending.get(conversation_id, 0) + 1
        self._notify()

    def clear_pending(self, conversation_id: str) -> None:
        """Record that one in-flight reply has finished."""
        count = self._pending.get(conversation_id, 0)
        if count <= 1:
            self._pending.pop(conversation_id, None)
        else:
            self._pending[conversation_id] = count - 1
        self._notify()
