"""Unit tests for the response simulator."""
import asyncio
import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mockchat.chat import Conversation, ConversationStore, Message, ResponseError, ResponseSimulator, Sender
from mockchat.responders import (
    DEFAULT_RESPONSES,
    CannedResponseProvider,
    EchoResponseProvider,
    ResponseProvider,
)


class _FixedRandom(random.Random):
    """Random whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self._value = value

    def random(self):
        return self._value


class FailingProvider(ResponseProvider):
    """Provider that always raises."""

    async def respond(self, conversation_id, history):
        raise ConnectionError("backend unreachable")

    @property
    def provider_type(self) -> str:
        return "failing"


class BlankProvider(ResponseProvider):
    """Provider that returns whitespace."""

    async def respond(self, conversation_id, history):
        return "   "

    @property
    def provider_type(self) -> str:
        return "blank"


def _seed_conversation(store: ConversationStore, text: str = "Hello") -> tuple[Message, ...]:
    store.add(Conversation(id="c1"))
    message = Message(id="m1", text=text, sender=Sender.USER)
    return store.append_message("c1", message).messages


class TestDelay:
    """Tests for the randomized latency."""

    def test_invalid_range_fails(self, store, canned_provider):
        """Test invalid range fails."""
        with pytest.raises(ValueError, match="max_delay"):
            ResponseSimulator(store, canned_provider, min_delay=2.0, max_delay=1.0)

    def test_negative_delay_fails(self, store, canned_provider):
        """Test negative delay fails."""
        with pytest.raises(ValueError, match="negative"):
            ResponseSimulator(store, canned_provider, min_delay=-1.0, max_delay=1.0)

    def test_delay_bounds(self, store, canned_provider, sequence_random):
        """Test delay bounds."""
        low = ResponseSimulator(store, canned_provider, rng=sequence_random([0.0]))
        high = ResponseSimulator(store, canned_provider, rng=sequence_random([0.999]))
        assert low.delay() == 1.0
        assert 1.99 < high.delay() < 2.0

    def test_largest_draw_stays_below_max(self, store, canned_provider):
        """Test that a draw just below 1.0 never rounds up to max_delay."""
        simulator = ResponseSimulator(
            store, canned_provider, rng=_FixedRandom(0.9999999999999999)
        )
        assert 1.0 <= simulator.delay() < 2.0

    def test_zero_span_delay(self, store, canned_provider):
        """Test that equal bounds give exactly that delay."""
        simulator = ResponseSimulator(
            store, canned_provider, min_delay=0.5, max_delay=0.5, rng=_FixedRandom(0.7)
        )
        assert simulator.delay() == 0.5

    @given(st.floats(min_value=0.0, max_value=1.0, exclude_max=True))
    def test_default_delay_in_range(self, draw: float):
        """Property test: default delays fall in [1.0, 2.0) seconds."""
        simulator = ResponseSimulator(
            ConversationStore(), CannedResponseProvider(), rng=_FixedRandom(draw)
        )
        assert 1.0 <= simulator.delay() < 2.0


class TestSimulate:
    """Tests for producing and appending replies."""

    @pytest.mark.asyncio
    async def test_appends_canned_reply(self, store, simulator):
        """Test appends canned reply."""
        snapshot = _seed_conversation(store)

        reply = await simulator.simulate("c1", snapshot[-1:], snapshot)

        assert reply is not None
        assert reply.sender == Sender.ASSISTANT
        assert reply.text in DEFAULT_RESPONSES
        messages = store.get("c1").messages
        assert len(messages) == 2
        assert messages[-1] == reply

    @pytest.mark.asyncio
    async def test_appends_to_live_state_not_snapshot(self, store, simulator):
        """Test appends to live state not snapshot."""
        snapshot = _seed_conversation(store, "A")
        store.append_message("c1", Message(id="m2", text="B", sender=Sender.USER))

        await simulator.simulate("c1", snapshot[-1:], snapshot)

        texts = [m.text for m in store.get("c1").messages]
        assert texts[:2] == ["A", "B"]
        assert len(texts) == 3

    @pytest.mark.asyncio
    async def test_deleted_conversation_is_noop(self, store, canned_provider):
        """Test deleted conversation is noop."""
        simulator = ResponseSimulator(store, canned_provider, min_delay=0.01, max_delay=0.01)
        snapshot = _seed_conversation(store)

        task = asyncio.create_task(simulator.simulate("c1", snapshot, snapshot))
        await asyncio.sleep(0)
        store.remove("c1")
        reply = await task

        assert reply is None
        assert len(store) == 0
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_loading_flag_during_delay(self, store, canned_provider):
        """Test loading flag during delay."""
        simulator = ResponseSimulator(store, canned_provider, min_delay=0.01, max_delay=0.01)
        snapshot = _seed_conversation(store)

        task = asyncio.create_task(simulator.simulate("c1", snapshot, snapshot))
        await asyncio.sleep(0)
        assert store.is_pending("c1")
        assert store.is_loading

        await task
        assert not store.is_pending("c1")
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_provider_receives_snapshot(self, store):
        """Test provider receives snapshot."""
        simulator = ResponseSimulator(store, EchoResponseProvider(), min_delay=0, max_delay=0)
        snapshot = _seed_conversation(store, "ping")

        reply = await simulator.simulate("c1", snapshot, snapshot)

        assert reply.text == "You said: ping"

    @pytest.mark.asyncio
    async def test_provider_failure_raises_response_error(self, store):
        """Test provider failure raises response error."""
        simulator = ResponseSimulator(store, FailingProvider(), min_delay=0, max_delay=0)
        snapshot = _seed_conversation(store)

        with pytest.raises(ResponseError, match="backend unreachable") as exc_info:
            await simulator.simulate("c1", snapshot, snapshot)

        assert exc_info.value.conversation_id == "c1"
        assert store.get("c1").message_count == 1
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_blank_reply_raises_response_error(self, store):
        """Test blank reply raises response error."""
        simulator = ResponseSimulator(store, BlankProvider(), min_delay=0, max_delay=0)
        snapshot = _seed_conversation(store)

        with pytest.raises(ResponseError, match="empty reply"):
            await simulator.simulate("c1", snapshot, snapshot)

    @pytest.mark.asyncio
    async def test_debug_events(self, store, simulator, log_events):
        """Test debug events."""
        simulator.set_debug_callback(lambda *event: log_events.append(event))
        snapshot = _seed_conversation(store)

        await simulator.simulate("c1", snapshot, snapshot)

        components = {component for _, component, _ in log_events}
        assert components == {"Simulator"}
