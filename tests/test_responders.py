"""Tests for response providers."""
import random

import pytest

from mockchat.chat import Message, Sender
from mockchat.responders import (
    DEFAULT_RESPONSES,
    CannedResponseProvider,
    EchoResponseProvider,
    ResponseProvider,
    create_response_provider,
    load_responses,
)


def _history(*texts: str) -> tuple[Message, ...]:
    senders = [Sender.USER, Sender.ASSISTANT]
    return tuple(
        Message(id=f"m{i}", text=text, sender=senders[i % 2])
        for i, text in enumerate(texts)
    )


class TestResponseProviderInterface:
    """Tests for the abstract provider."""

    def test_cannot_instantiate_abstract(self):
        """Test cannot instantiate abstract."""
        with pytest.raises(TypeError):
            ResponseProvider()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Test context manager closes."""
        closed = []

        class Tracking(CannedResponseProvider):
            async def close(self):
                closed.append(True)

        async with Tracking() as provider:
            assert provider.provider_type == "canned"

        assert closed == [True]


class TestCannedResponseProvider:
    """Tests for the canned provider."""

    def test_default_set(self):
        """Test default set."""
        provider = CannedResponseProvider()
        assert provider.responses == DEFAULT_RESPONSES
        assert len(provider.responses) == 7

    @pytest.mark.asyncio
    async def test_reply_comes_from_set(self):
        """Test reply comes from set."""
        provider = CannedResponseProvider(rng=random.Random(42))
        for _ in range(20):
            reply = await provider.respond("c1", _history("Hello"))
            assert reply in DEFAULT_RESPONSES

    @pytest.mark.asyncio
    async def test_seeded_choice_is_reproducible(self):
        """Test seeded choice is reproducible."""
        first = CannedResponseProvider(rng=random.Random(3))
        second = CannedResponseProvider(rng=random.Random(3))
        history = _history("Hello")
        assert [await first.respond("c1", history) for _ in range(5)] == [
            await second.respond("c1", history) for _ in range(5)
        ]

    @pytest.mark.asyncio
    async def test_custom_set(self):
        """Test custom set."""
        provider = CannedResponseProvider(responses=["only answer"])
        assert await provider.respond("c1", _history("anything")) == "only answer"

    def test_empty_set_rejected(self):
        """Test empty set rejected."""
        with pytest.raises(ValueError, match="empty"):
            CannedResponseProvider(responses=[])

    def test_blank_entry_rejected(self):
        """Test blank entry rejected."""
        with pytest.raises(ValueError, match="blank"):
            CannedResponseProvider(responses=["fine", "  "])


class TestEchoResponseProvider:
    """Tests for the echo provider."""

    @pytest.mark.asyncio
    async def test_echoes_latest_user_message(self):
        """Test echoes latest user message."""
        provider = EchoResponseProvider()
        history = _history("first", "reply", "second")
        assert await provider.respond("c1", history) == "You said: second"

    @pytest.mark.asyncio
    async def test_custom_prefix(self):
        """Test custom prefix."""
        provider = EchoResponseProvider(prefix="> ")
        assert await provider.respond("c1", _history("hi")) == "> hi"

    @pytest.mark.asyncio
    async def test_no_user_message(self):
        """Test no user message."""
        provider = EchoResponseProvider()
        assert await provider.respond("c1", ()) == "You said: (nothing)"


class TestCreateResponseProvider:
    """Tests for the provider factory."""

    def test_default_is_canned(self):
        """Test default is canned."""
        assert isinstance(create_response_provider(), CannedResponseProvider)

    def test_kind_is_case_insensitive(self):
        """Test kind is case insensitive."""
        assert isinstance(create_response_provider("ECHO"), EchoResponseProvider)

    def test_passes_config(self):
        """Test passes config."""
        provider = create_response_provider("canned", responses=["a", "b"])
        assert provider.responses == ("a", "b")

    def test_unknown_kind(self):
        """Test unknown kind."""
        with pytest.raises(ValueError, match="Unsupported response provider"):
            create_response_provider("gpt")


class TestLoadResponses:
    """Tests for reading canned replies from a file."""

    def test_reads_non_blank_lines(self, tmp_path):
        """Test reads non blank lines."""
        path = tmp_path / "replies.txt"
        path.write_text("  Sure thing.  \n\nNo idea!\n   \n", encoding="utf-8")
        assert load_responses(path) == ("Sure thing.", "No idea!")

    def test_empty_file_rejected(self, tmp_path):
        """Test empty file rejected."""
        path = tmp_path / "replies.txt"
        path.write_text("\n  \n", encoding="utf-8")
        with pytest.raises(ValueError, match="No responses"):
            load_responses(path)

    def test_missing_file(self, tmp_path):
        """Test missing file."""
        with pytest.raises(FileNotFoundError):
            load_responses(tmp_path / "missing.txt")
