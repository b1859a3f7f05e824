"""Pytest configuration and shared fixtures."""
import random

import pytest

from mockchat.chat import ChatOrchestrator, ConversationStore, ResponseSimulator
from mockchat.responders import CannedResponseProvider


class SequenceRandom(random.Random):
    """Random whose random() replays a fixed sequence (then repeats the last value)."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)

    def random(self):
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]


@pytest.fixture
def store():
    """Return an empty conversation store."""
    return ConversationStore()


@pytest.fixture
def canned_provider():
    """Return a canned provider with a seeded RNG."""
    return CannedResponseProvider(rng=random.Random(1234))


@pytest.fixture
def simulator(store, canned_provider):
    """Return a simulator that replies without waiting."""
    return ResponseSimulator(store, canned_provider, min_delay=0.0, max_delay=0.0)


@pytest.fixture
def orchestrator(store, simulator):
    """Return an orchestrator wired to the zero-delay simulator."""
    return ChatOrchestrator(store, simulator)


@pytest.fixture
def log_events():
    """Collect (level, component, message) tuples from debug callbacks."""
    return []


@pytest.fixture
def sequence_random():
    """Factory for RNGs that replay fixed random() values."""
    return SequenceRandom
