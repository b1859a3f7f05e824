"""Factory for assembling the chat core."""

import random
from typing import TYPE_CHECKING

from .orchestrator import ChatOrchestrator, Scheduler
from .simulator import DEFAULT_MAX_DELAY, DEFAULT_MIN_DELAY, ResponseSimulator
from .store import ConversationStore

if TYPE_CHECKING:
    from ..responders.base import ResponseProvider


def create_orchestrator(
    provider: "ResponseProvider | None" = None,
    min_delay: float = DEFAULT_MIN_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    seed: int | None = None,
    scheduler: Scheduler | None = None,
) -> ChatOrchestrator:
    """Create an orchestrator with a fresh, empty store.

    Args:
        provider: Source of replies (default: canned responses)
        min_delay: Lower bound of the simulated latency in seconds
        max_delay: Upper bound (exclusive) of the simulated latency
        seed: Seed for delay and reply choice; None for nondeterministic
        scheduler: Function that runs reply coroutines

    Returns:
        ChatOrchestrator instance

    Raises:
        ValueError: If the delay range is invalid
    """
    rng = random.Random(seed)
    if provider is None:
        from ..responders import create_response_provider
        provider = create_response_provider("canned", rng=random.Random(rng.random()))

    store = ConversationStore()
    simulator = ResponseSimulator(
        store,
        provider,
        min_delay=min_delay,
        max_delay=max_delay,
        rng=rng,
    )
    return ChatOrchestrator(store, simulator, scheduler=scheduler)
