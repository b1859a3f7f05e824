"""Factory for creating response providers."""

from typing import Any

from .base import ResponseProvider


def create_response_provider(kind: str = "canned", **config: Any) -> ResponseProvider:
    """Create a response provider.

    Args:
        kind: Provider type ("canned" or "echo")
        **config: Provider-specific configuration
            For canned:
                - responses: Sequence[str] (default: DEFAULT_RESPONSES)
                - rng: random.Random | None
            For echo:
                - prefix: str (default: "You said: ")

    Returns:
        ResponseProvider instance

    Raises:
        ValueError: If provider type is not supported
    """
    kind_lower = kind.lower()

    if kind_lower == "canned":
        from .canned import CannedResponseProvider
        return CannedResponseProvider(**config)

    if kind_lower == "echo":
        from .canned import EchoResponseProvider
        return EchoResponseProvider(**config)

    raise ValueError(
        f"Unsupported response provider: {kind}. "
        f"Supported providers: canned, echo"
    )
