"""Response providers for mockchat.

Provides the sources of assistant replies behind a single interface.
"""

from .base import ResponseProvider
from .canned import (
    DEFAULT_RESPONSES,
    CannedResponseProvider,
    EchoResponseProvider,
    load_responses,
)
from .factory import create_response_provider

__all__ = [
    "DEFAULT_RESPONSES",
    "CannedResponseProvider",
    "EchoResponseProvider",
    "ResponseProvider",
    "create_response_provider",
    "load_responses",
]
