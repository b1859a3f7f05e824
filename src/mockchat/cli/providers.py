"""Provider factory functions for CLI.

Centralizes creation of the response provider and the chat core from
environment variables and command-line overrides. Hides configuration
details from command implementations.
"""

import os
import random
from pathlib import Path
from typing import Any

from rich.console import Console

from ..chat import ChatOrchestrator, create_orchestrator
from ..responders import (
    DEFAULT_RESPONSES,
    ResponseProvider,
    create_response_provider,
    load_responses,
)

# Default console for output
_console = Console()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def get_settings(
    responder: str | None = None,
    responses_file: Path | None = None,
    min_delay: float | None = None,
    max_delay: float | None = None,
    seed: int | None = None,
) -> dict[str, Any]:
    """Resolve chat settings; explicit arguments win over the environment.

    Returns:
        Dict with keys responder, responses_file, min_delay, max_delay, seed

    Raises:
        ValueError: If an environment variable cannot be parsed

    Environment variables:
        MOCKCHAT_RESPONDER: Provider type (canned, echo; default: canned)
        MOCKCHAT_RESPONSES_FILE: File with one canned reply per line
        MOCKCHAT_MIN_DELAY: Minimum reply delay in seconds (default: 1.0)
        MOCKCHAT_MAX_DELAY: Maximum reply delay in seconds (default: 2.0)
        MOCKCHAT_SEED: Seed for reproducible delays and replies
    """
    env_file = os.getenv("MOCKCHAT_RESPONSES_FILE")
    return {
        "responder": responder or os.getenv("MOCKCHAT_RESPONDER", "canned"),
        "responses_file": responses_file or (Path(env_file) if env_file else None),
        "min_delay": min_delay if min_delay is not None else _env_float("MOCKCHAT_MIN_DELAY", 1.0),
        "max_delay": max_delay if max_delay is not None else _env_float("MOCKCHAT_MAX_DELAY", 2.0),
        "seed": seed if seed is not None else _env_int("MOCKCHAT_SEED"),
    }


def get_response_provider(settings: dict[str, Any]) -> ResponseProvider:
    """Create the response provider described by ``settings``.

    Raises:
        ValueError: If the provider type is unknown or the response set is empty
        FileNotFoundError: If the responses file does not exist
    """
    kind = settings["responder"].lower()
    if kind == "canned":
        path = settings.get("responses_file")
        responses = load_responses(path) if path else DEFAULT_RESPONSES
        seed = settings.get("seed")
        rng = random.Random(seed + 1) if seed is not None else None
        return create_response_provider("canned", responses=responses, rng=rng)
    return create_response_provider(kind)


def get_orchestrator(
    settings: dict[str, Any],
    console: Console | None = None,
) -> ChatOrchestrator:
    """Create the chat core from settings, exiting on bad configuration.

    Args:
        settings: Output of get_settings()
        console: Optional Rich console for output

    Returns:
        Configured ChatOrchestrator

    Raises:
        SystemExit: If the configuration is invalid
    """
    import typer

    con = console or _console
    try:
        provider = get_response_provider(settings)
        return create_orchestrator(
            provider=provider,
            min_delay=settings["min_delay"],
            max_delay=settings["max_delay"],
            seed=settings.get("seed"),
        )
    except (ValueError, OSError) as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
