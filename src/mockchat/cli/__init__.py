"""Command-line interface for mockchat."""

from .app import app, main

__all__ = ["app", "main"]
