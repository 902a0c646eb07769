"""Command line interface for the Solitaire cipher."""

from .main import app, main

__all__ = ["app", "main"]
