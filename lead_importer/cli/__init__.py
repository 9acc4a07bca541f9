"""Command line adapter for the lead import pipeline."""

from .app import main

__all__ = ["main"]
