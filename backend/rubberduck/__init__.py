"""Rubber Duck chat backend: conversation context-window selection."""

__version__ = "0.1.0"
