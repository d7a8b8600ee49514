"""Vibe To-Do: a small deadline-aware to-do widget."""

__version__ = "0.1.0"
