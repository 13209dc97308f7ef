"""Artist profile directory adapter."""

from .client import (
    InMemoryProfileDirectory,
    PostgrestProfileDirectory,
)

__all__ = ["InMemoryProfileDirectory", "PostgrestProfileDirectory"]
