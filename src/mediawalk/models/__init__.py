"""Domain models for the mediawalk package."""

from mediawalk.models.core import MediaCategory, WalkOptions, WalkOutcome, WalkResult

__all__ = [
    "MediaCategory",
    "WalkOptions",
    "WalkOutcome",
    "WalkResult",
]
