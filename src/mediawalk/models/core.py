"""Core domain models for mediawalk.

This module defines the data structures that flow out of a directory walk.
- MediaCategory is the fixed set of recognized media families and the MIME
  prefixes used to detect them.
- WalkResult is the unit delivered to the consumer, one per regular file.
- WalkOptions groups the knobs accepted by the streaming walker.

Design:
- WalkResult carries a tagged outcome (matched / no match / failed) rather
  than encoding "no match" inside the path string.
- Validators keep the outcome, MIME and error fields consistent so a consumer
  can rely on ``mime`` being populated exactly when the outcome is MATCHED.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MediaCategory(str, Enum):
    """Recognized media family.

    The value of each member is the MIME type prefix that identifies it.
    """

    AUDIO = "audio"
    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def from_mime(cls, mime: str) -> Optional["MediaCategory"]:
        """Return the category whose prefix starts *mime*, if any.

        The comparison is case-sensitive, so ``"Image/png"`` is not an image.

        Args:
            mime: A full MIME type string such as ``"image/png"``.

        Returns:
            The matching MediaCategory, or None for non-media types.
        """
        for category in cls:
            if mime.startswith(category.value):
                return category
        return None


class WalkOutcome(str, Enum):
    """How the classification of a single file ended."""

    MATCHED = "matched"
    NO_MATCH = "no_match"
    FAILED = "failed"


class WalkResult(BaseModel):
    """Result for a single regular file found during a walk.

    Constructed by the producer thread at the moment the file is classified
    and handed over to the consumer through the result queue.
    """

    path: str
    """Path of the file as produced by the traversal (relative or absolute,
    depending on the root that was given)."""

    outcome: WalkOutcome
    """MATCHED, NO_MATCH or FAILED."""

    mime: str = ""
    """Detected MIME type. Empty unless the outcome is MATCHED."""

    error: Optional[OSError] = None
    """The error raised while reading the file. Only set when FAILED."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def category(self) -> Optional[MediaCategory]:
        """Media category of a matched file, None otherwise."""
        if self.outcome is not WalkOutcome.MATCHED:
            return None
        return MediaCategory.from_mime(self.mime)

    @property
    def is_media(self) -> bool:
        return self.outcome is WalkOutcome.MATCHED

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation of the result.

        The error, when present, is rendered as ``"<ExceptionName>: <message>"``.
        """
        return {
            "path": self.path,
            "outcome": self.outcome.value,
            "mime": self.mime,
            "error": (
                f"{type(self.error).__name__}: {self.error}"
                if self.error is not None
                else None
            ),
        }

    @model_validator(mode="after")
    def validate_outcome(self: "WalkResult") -> "WalkResult":
        """Ensure path, MIME and error agree with the outcome.

        Raises:
            ValueError: If the path is empty or the fields contradict the outcome.
        """
        if not self.path:
            raise ValueError("path must not be empty")
        if self.outcome is WalkOutcome.MATCHED:
            if not self.mime:
                raise ValueError("a matched result needs a MIME type")
            if self.error is not None:
                raise ValueError("a matched result cannot carry an error")
        elif self.outcome is WalkOutcome.NO_MATCH:
            if self.mime or self.error is not None:
                raise ValueError("a no-match result has neither MIME type nor error")
        else:
            if self.error is None:
                raise ValueError("a failed result needs an error")
            if self.mime:
                raise ValueError("a failed result cannot carry a MIME type")
        return self


class WalkOptions(BaseModel):
    """Options for a single streaming walk."""

    root: str
    """Directory (or file) the traversal starts from, exactly as given so that
    result paths keep its spelling. Not required to exist."""

    follow_links: bool = True
    """Whether symbolic links to files and directories are followed."""

    queue_size: int = Field(default=0, ge=0)
    """Capacity of the result queue; 0 means unbounded."""
