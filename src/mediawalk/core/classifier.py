"""Content-based media classification.

Wraps the ``filetype`` library, which sniffs the leading bytes of a file and
returns its best-guess MIME type, and reduces its answer to one of three
outcomes: matched (audio, image or video), no match, or failed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import filetype

from mediawalk.models.core import MediaCategory, WalkOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifyOutcome:
    """Outcome of classifying one file.

    Use the ``matched``, ``no_match`` and ``failed`` constructors rather than
    building instances by hand.
    """

    kind: WalkOutcome
    mime: str = ""
    error: Optional[OSError] = None

    @classmethod
    def matched(cls, mime: str) -> "ClassifyOutcome":
        return cls(WalkOutcome.MATCHED, mime=mime)

    @classmethod
    def no_match(cls) -> "ClassifyOutcome":
        return cls(WalkOutcome.NO_MATCH)

    @classmethod
    def failed(cls, error: OSError) -> "ClassifyOutcome":
        return cls(WalkOutcome.FAILED, error=error)


# Anything with this shape can stand in for classify() in the walker.
Classifier = Callable[[str], ClassifyOutcome]


def classify(path: str) -> ClassifyOutcome:
    """Classify a file by its content.

    Args:
        path: Path of the file to inspect.

    Returns:
        ``matched(mime)`` when the detected type is audio, image or video;
        ``no_match()`` when the type is something else or cannot be
        determined (empty files included); ``failed(error)`` when the file
        cannot be opened or read, carrying the original OSError.
    """
    try:
        kind = filetype.guess(path)
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return ClassifyOutcome.failed(exc)

    if kind is None:
        return ClassifyOutcome.no_match()
    if MediaCategory.from_mime(kind.mime) is None:
        return ClassifyOutcome.no_match()
    return ClassifyOutcome.matched(kind.mime)
