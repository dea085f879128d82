# SPDX-FileCopyrightText: 2025-present mediawalk contributors
#
# SPDX-License-Identifier: MIT

"""mediawalk - stream audio, image and video files out of a directory tree."""

from mediawalk.__about__ import __version__
from mediawalk.core.classifier import ClassifyOutcome, classify
from mediawalk.core.walker import ResultStream, start_walking, walk
from mediawalk.models.core import MediaCategory, WalkOptions, WalkOutcome, WalkResult

__all__ = [
    "__version__",
    "ClassifyOutcome",
    "MediaCategory",
    "ResultStream",
    "WalkOptions",
    "WalkOutcome",
    "WalkResult",
    "classify",
    "start_walking",
    "walk",
]
