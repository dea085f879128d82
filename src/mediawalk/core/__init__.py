"""Core functionality for mediawalk.

This package exposes the streaming walker and the content classifier.
- start_walking: Walks a directory tree in a background thread and streams
  one WalkResult per regular file.
- classify: Decides from file content whether a file is audio, image or video.

See walker.py for the producer/consumer details and tree.py for traversal.
"""

from mediawalk.core.classifier import ClassifyOutcome, classify
from mediawalk.core.tree import TreeEntry, walk_tree
from mediawalk.core.walker import ResultStream, start_walking, walk

__all__ = [
    "ClassifyOutcome",
    "ResultStream",
    "TreeEntry",
    "classify",
    "start_walking",
    "walk",
    "walk_tree",
]
