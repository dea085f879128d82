"""Depth-first directory traversal.

Yields every entry below a root, directories before their contents, with the
entries of each directory in sorted name order so the traversal order is
deterministic for an unchanged tree.

Errors raised while listing or stat-ing entries are absorbed here: the entry
(or the whole subtree) simply contributes nothing further.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import FrozenSet, Iterator, Tuple, Union

logger = logging.getLogger(__name__)

# (st_dev, st_ino) of a directory, used to spot symlink cycles.
_DirKey = Tuple[int, int]


@dataclass(frozen=True)
class TreeEntry:
    """A single entry produced by walk_tree."""

    path: str
    """Path built by joining entry names onto the root."""

    is_file: bool
    """True for regular files (after resolving symlinks when following them)."""


def _dir_key(stat_result: os.stat_result) -> _DirKey:
    return stat_result.st_dev, stat_result.st_ino


def walk_tree(
    root: Union[str, "os.PathLike[str]"], follow_links: bool = True
) -> Iterator[TreeEntry]:
    """Walk *root* depth-first.

    Args:
        root: Directory to walk. A regular file yields itself; a missing root
            yields nothing.
        follow_links: Follow symbolic links to files and directories. A
            linked directory already being walked higher up the tree is
            reported but not descended into again.

    Yields:
        TreeEntry for the root and each entry below it.
    """
    root_path = os.fspath(root)
    try:
        root_stat = os.stat(root_path) if follow_links else os.lstat(root_path)
    except OSError as exc:
        logger.debug("Cannot walk %s: %s", root_path, exc)
        return

    if not stat.S_ISDIR(root_stat.st_mode):
        yield TreeEntry(root_path, is_file=stat.S_ISREG(root_stat.st_mode))
        return

    yield TreeEntry(root_path, is_file=False)
    yield from _walk_dir(root_path, follow_links, frozenset({_dir_key(root_stat)}))


def _walk_dir(
    directory: str, follow_links: bool, ancestors: FrozenSet[_DirKey]
) -> Iterator[TreeEntry]:
    """Yield the contents of *directory*, recursing into subdirectories."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=follow_links)
            is_file = not is_dir and entry.is_file(follow_symlinks=follow_links)
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", entry.path, exc)
            continue

        yield TreeEntry(entry.path, is_file=is_file)
        if not is_dir:
            continue

        try:
            key = _dir_key(entry.stat(follow_symlinks=follow_links))
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", entry.path, exc)
            continue
        if key in ancestors:
            logger.debug("Skipping symlink cycle at %s", entry.path)
            continue
        yield from _walk_dir(entry.path, follow_links, ancestors | {key})
