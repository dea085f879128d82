"""Streaming media walker.

start_walking() returns immediately with a ResultStream and hands the actual
work to a single background thread. That thread walks the tree, classifies
every regular file and puts one WalkResult per file on a FIFO queue, in
traversal order. The consumer iterates the stream while the walk is still in
progress; iteration ends once the producer has finished and the queue is
drained.

Design:
- The queue and the stop event are the only objects shared by the two
  threads. The root path and options are copied into the thread when it is started.
- Per-file problems never stop the walk. Unreadable files become FAILED
  results, paths that are not valid UTF-8 are skipped, and traversal errors
  are absorbed by walk_tree.
- The producer always finishes by putting an end-of-stream marker on the
  queue, even when it crashes. A consumer waiting on a closed stream checks
  the stop flag instead, so it never waits forever either.
- Closing the stream (explicitly, via ``with``, or by dropping the last
  reference to it) asks the producer to stop early instead of walking the
  rest of the tree for nobody.
"""

import logging
import os
import queue
import threading
import weakref
from typing import Iterator, Optional, Union

from mediawalk.core.classifier import Classifier, ClassifyOutcome, classify
from mediawalk.core.tree import walk_tree
from mediawalk.models.core import WalkOptions, WalkOutcome, WalkResult

logger = logging.getLogger(__name__)

# How long a blocked get or put waits before re-checking the stop flag.
_POLL_SECONDS = 0.1

_END_OF_STREAM = object()


class ResultStream:
    """Single-pass iterator over the results of one walk.

    Instances are created by start_walking(); they are not restartable. Once
    exhausted (or closed), further iteration yields nothing.
    """

    def __init__(
        self,
        results: "queue.Queue[object]",
        stop: threading.Event,
        producer: threading.Thread,
    ) -> None:
        self._results = results
        self._stop = stop
        self._producer = producer
        self._exhausted = False
        # Stop the producer if the consumer drops the stream without closing it.
        self._finalizer = weakref.finalize(self, stop.set)

    def __iter__(self) -> "ResultStream":
        return self

    def __next__(self) -> WalkResult:
        # close() may run on another thread while this one waits, and the
        # producer does not send the end marker once the stream is closed.
        while not self._exhausted and not self._stop.is_set():
            try:
                item = self._results.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                continue
            if item is _END_OF_STREAM:
                self._exhausted = True
                self._finalizer.detach()
                break
            return item  # type: ignore[return-value]
        self._exhausted = True
        raise StopIteration

    def __enter__(self) -> "ResultStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:  # type: ignore[no-untyped-def]
        self.close()
        return False

    def close(self) -> None:
        """Stop consuming and ask the producer to stop walking.

        Results still sitting in the queue are discarded.
        """
        if not self._exhausted:
            logger.debug("Result stream closed before exhaustion")
        self._exhausted = True
        self._finalizer()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the producer thread to finish.

        Returns:
            True if the producer has finished.
        """
        self._producer.join(timeout)
        return not self._producer.is_alive()

    @property
    def done(self) -> bool:
        """True once the producer thread has finished."""
        return not self._producer.is_alive()


def start_walking(
    root: Union[str, "os.PathLike[str]"],
    *,
    follow_links: bool = True,
    queue_size: int = 0,
    classifier: Classifier = classify,
) -> ResultStream:
    """Start walking *root* in the background.

    Args:
        root: Directory to walk. It is not checked up front; a missing root
            produces an empty stream.
        follow_links: Follow symbolic links while walking.
        queue_size: Maximum number of results waiting to be consumed; 0 means
            unbounded. With a bound, the producer pauses while the queue is full.
        classifier: Callable used to classify each file. Defaults to classify().

    Returns:
        A ResultStream yielding one WalkResult per regular file, in traversal
        order.

    Raises:
        pydantic.ValidationError: If queue_size is negative.
    """
    root_text = os.fsdecode(root)
    options = WalkOptions(
        root=root_text,
        follow_links=follow_links,
        queue_size=queue_size,
    )
    results: "queue.Queue[object]" = queue.Queue(maxsize=options.queue_size)
    stop = threading.Event()
    producer = threading.Thread(
        target=_produce,
        args=(options.root, options.follow_links, classifier, results, stop),
        name=f"mediawalk-{os.path.basename(options.root) or 'root'}",
        daemon=True,
    )
    producer.start()
    return ResultStream(results, stop, producer)


def walk(
    root: Union[str, "os.PathLike[str]"],
    *,
    follow_links: bool = True,
    queue_size: int = 0,
    classifier: Classifier = classify,
) -> Iterator[WalkResult]:
    """Generator version of start_walking().

    Closing the generator (or leaving a ``for`` loop early and letting it be
    collected) stops the background walk.
    """
    with start_walking(
        root,
        follow_links=follow_links,
        queue_size=queue_size,
        classifier=classifier,
    ) as stream:
        yield from stream


def _as_text(path: str) -> Optional[str]:
    """Return *path* if it is valid UTF-8 text, None otherwise.

    Undecodable bytes in file names surface as lone surrogates, which cannot
    be encoded back to UTF-8.
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return path


def _to_result(path: str, outcome: ClassifyOutcome) -> WalkResult:
    if outcome.kind is WalkOutcome.MATCHED:
        return WalkResult(path=path, outcome=WalkOutcome.MATCHED, mime=outcome.mime)
    if outcome.kind is WalkOutcome.FAILED:
        return WalkResult(path=path, outcome=WalkOutcome.FAILED, error=outcome.error)
    return WalkResult(path=path, outcome=WalkOutcome.NO_MATCH)


def _send(
    results: "queue.Queue[object]", item: object, stop: threading.Event
) -> bool:
    """Put *item* on the queue unless the consumer has gone away.

    Returns:
        False if the stream was closed before the item could be delivered.
    """
    while not stop.is_set():
        try:
            results.put(item, timeout=_POLL_SECONDS)
            return True
        except queue.Full:
            continue
    return False


def _produce(
    root: str,
    follow_links: bool,
    classifier: Classifier,
    results: "queue.Queue[object]",
    stop: threading.Event,
) -> None:
    """Body of the producer thread."""
    emitted = 0
    skipped = 0
    logger.debug("Walk started: %s (follow_links=%s)", root, follow_links)
    try:
        for entry in walk_tree(root, follow_links=follow_links):
            if stop.is_set():
                logger.debug("Stream closed, stopping walk of %s", root)
                return
            if not entry.is_file:
                continue

            path = _as_text(entry.path)
            if path is None:
                skipped += 1
                logger.debug("Skipping non UTF-8 path %r", entry.path)
                continue

            if not _send(results, _to_result(path, classifier(path)), stop):
                logger.debug("Stream closed, stopping walk of %s", root)
                return
            emitted += 1
    except Exception:
        logger.exception("Walk of %s aborted by an unexpected error", root)
    finally:
        _send(results, _END_OF_STREAM, stop)
        logger.debug(
            "Walk finished: %s (%d results, %d paths skipped)", root, emitted, skipped
        )
