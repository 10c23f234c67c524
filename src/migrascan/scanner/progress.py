"""Progress stream — delivers ScanProgress snapshots off the scan thread."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

from migrascan.scanner.models import ScanProgress

logger = logging.getLogger(__name__)

ProgressListener = Callable[[ScanProgress], None]

# Seconds the delivery thread waits for a new snapshot before exiting
DEFAULT_IDLE_TIMEOUT = 1.0


class ProgressBroadcaster:
    """Fan-out of progress snapshots to registered listeners.

    ``publish`` only enqueues; a daemon thread calls the listeners in
    publish order, so a slow listener delays delivery, never the scan.
    The thread exits once the queue stays empty for *idle_timeout*
    seconds and is restarted by the next ``publish``.
    """

    def __init__(self, idle_timeout: float = DEFAULT_IDLE_TIMEOUT) -> None:
        self._listeners: list[ProgressListener] = []
        self._lock = threading.Lock()
        self._queue: queue.Queue[ScanProgress] = queue.Queue()
        self._worker: threading.Thread | None = None
        self._idle_timeout = idle_timeout

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    @property
    def is_delivering(self) -> bool:
        """True while the delivery thread is alive."""
        with self._lock:
            return self._worker is not None and self._worker.is_alive()

    def publish(self, snapshot: ScanProgress) -> None:
        """Queue *snapshot* for delivery. Never blocks."""
        with self._lock:
            if not self._listeners:
                return
            self._queue.put_nowait(snapshot)
            if self._worker is None:
                self._worker = threading.Thread(
                    target=self._deliver_loop,
                    name="migrascan-progress",
                    daemon=True,
                )
                self._worker.start()

    def flush(self) -> None:
        """Block until every published snapshot has been delivered."""
        self._queue.join()

    def _deliver_loop(self) -> None:
        while True:
            try:
                snapshot = self._queue.get(timeout=self._idle_timeout)
            except queue.Empty:
                # publish enqueues under the lock, so an empty check here
                # cannot miss a snapshot.
                with self._lock:
                    if self._queue.empty():
                        self._worker = None
                        return
                continue
            try:
                with self._lock:
                    listeners = list(self._listeners)
                for listener in listeners:
                    try:
                        listener(snapshot)
                    except Exception:
                        logger.exception("Progress listener %r failed", listener)
            finally:
                self._queue.task_done()
