"""The process-wide serial work queue.

Every log write, from every Log instance and every level, runs on one worker
thread in submission order. Console lines and file rewrites therefore never
interleave, and no file-level locking is needed.

- submit(): enqueue and return immediately
- run_sync(): enqueue and block until the item has run, returning its result
- flush(): block until everything submitted so far has run

Nothing can be cancelled once enqueued and there is no timeout: a stalled
write stalls the queue. Pending items are drained at interpreter exit.
"""

from __future__ import annotations

__all__ = [
    "SerialQueue",
    "get_serial_queue",
]

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

from sequoia.constants import QUEUE_THREAD_NAME
from sequoia.diagnostics import get_diagnostic_logger

R = TypeVar("R")


class SerialQueue:
    """A FIFO queue with a single worker thread.

    Work submitted from the worker thread itself through run_sync() runs
    inline, so code already on the queue can log synchronously without
    waiting on itself.
    """

    def __init__(self, name: str = QUEUE_THREAD_NAME) -> None:
        self._worker_ident: int | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=name,
            initializer=self._register_worker,
        )

    def _register_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    @property
    def on_worker_thread(self) -> bool:
        """Whether the calling thread is this queue's worker."""
        return threading.get_ident() == self._worker_ident

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future[None]:
        """Enqueue work and return without waiting.

        An exception raised by the work is reported through the diagnostic
        logger; it cannot reach the caller, who has already moved on.

        Returns:
            Future that completes when the work has run.
        """
        return self._executor.submit(_run_reporting_errors, fn, *args)

    def run_sync(self, fn: Callable[..., R], *args: Any) -> R:
        """Enqueue work and block until it (and everything before it) has run.

        Returns:
            The work's return value.

        Raises:
            Whatever the work raised.
        """
        if self.on_worker_thread:
            return fn(*args)
        return self._executor.submit(fn, *args).result()

    def flush(self) -> None:
        """Block until every item submitted so far has run."""
        self.run_sync(_noop)

    def shutdown(self) -> None:
        """Run remaining items and stop the worker thread."""
        self._executor.shutdown(wait=True)


def _noop() -> None:
    return None


def _run_reporting_errors(fn: Callable[..., Any], *args: Any) -> None:
    try:
        fn(*args)
    except Exception as e:
        get_diagnostic_logger().error(
            {
                "event": "log_task_failed",
                "error_type": type(e).__name__,
                "error": str(e),
                "message": f"Log write failed: {type(e).__name__}: {e}",
            }
        )


# Module-level singleton queue - created on first use
_serial_queue: SerialQueue | None = None
_serial_queue_lock = threading.Lock()


def get_serial_queue() -> SerialQueue:
    """Get the process-wide serial queue shared by every Log instance."""
    global _serial_queue
    with _serial_queue_lock:
        if _serial_queue is None:
            _serial_queue = SerialQueue()
        return _serial_queue
