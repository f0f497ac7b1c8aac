"""
Cache event reporting.
Delivers hit/miss notifications outside the render call stack.
"""

import asyncio
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any

from .core import get_logger
from .models import CacheEvent

logger = get_logger(__name__)

EventCallback = Callable[[CacheEvent], Any]


class EventReporter:
    """
    Deferred delivery of cache events to a user callback.

    Inside a running asyncio loop events are scheduled with ``call_soon`` on
    that loop; elsewhere they go to a single background worker. Either way the
    callback runs after the render that produced the event has returned
    control, and its failures never reach the renderer.
    """

    def __init__(self, callback: EventCallback | None = None) -> None:
        self.callback = callback
        self._executor: ThreadPoolExecutor | None = None
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.callback is not None

    def notify(self, event: CacheEvent) -> None:
        """Schedule delivery of ``event``; no-op without a callback."""
        if self.callback is None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            loop.call_soon(self._deliver, event)
            return

        future = self._get_executor().submit(self._deliver, event)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._discard)

    def _deliver(self, event: CacheEvent) -> None:
        try:
            self.callback(event)  # type: ignore[misc]
        except Exception as e:
            logger.warning(
                "event_callback_failed",
                cache_event=event.event,
                component=event.component_name,
                error=str(e),
            )

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="render-cache-events"
            )
        return self._executor

    def flush(self, timeout: float | None = None) -> bool:
        """
        Wait for background deliveries queued so far.

        Returns:
            True if all of them finished within ``timeout``
        """
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> None:
        """Deliver what is queued and stop the background worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


__all__ = ["EventReporter", "EventCallback"]
