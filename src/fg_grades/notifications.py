"""
Module: notifications

Purpose:
    Optional fire-and-forget notification hook. The session reports
    milestones (document loaded, import applied, export written) to a
    host-supplied sink without ever waiting on it or failing because of it.

Key Classes:
    - NotificationEvent: Immutable event payload
    - NotificationDispatcher: Runs the sink on a background thread

Dependencies:
    - concurrent.futures: Background execution

Used By:
    - fg_grades.controller.GradeSession

The sink is any callable taking a NotificationEvent. Transport and any
credentials belong to the host's server side, never to this package.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Set

if TYPE_CHECKING:
    from fg_grades.settings import PreferenceStore

logger = logging.getLogger(__name__)

NotificationSink = Callable[["NotificationEvent"], None]


@dataclass(frozen=True)
class NotificationEvent:
    """
    One notification.

    Attributes:
        kind: Event name, e.g. "document_loaded"
        details: Small JSON-friendly payload
        target: Destination chosen by the user (see settings.PreferenceStore)
    """
    kind: str
    details: Dict[str, Any] = field(default_factory=dict)
    target: Optional[str] = None


class NotificationDispatcher:
    """
    Background dispatcher for a notification sink.

    `notify()` returns immediately. Sink exceptions are logged and dropped;
    nothing is retried. Finished events are released as they complete, so
    fire-and-forget use never accumulates state.

    Usage:
        dispatcher = NotificationDispatcher.from_preferences(store, sink)
        try:
            dispatcher.notify(NotificationEvent("export_written"))
        finally:
            dispatcher.shutdown()
    """

    def __init__(self, sink: NotificationSink, *, target: Optional[str] = None, max_workers: int = 1):
        """
        Args:
            sink: Callable receiving each event
            target: Default target stamped on events without one
            max_workers: Background threads
        """
        self._sink = sink
        self.target = target
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="fg-notify")
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()
        self._delivered = 0
        self._closed = False

    @classmethod
    def from_preferences(
        cls, store: "PreferenceStore", sink: NotificationSink, *, max_workers: int = 1
    ) -> "NotificationDispatcher":
        """Dispatcher whose default target is the one saved in `store`."""
        return cls(sink, target=store.get_notification_target(), max_workers=max_workers)

    @property
    def pending_count(self) -> int:
        """Events queued or in flight."""
        with self._lock:
            return len(self._pending)

    def notify(self, event: NotificationEvent) -> Optional[Future]:
        """Queue `event` for the sink; returns None once shut down."""
        if self._closed:
            logger.debug(f"Dispatcher closed, dropping {event.kind!r}")
            return None
        if event.target is None and self.target is not None:
            event = NotificationEvent(kind=event.kind, details=event.details, target=self.target)
        try:
            future = self._executor.submit(self._deliver, event)
        except RuntimeError as e:
            logger.warning(f"Could not queue notification {event.kind!r}: {e}")
            return None
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _deliver(self, event: NotificationEvent) -> bool:
        try:
            self._sink(event)
        except Exception as e:
            logger.warning(f"Notification {event.kind!r} failed: {e}")
            return False
        with self._lock:
            self._delivered += 1
        return True

    def wait_all(self, timeout: Optional[float] = None) -> int:
        """
        Wait for queued notifications.

        Returns:
            Number delivered successfully since the previous call
        """
        with self._lock:
            pending = list(self._pending)
        for future in pending:
            future.result(timeout=timeout)
        with self._lock:
            delivered, self._delivered = self._delivered, 0
        return delivered

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting events; optionally wait for in-flight ones."""
        self._closed = True
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "NotificationDispatcher":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown(wait=True)
