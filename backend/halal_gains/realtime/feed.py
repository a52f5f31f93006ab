"""In-process row-change feed.

Services publish a ``ChangeEvent`` after they commit a row; consumers
subscribe to a table (optionally narrowed by column equality filters) and get
called back for every matching event until they close their subscription.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    event: str
    new: dict[str, Any] = field(default_factory=dict)


ChangeCallback = Callable[[ChangeEvent], None]


@dataclass
class _Listener:
    table: str
    event: str
    filters: dict[str, Any]
    callback: ChangeCallback

    def matches(self, change: ChangeEvent) -> bool:
        if change.table != self.table:
            return False
        if self.event != "*" and change.event != self.event:
            return False
        return all(change.new.get(key) == value for key, value in self.filters.items())


class Subscription:
    """Handle for a registered listener. Closing it is idempotent."""

    def __init__(self, feed: LiveFeed, listener_id: int, topic: str) -> None:
        self._feed = feed
        self._listener_id = listener_id
        self.topic = topic
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._feed._remove(self._listener_id)
        logger.debug("Closed subscription %s", self.topic)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class LiveFeed:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[int, _Listener] = {}
        self._ids = count(1)

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        *,
        event: str = INSERT,
        filters: dict[str, Any] | None = None,
    ) -> Subscription:
        listener = _Listener(table, event, dict(filters or {}), callback)
        with self._lock:
            listener_id = next(self._ids)
            self._listeners[listener_id] = listener
        topic = _topic(table, listener.filters)
        logger.debug("Opened subscription %s (%s)", topic, event)
        return Subscription(self, listener_id, topic)

    def publish(self, table: str, event: str, row: dict[str, Any]) -> int:
        """Deliver a change to every matching listener; return how many were called."""
        change = ChangeEvent(table=table, event=event, new=dict(row))
        with self._lock:
            targets = [l for l in self._listeners.values() if l.matches(change)]
        for listener in targets:
            try:
                listener.callback(change)
            except Exception:
                logger.exception("Live feed listener on %s failed", table)
        return len(targets)

    def listener_count(self, table: str | None = None) -> int:
        with self._lock:
            if table is None:
                return len(self._listeners)
            return sum(1 for l in self._listeners.values() if l.table == table)

    def _remove(self, listener_id: int) -> None:
        with self._lock:
            self._listeners.pop(listener_id, None)


def _topic(table: str, filters: dict[str, Any]) -> str:
    if not filters:
        return table
    predicate = ",".join(f"{key}=eq.{value}" for key, value in sorted(filters.items()))
    return f"{table}:{predicate}"
