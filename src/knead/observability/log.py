"""Event log — what a build or serve session did, newest events kept.

``knead serve`` exposes the log at ``/_int/stats``; the server reads it
through ``query``, ``recent`` and ``stats``.

Thread Safety:
    Rebuilds append from a worker thread while request handlers read, so
    every access goes through one ``threading.Lock``.

"""

import threading
from collections import deque
from typing import Any

from knead.observability.events import SiteEvent


def _touched_paths(event: SiteEvent) -> tuple[str, ...]:
    paths = getattr(event, "trigger_paths", None)
    if paths is not None:
        return paths
    source = getattr(event, "source", None)
    return (source,) if source else ()


class EventLog:
    """Ring buffer of site events.

    Args:
        max_events: Capacity; once reached, each append drops the oldest event.

    """

    __slots__ = ("_capacity", "_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._capacity = max_events
        self._events: deque[SiteEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: SiteEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[SiteEvent]:
        """Newest-first events matching every given filter.

        Args:
            event_type: Keep instances of this event class only.
            since_ns: Drop events stamped before this monotonic time.
            path: Keep events whose source or trigger paths contain this text.
            limit: Stop after this many matches.

        """
        with self._lock:
            snapshot = list(self._events)

        matches: list[SiteEvent] = []
        for event in reversed(snapshot):
            if len(matches) == limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and not any(path in p for p in _touched_paths(event)):
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[SiteEvent]:
        """The last *n* events, oldest first."""
        with self._lock:
            snapshot = list(self._events)
        return snapshot[-n:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Event count, capacity and a count per event class."""
        with self._lock:
            snapshot = list(self._events)

        by_type: dict[str, int] = {}
        for event in snapshot:
            name = type(event).__name__
            by_type[name] = by_type.get(name, 0) + 1
        return {"total": len(snapshot), "max_events": self._capacity, "by_type": by_type}
