"""SSE broadcaster — tells connected browsers to reload.

Every page served by ``knead serve`` opens an ``EventSource`` on the
live-reload endpoint. After each successful rebuild the broadcaster puts a
``reload`` event name on every connection's queue; the SSE route turns
queued names into Chirp events.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

RELOAD_EVENT = "reload"


@dataclass(frozen=True, slots=True)
class SSEConnection:
    """A connected SSE client.

    Attributes:
        client_id: Unique identifier for this connection.
        queue: asyncio.Queue[str] of event names for the client's generator.

    """

    client_id: str
    queue: asyncio.Queue[str] = field(default_factory=asyncio.Queue, compare=False, hash=False)


class Broadcaster:
    """Tracks live-reload connections and fans reload events out to them.

    Thread-safe: the connection set is protected by a lock.

    """

    def __init__(self) -> None:
        self._connections: set[SSEConnection] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of active SSE connections."""
        with self._lock:
            return len(self._connections)

    def subscribe(self, conn: SSEConnection) -> None:
        """Register an SSE client."""
        with self._lock:
            self._connections.add(conn)

    def unsubscribe(self, conn: SSEConnection) -> None:
        """Remove an SSE client."""
        with self._lock:
            self._connections.discard(conn)

    def get_subscribers(self) -> frozenset[SSEConnection]:
        """Snapshot of all connections (no lock held on return)."""
        with self._lock:
            return frozenset(self._connections)

    async def push_reload(self) -> int:
        """Send a ``reload`` event to every connected browser.

        Returns:
            Number of clients notified.

        """
        count = 0
        for conn in self.get_subscribers():
            try:
                conn.queue.put_nowait(RELOAD_EVENT)
                count += 1
            except asyncio.QueueFull:
                pass

        return count

    async def client_generator(self, conn: SSEConnection) -> AsyncIterator[str]:
        """Async generator that yields events from a connection's queue.

        Yields event names; the server wraps each in a Chirp ``SSEEvent``.
        A client going away cancels the generator; that ends the stream
        quietly.

        """
        try:
            while True:
                event = await conn.queue.get()
                yield event
        except (asyncio.CancelledError, GeneratorExit):
            return
