"""File watcher — triggers a rebuild when anything in the site changes.

Watches the whole site root. Changes under ``.git``, ``.DS_Store`` files and
anything inside the output directory are ignored so a build never triggers
itself.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from knead.config import KneadConfig

DEBOUNCE_MS = 750

IGNORED_NAMES = frozenset({".git", ".DS_Store"})


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def should_ignore(path: Path, config: KneadConfig) -> bool:
    """Whether a change to *path* must not trigger a rebuild."""
    if path.is_relative_to(config.output_path):
        return True
    try:
        parts = path.relative_to(config.root).parts
    except ValueError:
        parts = path.parts
    return any(part in IGNORED_NAMES for part in parts)


class SiteWatcher:
    """Watches the site root and yields debounced batches of changes.

    watchfiles runs in a background thread; each debounced batch is handed
    to the event loop that called ``start()``.

    Args:
        config: Site configuration.
        debounce_ms: Quiet period before a batch is delivered.

    """

    def __init__(self, config: KneadConfig, debounce_ms: int = DEBOUNCE_MS) -> None:
        self._config = config
        self._debounce_ms = debounce_ms
        self._queue: asyncio.Queue[tuple[ChangeEvent, ...]] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread. Call from the event loop."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="knead-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[tuple[ChangeEvent, ...]]:
        """Yield one tuple of changes per debounced batch.

        Ends once the watcher is stopped and the queue is drained.

        """
        while self.is_running or not self._queue.empty():
            try:
                batch = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield batch
            except TimeoutError:
                if not self.is_running:
                    break

    def collect(self, raw_changes: set[tuple[Change, str]]) -> tuple[ChangeEvent, ...]:
        """Turn a raw watchfiles batch into sorted, filtered change events."""
        events = []
        for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
            path = Path(path_str)
            if should_ignore(path, self._config):
                continue
            kind = _CHANGE_KIND_MAP.get(change_type, "modified")
            events.append(ChangeEvent(path=path, kind=kind))
        return tuple(events)

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and hand batches to the loop."""
        from watchfiles import watch

        for raw_changes in watch(
            self._config.root,
            stop_event=self._stop_event,
            debounce=self._debounce_ms,
            step=100,
        ):
            batch = self.collect(raw_changes)
            if batch and self._loop is not None:
                self._loop.call_soon_threadsafe(self._queue.put_nowait, batch)
