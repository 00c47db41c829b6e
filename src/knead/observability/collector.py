"""Build collector — records pipeline events into an ``EventLog``.

The site builder, the watcher loop and the live-reload broadcaster all
report through one collector so a serve session can be inspected
afterwards.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Rebuilds run in a worker thread while the server records reloads.

"""

from __future__ import annotations

from knead.observability.events import BuildEvent, RebuildEvent, ReloadEvent, now_ns
from knead.observability.log import EventLog


class BuildCollector:
    """Event collector for the build and serve loop.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_build(
        self,
        kind: str,
        source: str,
        target: str,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a build pipeline event."""
        self._log.append(
            BuildEvent(
                kind=kind,  # type: ignore[arg-type]
                source=source,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_rebuild(
        self,
        trigger_paths: tuple[str, ...],
        *,
        error: str = "",
        duration_ms: float = 0.0,
    ) -> None:
        """Record a watcher-triggered rebuild. An empty *error* means success."""
        self._log.append(
            RebuildEvent(
                trigger_paths=trigger_paths,
                succeeded=not error,
                error=error,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_reload(self, clients_notified: int) -> None:
        """Record a live-reload broadcast."""
        self._log.append(
            ReloadEvent(clients_notified=clients_notified, timestamp_ns=now_ns())
        )
