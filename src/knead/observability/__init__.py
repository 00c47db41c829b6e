"""Observability — a record of what the build and serve loop did.

Events cover:
- **Build**: every page rendered and file copied
- **Serve**: watcher-triggered rebuilds and live-reload broadcasts

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from the server and the rebuild thread.

Quick Start:
    >>> from knead.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> collector.record_build("render", "index.md", "public/index.html")
    >>> len(log)
    1

"""

from knead.observability.collector import BuildCollector
from knead.observability.events import (
    BuildEvent,
    RebuildEvent,
    ReloadEvent,
    SiteEvent,
    now_ns,
)
from knead.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildEvent",
    "EventLog",
    "RebuildEvent",
    "ReloadEvent",
    "SiteEvent",
    "now_ns",
]
