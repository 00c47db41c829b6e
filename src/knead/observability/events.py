"""Event model for build and live-reload observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A single build-pipeline action occurred.

    Attributes:
        kind: The type of build action.
        source: Source file path (or description).
        target: Output file path (or description).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: Literal["render", "copy_static", "copy_content", "install_resource"]
    source: str
    target: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RebuildEvent:
    """A file change triggered a site rebuild.

    Attributes:
        trigger_paths: Changed files that caused the rebuild.
        succeeded: False if the rebuild raised.
        error: Error message when the rebuild failed.
        duration_ms: Wall-clock time of the rebuild.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger_paths: tuple[str, ...]
    succeeded: bool
    error: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ReloadEvent:
    """Connected browsers were told to reload.

    Attributes:
        clients_notified: Number of SSE clients that received the event.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    clients_notified: int
    timestamp_ns: int


type SiteEvent = BuildEvent | RebuildEvent | ReloadEvent


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
