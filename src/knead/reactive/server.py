"""Dev server — static output plus the live-reload endpoint.

The Chirp app serves the build output directory as static files and
exposes:

- ``/_int/live-reload``, an SSE stream that carries a ``reload`` event after
  every rebuild; the bundled ``/_int/live-reload.js`` script listens on it;
- ``/_int/stats``, a JSON summary of the session's event log.

Static responses are marked uncacheable so a reload always refetches
stylesheets and scripts.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from knead.observability.events import RebuildEvent

if TYPE_CHECKING:
    from chirp import App, Request

    from knead.config import KneadConfig
    from knead.content.watcher import ChangeEvent, SiteWatcher
    from knead.export.builder import SiteBuilder
    from knead.observability.collector import BuildCollector
    from knead.observability.log import EventLog
    from knead.reactive.broadcaster import Broadcaster

    type Middleware = Callable[[Any, Any], Awaitable[Any]]

LIVE_RELOAD_ENDPOINT = "/_int/live-reload"
STATS_ENDPOINT = "/_int/stats"

NO_CACHE_HEADERS: tuple[tuple[str, str], ...] = (
    ("Cache-Control", "no-store, must-revalidate"),
    ("Pragma", "no-cache"),
    ("Expires", "0"),
)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

def with_no_cache(response: Any) -> Any:
    """Return *response* with the no-cache headers set.

    Streaming responses without header support pass through unchanged.
    """
    if not hasattr(response, "with_header"):
        return response
    for name, value in NO_CACHE_HEADERS:
        response = response.with_header(name, value)
    return response


def no_cache(inner: Middleware) -> Middleware:
    """Wrap the *inner* middleware so everything it returns is uncacheable."""

    async def no_cache_middleware(request: Request, next: Any) -> Any:
        return with_no_cache(await inner(request, next))

    return no_cache_middleware


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

def stats_payload(log: EventLog, *, recent: int = 20) -> dict[str, Any]:
    """Summarize *log* for the stats endpoint.

    Returns the log's counters, the latest rebuilds (newest first) and the
    most recent events of any type (oldest first).
    """
    return {
        "event_log": log.stats(),
        "rebuilds": [
            dataclasses.asdict(event)
            for event in log.query(event_type=RebuildEvent, limit=10)
        ],
        "recent": [
            {"type": type(event).__name__, **dataclasses.asdict(event)}
            for event in log.recent(recent)
        ],
    }


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(
    config: KneadConfig,
    broadcaster: Broadcaster,
    collector: BuildCollector,
) -> App:
    """Create the Chirp app that serves a built site."""
    from chirp import App, AppConfig, EventStream, SSEEvent
    from chirp.http.response import Response
    from chirp.middleware import StaticFiles

    from knead.reactive.broadcaster import SSEConnection

    app = App(config=AppConfig(debug=True, host=config.host, port=config.port))

    async def live_reload(request: Request) -> Any:
        conn = SSEConnection(client_id=str(uuid.uuid4()))
        broadcaster.subscribe(conn)

        async def generate():  # type: ignore[return]
            try:
                async for name in broadcaster.client_generator(conn):
                    yield SSEEvent(data=name, event=name)
            finally:
                broadcaster.unsubscribe(conn)

        return EventStream(generate())

    async def stats(request: Request) -> Any:
        payload = json.dumps(stats_payload(collector.log), indent=2)
        return Response(body=payload, status=200, content_type="application/json")

    app.route(LIVE_RELOAD_ENDPOINT, name="knead:live-reload")(live_reload)
    app.route(STATS_ENDPOINT, name="knead:stats")(stats)

    config.output_path.mkdir(parents=True, exist_ok=True)
    app.add_middleware(no_cache(StaticFiles(directory=config.output_path, prefix="/")))

    return app


async def rebuild(
    builder: SiteBuilder,
    broadcaster: Broadcaster,
    collector: BuildCollector,
    batch: tuple[ChangeEvent, ...],
    *,
    live_reload: bool = True,
) -> bool:
    """Rebuild the site after *batch* and notify browsers.

    The build runs in a worker thread. Any exception from the build is
    reported on stderr and recorded; browsers are only told to reload on
    success.

    Returns:
        True if the build succeeded.

    """
    print("🔄 Change detected — rebuilding...", file=sys.stderr)
    trigger = tuple(str(event.path) for event in batch)
    t0 = time.perf_counter()

    try:
        await asyncio.to_thread(builder.build)
    except Exception as exc:
        elapsed = (time.perf_counter() - t0) * 1000
        print(f"  Build error: {exc}", file=sys.stderr)
        collector.record_rebuild(trigger, error=str(exc), duration_ms=elapsed)
        return False

    elapsed = (time.perf_counter() - t0) * 1000
    collector.record_rebuild(trigger, duration_ms=elapsed)

    if live_reload:
        notified = await broadcaster.push_reload()
        collector.record_reload(notified)
    return True


def start_watcher(
    app: App,
    config: KneadConfig,
    builder: SiteBuilder,
    broadcaster: Broadcaster,
    collector: BuildCollector,
) -> SiteWatcher:
    """Wire the SiteWatcher to rebuilds via Chirp lifecycle hooks.

    Flow:
        on_startup  → start watcher thread, spawn the consumer task
        file change → debounced batch → ``rebuild()``
        on_shutdown → stop the watcher, cancel the consumer task

    """
    from knead.content.watcher import SiteWatcher

    watcher = SiteWatcher(config)
    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_rebuild_consumer() -> None:
        nonlocal _task

        async def _consume_changes() -> None:
            async for batch in watcher.changes():
                try:
                    await rebuild(
                        builder, broadcaster, collector, batch,
                        live_reload=config.live_reload,
                    )
                except Exception as exc:
                    print(f"  Rebuild loop error: {exc}", file=sys.stderr)

        watcher.start()
        _task = asyncio.create_task(_consume_changes())

    @app.on_shutdown
    async def _stop_rebuild_consumer() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()

    return watcher
