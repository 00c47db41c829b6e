"""knead application — the public entry points.

``build`` renders a site into its output directory, ``build_file`` renders a
single page, ``serve`` builds and then serves the site with live reload,
and ``init`` writes a starter site.
"""

import shutil
import sys
import time
from pathlib import Path

from knead._errors import BuildError, ConfigError, KneadError
from knead.config_loader import find_config_file, load_config
from knead.export.builder import BuildResult, SiteBuilder
from knead.observability import BuildCollector, EventLog


def build(root: str | Path = ".", **kwargs: object) -> BuildResult:
    """Build the site into its output directory.

    Args:
        root: Path to the site root directory.
        **kwargs: Override KneadConfig fields.

    Raises:
        BuildError: If any page fails to render or any file fails to copy.

    """
    from knead.banner import print_banner

    config = load_config(Path(root), **_static_overrides(kwargs))

    print("Building site...", file=sys.stderr)
    result = SiteBuilder(config, BuildCollector(EventLog())).build()

    print_banner(config, result.total_pages, mode="build", load_ms=result.duration_ms)
    _print_build_summary(result)
    return result


def build_file(
    infile: str | Path,
    outfile: str | Path | None = None,
    root: str | Path = ".",
    **kwargs: object,
) -> str:
    """Render one content file; write it to *outfile* or stdout.

    Returns:
        The rendered document.

    Raises:
        KneadError: If the file cannot be rendered.
        BuildError: If *outfile* cannot be written.

    """
    config = load_config(Path(root), **_static_overrides(kwargs))
    html = SiteBuilder(config).render_file(Path(infile))

    if outfile is None:
        sys.stdout.write(html)
        return html

    try:
        Path(outfile).write_text(html, encoding="utf-8")
    except OSError as exc:
        msg = f"Unable to write {outfile}: {exc}"
        raise BuildError(msg) from exc
    return html


def _static_overrides(kwargs: dict[str, object]) -> dict[str, object]:
    """Overrides for output meant for a static host: no live-reload hook."""
    return {**kwargs, "live_reload": False}


def _print_build_summary(result: BuildResult) -> None:
    """Print build completion summary to stderr."""
    lines = [
        "─" * 41,
        f"  Built {result.total_pages} page{'s' if result.total_pages != 1 else ''}",
    ]
    if result.total_assets > 0:
        lines.append(
            f"  Copied {result.total_assets} file{'s' if result.total_assets != 1 else ''}"
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Build the site, serve it, and rebuild on every change.

    An initial build failure is reported but does not stop the server; the
    next successful rebuild fills the output directory.

    Args:
        root: Path to the site root directory.
        **kwargs: Override KneadConfig fields.

    """
    from knead.banner import print_banner
    from knead.reactive.broadcaster import Broadcaster
    from knead.reactive.server import create_app, start_watcher

    config = load_config(Path(root), **kwargs)
    collector = BuildCollector(EventLog())
    builder = SiteBuilder(config, collector)

    t0 = time.perf_counter()
    page_count = 0
    warnings: list[str] = []
    try:
        page_count = builder.build().total_pages
    except KneadError as exc:
        warnings.append(f"Initial build failed: {exc}")
    load_ms = (time.perf_counter() - t0) * 1000

    broadcaster = Broadcaster()
    app = create_app(config, broadcaster, collector)
    start_watcher(app, config, builder, broadcaster, collector)

    print_banner(config, page_count, mode="serve", load_ms=load_ms, warnings=warnings)

    # Watcher shutdown is handled by the on_shutdown hook registered above.
    app.run(host=config.host, port=config.port)


def init(directory: str | Path) -> Path:
    """Create *directory* and copy the starter site into it.

    Returns:
        The resolved site directory.

    Raises:
        ConfigError: If a knead config file already exists there.

    """
    from knead.resources import example_site_path

    target = Path(directory).resolve()
    target.mkdir(parents=True, exist_ok=True)

    existing = find_config_file(target)
    if existing is not None:
        msg = f"{existing.name} config already found in {target}"
        raise ConfigError(msg)

    shutil.copytree(example_site_path(), target, dirs_exist_ok=True)
    print(f"Created a new site in {target}", file=sys.stderr)
    return target
