"""Startup banner — mode-aware status output.

Prints a short status banner with timing and the output location. Detects
``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from knead.config import KneadConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "serve": (_GREEN, "serve"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


def print_banner(
    config: KneadConfig,
    page_count: int,
    mode: str,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the knead startup banner to stderr.

    Args:
        config: Resolved KneadConfig.
        page_count: Number of pages rendered by the initial build.
        mode: ``"build"`` or ``"serve"``.
        load_ms: Time spent building in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from knead import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}knead{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    pages_label = "page" if page_count == 1 else "pages"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {page_count} {pages_label} built{timing}")
    tidy = "on" if config.tidy_html else "off"
    lines.append(f"  {_DIM}├─{_RESET} tidy html: {tidy}")

    if mode == "serve":
        if config.live_reload:
            lines.append(
                f"  {_DIM}├─{_RESET} {_GREEN}live reload{_RESET} "
                f"on {_DIM}/_int/live-reload{_RESET}"
            )
        lines.append(f"  {_DIM}├─{_RESET} stats: {_DIM}/_int/stats{_RESET}")
        lines.append(f"  {_DIM}└─{_RESET} serving: {_DIM}{config.output_path}{_RESET}")
        lines.append("")
        lines.append(f"  {_clickable_url(f'http://{config.host}:{config.port}')}")
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")
    else:
        lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
