"""knead configuration.

KneadConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class KneadConfig:
    """Configuration for a knead site.

    Attributes:
        root: Path to the site root directory (contains content/, templates/,
              static/). Always resolved to an absolute path on construction.
        output: Output directory for the built site, relative to root unless
            absolute.
        host: Bind address for ``knead serve``.
        port: Bind port for ``knead serve``.
        live_reload: Push a reload event to browsers after each rebuild.
        tidy_html: Normalize and pretty-print every rendered page.
        base_template: Template every page is rendered through.
        content_dir: Directory containing Markdown and HTML pages.
        templates_dir: Directory containing templates.
        static_dir: Directory containing static assets.
        site: Site-wide parameters exposed to templates as ``site``.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("public"))
    host: str = "127.0.0.1"
    port: int = 8817
    live_reload: bool = True
    tidy_html: bool = True
    base_template: str = "base.html"
    content_dir: str = "content"
    templates_dir: str = "templates"
    static_dir: str = "static"
    site: MappingProxyType[str, Any] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.site, MappingProxyType):
            object.__setattr__(self, "site", MappingProxyType(dict(self.site)))

    @property
    def content_path(self) -> Path:
        """Absolute path to content directory."""
        return self.root / self.content_dir

    @property
    def templates_path(self) -> Path:
        """Absolute path to templates directory."""
        return self.root / self.templates_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to static assets directory."""
        return self.root / self.static_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
