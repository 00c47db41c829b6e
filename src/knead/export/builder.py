"""Site build — render content pages and assemble the output directory.

Renders every Markdown and HTML page under ``content/`` through the base
template and writes the result, together with static assets, leftover
content files and the bundled internal resources, into the output
directory.
"""

from __future__ import annotations

import shutil
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from knead._errors import BuildError, KneadError
from knead.content.page import parse_page
from knead.content.toc import generate_toc
from knead.export.assets import copy_tree
from knead.resources import root_resources_path

if TYPE_CHECKING:
    from knead.config import KneadConfig
    from knead.content.markdown import MarkdownRenderer
    from knead.export.templates import TemplateRenderer
    from knead.observability.collector import BuildCollector

type SourceType = Literal["page", "static", "content", "resource"]

RENDERED_SUFFIXES = frozenset({".md", ".html"})


def should_render(path: Path) -> bool:
    """True for content files that go through the template pipeline."""
    return path.suffix.lower() in RENDERED_SUFFIXES


def output_name(relative: Path) -> Path:
    """Output path for a rendered page; ``.md`` becomes ``.html``."""
    if relative.suffix.lower() == ".md":
        return relative.with_suffix(".html")
    return relative


@dataclass(frozen=True, slots=True)
class BuiltFile:
    """Record of a single file written during a build.

    Attributes:
        source_path: Source path relative to its directory
            (e.g., ``"guide/writing.md"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Which build step wrote the file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render or copy this file.

    """

    source_path: str
    output_path: Path
    source_type: SourceType
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Aggregate result of a full site build.

    Attributes:
        files: All files written during the build.
        total_pages: Number of rendered pages.
        total_assets: Number of copied files.
        duration_ms: Total wall-clock time for the build.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[BuiltFile, ...]
    total_pages: int
    total_assets: int
    duration_ms: float
    output_dir: Path


class SiteBuilder:
    """Builds a knead site into its output directory.

    Args:
        config: Frozen site configuration.
        collector: Optional event collector; every written file is recorded.

    """

    def __init__(
        self,
        config: KneadConfig,
        collector: BuildCollector | None = None,
    ) -> None:
        self._config = config
        self._collector = collector
        self._templates: TemplateRenderer | None = None
        self._markdown: MarkdownRenderer | None = None

    def build(self) -> BuildResult:
        """Run the full build pipeline and return the result.

        Pipeline order:
            1. Clean output directory
            2. Render content pages
            3. Copy static assets (never over rendered pages)
            4. Copy remaining content files
            5. Install bundled resources (always win)

        Raises:
            BuildError: If any step fails. A page that fails to render is
                named in the message and nothing is written for it.

        """
        start = time.perf_counter()
        output_dir = self._config.output_path

        self._clean_output(output_dir)

        # Templates are reloaded on every build so edits show up in serve.
        self._templates = None

        all_files: list[BuiltFile] = []
        all_files.extend(self._render_pages(output_dir))
        all_files.extend(self._copy_static(output_dir))
        all_files.extend(self._copy_content(output_dir))
        all_files.extend(self._install_resources(output_dir))

        elapsed = (time.perf_counter() - start) * 1000
        total_pages = sum(1 for f in all_files if f.source_type == "page")

        return BuildResult(
            files=tuple(all_files),
            total_pages=total_pages,
            total_assets=len(all_files) - total_pages,
            duration_ms=elapsed,
            output_dir=output_dir,
        )

    def render_file(self, path: Path) -> str:
        """Render one content file to a finished HTML document.

        Files outside the content directory are treated as if they sat at
        its top level (link targets resolve relative to it).

        Raises:
            KneadError: Any content, template or parse error for this file.

        """
        try:
            relative = path.resolve().relative_to(self._config.content_path)
        except ValueError:
            relative = Path(path.name)
        return self._render(path, relative)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        root = self._config.root
        if output_dir == root or root.is_relative_to(output_dir):
            msg = f"Refusing to clean {output_dir}: it contains the site root"
            raise BuildError(msg)
        try:
            if output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Failed to prepare output directory {output_dir}: {exc}"
            raise BuildError(msg) from exc

    def _render_pages(self, output_dir: Path) -> list[BuiltFile]:
        content_dir = self._config.content_path
        if not content_dir.is_dir():
            return []

        results: list[BuiltFile] = []
        for src_file in sorted(content_dir.rglob("*")):
            if not src_file.is_file() or not should_render(src_file):
                continue

            t0 = time.perf_counter()
            relative = src_file.relative_to(content_dir)
            dest_file = output_dir / output_name(relative)

            try:
                html = self._render(src_file, relative)
            except KneadError as exc:
                msg = f"Failed to render {relative.as_posix()}: {exc}"
                raise BuildError(msg) from exc

            try:
                dest_file.parent.mkdir(parents=True, exist_ok=True)
                dest_file.write_text(html, encoding="utf-8")
            except OSError as exc:
                msg = f"Unable to write {dest_file}: {exc}"
                raise BuildError(msg) from exc

            elapsed = (time.perf_counter() - t0) * 1000
            print(f"  → {dest_file.relative_to(output_dir)}", file=sys.stderr)

            built = BuiltFile(
                source_path=relative.as_posix(),
                output_path=dest_file,
                source_type="page",
                size_bytes=dest_file.stat().st_size,
                duration_ms=elapsed,
            )
            self._record("render", built)
            results.append(built)

        return results

    def _copy_static(self, output_dir: Path) -> tuple[BuiltFile, ...]:
        files = copy_tree(
            self._config.static_path,
            output_dir,
            source_type="static",
            overwrite=False,
        )
        for built in files:
            self._record("copy_static", built)
        return files

    def _copy_content(self, output_dir: Path) -> tuple[BuiltFile, ...]:
        files = copy_tree(
            self._config.content_path,
            output_dir,
            source_type="content",
            skip=should_render,
        )
        for built in files:
            self._record("copy_content", built)
        return files

    def _install_resources(self, output_dir: Path) -> tuple[BuiltFile, ...]:
        files = copy_tree(root_resources_path(), output_dir, source_type="resource")
        for built in files:
            self._record("install_resource", built)
        return files

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, path: Path, relative: Path) -> str:
        from knead.htmltidy import normalize_html

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read {path}: {exc}"
            raise BuildError(msg) from exc

        page = parse_page(source)

        if path.suffix.lower() == ".md":
            rendered = self._markdown_renderer().render(page.body, relative.as_posix())
            content, toc_items = rendered.html, rendered.toc_items
        else:
            content, toc_items = page.body, ()

        html = self._template_renderer().render(
            self._config.base_template,
            self._context(page.params, content, toc_items),
        )

        if self._config.tidy_html:
            html = normalize_html(html)
        return html

    def _context(
        self,
        params: dict[str, Any],
        content: str,
        toc_items: tuple[Any, ...],
    ) -> dict[str, Any]:
        page = dict(params)
        page["toc_items"] = list(toc_items)
        page["toc"] = generate_toc(toc_items)

        debug_map = {
            "page": page,
            "site": dict(self._config.site),
            "live_reload": self._config.live_reload,
        }
        return {"content": content, "debug_map": debug_map, **debug_map}

    def _template_renderer(self) -> TemplateRenderer:
        if self._templates is None:
            from knead.export.templates import TemplateRenderer

            self._templates = TemplateRenderer(self._config)
        return self._templates

    def _markdown_renderer(self) -> MarkdownRenderer:
        if self._markdown is None:
            from knead.content.markdown import MarkdownRenderer

            self._markdown = MarkdownRenderer(self._config.content_path)
        return self._markdown

    def _record(self, kind: str, built: BuiltFile) -> None:
        if self._collector is not None:
            self._collector.record_build(
                kind,
                built.source_path,
                str(built.output_path),
                duration_ms=built.duration_ms,
            )
