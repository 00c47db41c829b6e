"""Template loading — a Kida environment over the site's templates.

The loader searches ``templates/`` first and then the site root, so files
under ``static/`` can be pulled into a page as low-budget includes::

    <style>{% include "static/site.css" %}</style>

Real templates take precedence over anything found through the site root.

Globals available to every template:

- ``now()`` — the current local time;
- ``jsonify(value)`` — readable JSON (also a filter);
- ``html_comment(text)`` — wrap text in an HTML comment (also a filter);
- ``toc(items, min_level, max_level)`` — table of contents for a level range.

"""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

from knead._errors import TemplateError
from knead.content.toc import generate_toc_filtered

if TYPE_CHECKING:
    from knead.config import KneadConfig


def _to_json(value: object) -> object:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def jsonify(value: object) -> str:
    """Encode *value* as pretty JSON with two-space indentation.

    Unserializable values raise ``TypeError``; the build should fail rather
    than emit a partial page.
    """
    return json.dumps(value, indent=2, ensure_ascii=False, default=_to_json)


def html_comment(text: str) -> str:
    """Wrap *text* in an HTML comment on its own lines."""
    return f"<!--\n{text}\n-->"


class TemplateRenderer:
    """Loads and renders site templates.

    Args:
        config: Site configuration; templates come from
            ``config.templates_path``.

    Raises:
        TemplateError: If the templates directory does not exist.

    """

    def __init__(self, config: KneadConfig) -> None:
        from kida import Environment, FileSystemLoader

        if not config.templates_path.is_dir():
            msg = f"Templates directory not found: {config.templates_path}"
            raise TemplateError(msg)

        self._env = Environment(
            loader=FileSystemLoader([config.templates_path, config.root]),
            autoescape=False,
        )
        self._env.update_filters({"jsonify": jsonify, "html_comment": html_comment})
        self._env.add_global("now", datetime.now)
        self._env.add_global("jsonify", jsonify)
        self._env.add_global("html_comment", html_comment)
        self._env.add_global("toc", generate_toc_filtered)

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render *template_name* with *context*.

        Raises:
            TemplateError: If the template is missing or fails to render.

        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as exc:
            msg = f"Failed rendering template {template_name!r}: {exc}"
            raise TemplateError(msg) from exc
