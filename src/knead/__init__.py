"""knead — a small static site generator with a stable HTML pretty-printer.

Pages are Markdown or HTML with YAML frontmatter, rendered through Kida
templates and tidied into consistently indented HTML.

Quick start::

    import knead

    knead.init("my-site/")
    knead.build("my-site/")

Entry points::

    knead.build("my-site/")           # Render into my-site/public/
    knead.serve("my-site/")           # Build, serve, rebuild on change
    knead.normalize_html(document)    # Tidy one HTML document

"""

__version__ = "0.1.0"

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__all__ = [
    "KneadConfig",
    "__version__",
    "build",
    "init",
    "normalize_html",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import knead`` fast; the parser, Markdown and template stacks
    load on first use.
    """
    if name == "KneadConfig":
        from knead.config import KneadConfig

        return KneadConfig

    if name == "normalize_html":
        from knead.htmltidy import normalize_html

        return normalize_html

    if name in ("build", "serve", "init"):
        from knead import app

        return getattr(app, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
