"""knead error hierarchy.

All knead-specific errors inherit from KneadError for easy catching.
"""


class KneadError(Exception):
    """Base error for all knead operations."""


class ConfigError(KneadError):
    """Invalid or missing configuration."""


class ContentError(KneadError):
    """Error in content processing (frontmatter, markdown, HTML)."""


class FrontmatterError(ContentError):
    """Malformed frontmatter block at the top of a content file."""


class HTMLParseError(ContentError):
    """The HTML parser could not build a document tree."""


class TemplateError(KneadError):
    """A template could not be loaded or rendered."""


class BuildError(KneadError):
    """Error while building the site into the output directory."""
