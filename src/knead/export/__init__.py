"""Site export — templates, page rendering and output assembly."""

from knead.export.builder import BuildResult, BuiltFile, SiteBuilder

__all__ = ["BuildResult", "BuiltFile", "SiteBuilder"]
