"""Bundled resources — files shipped inside the package.

``root/`` is copied into every build output last, so its files always win.
Everything in it lives under ``_int/`` to stay out of the way of site
content. ``example/`` is the starter site written by ``knead init``.
"""

from __future__ import annotations

from pathlib import Path


def _resources_path() -> Path:
    return Path(__file__).parent


def root_resources_path() -> Path:
    """Directory overlaid onto every build output."""
    return _resources_path() / "root"


def example_site_path() -> Path:
    """Directory holding the starter site."""
    return _resources_path() / "example"
