"""File copying — static assets, leftover content files and bundled resources.

Copies a directory tree into the build output, preserving directory
structure. Hidden files (names starting with ``.``) and ``__pycache__``
directories are skipped.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from knead._errors import BuildError

if TYPE_CHECKING:
    from knead.export.builder import BuiltFile, SourceType


def _is_hidden(relative: Path) -> bool:
    return any(part == "__pycache__" or part.startswith(".") for part in relative.parts)


def copy_tree(
    source_dir: Path,
    output_dir: Path,
    *,
    source_type: SourceType,
    overwrite: bool = True,
    skip: Callable[[Path], bool] | None = None,
) -> tuple[BuiltFile, ...]:
    """Recursively copy *source_dir* into *output_dir*.

    Args:
        source_dir: Directory to copy from. Missing directories copy nothing.
        output_dir: Root of the build output.
        source_type: Recorded on every ``BuiltFile``.
        overwrite: When False, files already present in the output are kept.
        skip: Predicate on the source-relative path; True skips the file.

    Returns:
        Tuple of :class:`BuiltFile` entries, one per copied file.

    Raises:
        BuildError: On symlinks, which are not followed, or if a copy fails.

    """
    from knead.export.builder import BuiltFile

    if not source_dir.is_dir():
        return ()

    results: list[BuiltFile] = []

    for src_file in sorted(source_dir.rglob("*")):
        relative = src_file.relative_to(source_dir)

        if src_file.is_symlink():
            msg = f"Symlinks are not supported: {src_file}"
            raise BuildError(msg)
        if not src_file.is_file() or _is_hidden(relative):
            continue
        if skip is not None and skip(relative):
            continue

        dest_file = output_dir / relative
        if not overwrite and dest_file.exists():
            continue

        t0 = time.perf_counter()
        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_file, dest_file)
        except OSError as exc:
            msg = f"Failed to copy {src_file} to {dest_file}: {exc}"
            raise BuildError(msg) from exc

        results.append(BuiltFile(
            source_path=relative.as_posix(),
            output_path=dest_file,
            source_type=source_type,
            size_bytes=dest_file.stat().st_size,
            duration_ms=(time.perf_counter() - t0) * 1000,
        ))

    return tuple(results)
