"""Static asset copying for Tessera.

Everything under the source root that is not page content or a template is
mirrored verbatim into the output directory. Copies are byte-exact and
overwrite silently. A failing entry is logged and reported, and its siblings
are still copied.

Key items:
- copy_file: Copy one file, creating its parent directory.
- copy_directory: Recursively mirror a directory.
- AssetCopier: Mirrors the top level of the source root, minus reserved names.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from .errors import CopyError

logger = logging.getLogger(__name__)

# Consumed by the page build, never mirrored.
RESERVED_DIRS = ("templates", "pages")


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file, creating the destination's parent directory.

    Args:
        src: Source file.
        dst: Destination file. Overwritten if it exists.

    Raises:
        CopyError: If the copy fails.
    """
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as exc:
        raise CopyError(src, dst, exc) from exc
    logger.debug("Copied %s -> %s", src, dst)


def copy_directory(src_dir: Path, dst_dir: Path) -> list[CopyError]:
    """Recursively mirror ``src_dir`` into ``dst_dir``.

    Hidden entries are copied too. A failure on one entry does not stop the
    others.

    Args:
        src_dir: Directory to mirror.
        dst_dir: Destination directory, created if missing.

    Returns:
        List of CopyError, one per entry that failed. Empty on success.
    """
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
        entries = list(src_dir.iterdir())
    except OSError as exc:
        error = CopyError(src_dir, dst_dir, exc)
        logger.error("Error copying directory %s: %s", src_dir, exc)
        return [error]

    failures: list[CopyError] = []
    for entry in entries:
        failures.extend(copy_entry(entry, dst_dir / entry.name))
    return failures


def copy_entry(src: Path, dst: Path) -> list[CopyError]:
    """Copy a file or directory, collecting failures instead of raising.

    Args:
        src: File or directory to copy.
        dst: Destination path.

    Returns:
        List of CopyError for every failed entry.
    """
    if src.is_dir():
        return copy_directory(src, dst)
    try:
        copy_file(src, dst)
    except CopyError as exc:
        logger.error("Error copying file %s: %s", src, exc.cause)
        return [exc]
    return []


class AssetCopier:
    """Mirrors the site's source root into the output directory.

    Attributes:
        source_root: Directory holding assets, pages and templates.
        output_root: Directory receiving the mirrored assets.
        exclude: Top-level entry names that are never copied.
    """

    def __init__(
        self,
        source_root: Path,
        output_root: Path,
        exclude: Iterable[str] = RESERVED_DIRS,
    ):
        self.source_root = source_root
        self.output_root = output_root
        self.exclude = frozenset(exclude)

    def run(self) -> list[CopyError]:
        """Copy every top-level entry that is not excluded.

        Returns:
            List of CopyError for entries that failed. If the source root
            itself cannot be listed, the list holds a single error for it.
        """
        try:
            entries = sorted(self.source_root.iterdir())
        except OSError as exc:
            logger.error("Error reading source directory %s: %s", self.source_root, exc)
            return [CopyError(self.source_root, self.output_root, exc)]

        failures: list[CopyError] = []
        for entry in entries:
            if entry.name in self.exclude:
                logger.debug("Skipping reserved entry %s", entry)
                continue
            failures.extend(copy_entry(entry, self.output_root / entry.name))
        if failures:
            logger.warning("%d asset(s) could not be copied", len(failures))
        return failures
