"""Utility functions for Tessera.

Key functions:
    reset_output_dir: Ensure the output directory exists and is empty.
    is_markdown: Check if a path is a Markdown file.
    page_stem: Route stem of a content file.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import DirResetError

logger = logging.getLogger(__name__)


def reset_output_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Creates the directory (and parents) if it doesn't exist, then removes
    each of its entries. The directory itself is kept.

    Args:
        path: Directory path to clean or create.

    Raises:
        DirResetError: If the directory cannot be created, listed, or one of
            its entries cannot be removed. Entries removed before the failure
            stay removed.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        entries = list(path.iterdir())
    except OSError as exc:
        logger.error("Error preparing output directory %s: %s", path, exc)
        raise DirResetError(path, f"Cannot prepare directory: {exc}", exc) from exc

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as exc:
            logger.error("Error clearing %s: %s", entry, exc)
            raise DirResetError(entry, f"Cannot remove entry: {exc}", exc) from exc
    logger.debug("Cleared %d entries from %s", len(entries), path)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def page_stem(path: Path) -> str:
    """Return the filename without its last extension.

    Examples:
        >>> page_stem(Path("pages/about.md"))
        'about'
    """
    return path.stem
