"""Error types raised while building a Tessera site.

Every error carries the path it is attributed to, a human-readable message
and the original exception (when there is one), so the CLI can report which
file or step failed and why.

Key classes:
- BuildError: Base class with file context.
- ConfigParseError: The site configuration is missing or malformed.
- DirResetError: The output directory could not be emptied.
- CopyError: A static asset could not be copied.
- RouteNotFoundError: A content file has no matching menu entry.
- RenderError: The template engine failed for a page.
- PageIOError: A page could not be read or written.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file or directory that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class ConfigParseError(BuildError):
    """The configuration file is missing, unreadable or not valid YAML."""


class DirResetError(BuildError):
    """The output directory could not be created or emptied."""


class CopyError(BuildError):
    """A file or directory could not be copied into the output tree.

    Attributes:
        src: Source path of the failed copy.
        dst: Destination path of the failed copy.
        cause: Underlying exception.
    """

    def __init__(self, src: Path, dst: Path, cause: Exception):
        self.src = src
        self.dst = dst
        self.cause = cause
        super().__init__(src, f"Could not copy to {dst}: {cause}", cause)


class RouteNotFoundError(BuildError):
    """No menu entry has a path equal to the content file's stem."""

    def __init__(self, stem: str, source_path: Path | None = None):
        self.stem = stem
        super().__init__(
            source_path or Path(stem),
            f"No menu entry with path '{stem}'",
        )


class RenderError(BuildError):
    """The template engine failed while rendering a page."""


class PageIOError(BuildError):
    """Reading a content file or writing a page failed."""
