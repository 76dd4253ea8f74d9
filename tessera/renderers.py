"""Markdown rendering for Tessera.

Content pages are plain CommonMark. No mistune plugins are enabled, so the
output is the standard HTML for the source with no custom syntax.

Key class:
- MarkdownRenderer: Renders Markdown text to an HTML fragment.
"""

from __future__ import annotations

from pathlib import Path

import mistune

from .utils import is_markdown


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Raw HTML embedded in Markdown is passed through unchanged.
    """

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(escape=False)

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Markdown file.
        """
        return is_markdown(path)

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML fragment.
        """
        return self._markdown(content)
