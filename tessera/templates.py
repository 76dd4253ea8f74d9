"""Template rendering engine for Tessera.

This module uses Jinja2 to render page templates from the site's
``templates`` directory. The page's HTML fragment is handed to the template
as ``content`` and marked safe, so ``{{ content }}`` inserts it verbatim
while every other value is autoescaped.

Key items:
- TemplateEngine: Loads and renders templates by path.
- format_template_error: Turns Jinja2 exceptions into readable messages.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)
from markupsafe import Markup


def format_template_error(exc: Exception) -> str:
    """Format a template exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if isinstance(exc, TemplateSyntaxError):
        return f"Template syntax error on line {exc.lineno}: {exc.message}"
    if isinstance(exc, TemplateNotFound):
        return f"Template not found: {exc.name}"
    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    if error_type == "AttributeError":
        return f"Attribute error: {error_msg}"

    return f"{error_type}: {error_msg}"


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing templates.
        env: Jinja2 environment.
    """

    def __init__(self, templates_dir: Path):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with templates.
        """
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"], default=True),
            enable_async=False,
        )

    def render(self, template_path: Path, context: Mapping[str, Any]) -> str:
        """Render the template at ``template_path``.

        Templates inside ``templates_dir`` are loaded through the environment
        so that ``{% extends %}`` and ``{% include %}`` resolve against it.
        Any other path is read and compiled directly.

        Args:
            template_path: Path of the template file.
            context: Variables to make available in the template. A
                ``content`` value is marked safe.

        Returns:
            Rendered string.
        """
        variables = dict(context)
        if "content" in variables and isinstance(variables["content"], str):
            variables["content"] = Markup(variables["content"])

        try:
            name = template_path.relative_to(self.templates_dir).as_posix()
        except ValueError:
            if not template_path.is_file():
                raise TemplateNotFound(str(template_path)) from None
            source = template_path.read_text(encoding="utf-8")
            return self.env.from_string(source).render(**variables)
        return self.env.get_template(name).render(**variables)
