"""Tessera static site generator.

Tessera reads a YAML site configuration, converts Markdown pages to HTML,
renders each page into the Jinja2 template its menu entry names, and mirrors
static assets into an output directory.

The main entry point is the CLI module, which provides commands for
scaffolding new projects, inspecting page routes and building sites.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
