"""Command-line interface for Tessera.

This module defines the CLI commands using the Click framework.

Commands:
- new: Scaffold a new Tessera project.
- build: Build the site into the output directory.
- routes: Show how each page is routed without building.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_LAYOUT
from .errors import BuildError

_SCAFFOLD_FILES = {
    "config.yml": (
        "title: My Static Site\n"
        "menu:\n"
        "  - path: index\n"
        "    renderTemplates: main\n"
    ),
    "src/pages/index.md": "# Hello\n\nWelcome to your new site.\n",
    "src/templates/main.jinja": (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        "  <meta charset=\"utf-8\">\n"
        "  <title>{{ title }}</title>\n"
        "  <link rel=\"stylesheet\" href=\"css/index.css\">\n"
        "</head>\n"
        "<body>\n"
        "  <nav>\n"
        "    {% for item in config.menu %}"
        "<a href=\"{{ item.path }}.html\">{{ item.path }}</a>{% endfor %}\n"
        "  </nav>\n"
        "  <main>{{ content }}</main>\n"
        "</body>\n"
        "</html>\n"
    ),
    "src/css/index.css": "body { font-family: sans-serif; }\n",
}


def _configure_logging(verbose: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _layout_options(func):
    """Attach the source/output/config/template options to a command."""
    options = [
        click.option(
            "--source",
            default=DEFAULT_LAYOUT["source_dir"],
            show_default=True,
            help="Source directory holding pages, templates and assets",
        ),
        click.option(
            "--output",
            default=DEFAULT_LAYOUT["output_dir"],
            show_default=True,
            help="Output directory (emptied before each build)",
        ),
        click.option(
            "--config",
            "config_file",
            default=DEFAULT_LAYOUT["config_file"],
            show_default=True,
            help="Site configuration file",
        ),
        click.option(
            "--template-ext",
            default=DEFAULT_LAYOUT["template_extension"],
            show_default=True,
            help="Extension appended to template names",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _display_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _echo_error(exc: BuildError, project_root: Path) -> None:
    click.echo(
        click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
        err=True,
    )
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


@click.group()
@click.version_option(version=__version__, prog_name="tessera")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Tessera static site generator."""
    _configure_logging(verbose)


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Tessera project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Tessera site created at {target}")


@cli.command()
@_layout_options
def build(source: str, output: str, config_file: str, template_ext: str):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import build_site

    try:
        result = build_site(
            project_root,
            source_dir=source,
            output_dir=output,
            config_file=config_file,
            template_extension=template_ext,
        )
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        _echo_error(exc, project_root)
        raise SystemExit(1) from None

    for failure in result.asset_failures:
        click.echo(click.style("Asset not copied:", fg="yellow", bold=True), err=True)
        _echo_error(failure, project_root)
    for failure in result.page_failures:
        click.echo(click.style("Page failed:", fg="red", bold=True), err=True)
        _echo_error(failure.error, project_root)

    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")
    if not result.succeeded:
        raise SystemExit(1)


@cli.command()
@_layout_options
def routes(source: str, output: str, config_file: str, template_ext: str):
    """Show the template and output file of each page."""
    project_root = Path.cwd()
    from .build import plan_routes

    try:
        resolved, missing = plan_routes(
            project_root,
            source_dir=source,
            output_dir=output,
            config_file=config_file,
            template_extension=template_ext,
        )
    except BuildError as exc:
        click.echo(click.style("Routing failed:", fg="red", bold=True), err=True)
        _echo_error(exc, project_root)
        raise SystemExit(1) from None

    for route in resolved:
        click.echo(
            f"{route.stem} -> {_display_path(route.template_path, project_root)}"
            f" -> {_display_path(route.output_path, project_root)}"
        )
    for exc in missing:
        click.echo(click.style(f"{exc.stem} -> no menu entry", fg="red"), err=True)
    if missing:
        raise SystemExit(1)


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Tessera project.

    Args:
        root: Root directory for the new project.
    """
    for rel_path, text in _SCAFFOLD_FILES.items():
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_text(text, encoding="utf-8")
