"""Page routing and building for Tessera.

Each Markdown file in the pages directory is published under the menu entry
whose ``path`` equals the file's stem. The entry names the template that
wraps the page, and the page is written to ``<output>/<path>.html``.

Key items:
- Route: Resolved output and template paths for one content file.
- find_menu_entry: First menu entry matching a stem.
- resolve_route: Content file -> Route.
- build_page: Markdown -> HTML fragment -> template -> file.
- PageBuilder: Discovers, routes and builds every page of a site.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import MenuEntry, SiteConfig
from .errors import BuildError, PageIOError, RenderError, RouteNotFoundError
from .renderers import MarkdownRenderer
from .templates import TemplateEngine, format_template_error
from .utils import page_stem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """Where a content file is published and how it is rendered.

    Attributes:
        stem: Content filename without extension.
        entry: Matching menu entry.
        output_path: Target HTML file.
        template_path: Template used to render the page.
    """

    stem: str
    entry: MenuEntry
    output_path: Path
    template_path: Path


def find_menu_entry(config: SiteConfig, stem: str) -> MenuEntry | None:
    """Return the first menu entry whose path equals ``stem``."""
    for entry in config.menu:
        if entry.path == stem:
            return entry
    return None


def resolve_route(
    config: SiteConfig,
    content_path: Path,
    output_root: Path,
    templates_dir: Path,
    template_extension: str = ".jinja",
) -> Route:
    """Resolve the output and template paths for a content file.

    Args:
        config: Site configuration.
        content_path: Markdown file in the pages directory.
        output_root: Output directory.
        templates_dir: Directory holding templates.
        template_extension: Suffix appended to the menu's template name.

    Returns:
        The resolved Route.

    Raises:
        RouteNotFoundError: If no menu entry matches the file's stem.
    """
    stem = page_stem(content_path)
    entry = find_menu_entry(config, stem)
    if entry is None:
        raise RouteNotFoundError(stem, content_path)
    return Route(
        stem=stem,
        entry=entry,
        output_path=output_root / f"{entry.path}.html",
        template_path=templates_dir / f"{entry.render_templates}{template_extension}",
    )


def build_page(
    content_path: Path,
    output_path: Path,
    template_path: Path,
    context: Mapping[str, Any],
    engine: TemplateEngine,
    renderer: MarkdownRenderer | None = None,
) -> str:
    """Render one content file into its template and write it out.

    Args:
        content_path: Markdown source.
        output_path: HTML file to write. Parent directories are created.
        template_path: Template to render.
        context: Template variables. ``content`` is always replaced by the
            page's HTML fragment.
        engine: Template engine used for rendering.
        renderer: Markdown renderer, a default one if omitted.

    Returns:
        The rendered HTML.

    Raises:
        PageIOError: If the content cannot be read or the page written.
        RenderError: If the template fails to render.
    """
    renderer = renderer or MarkdownRenderer()
    try:
        markdown = content_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PageIOError(
            content_path, f"Cannot read content file: {exc}", exc
        ) from exc

    fragment = renderer.render(markdown)
    try:
        rendered = engine.render(template_path, {**context, "content": fragment})
    except Exception as exc:
        raise RenderError(
            content_path, format_template_error(exc), exc
        ) from exc

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        raise PageIOError(
            output_path, f"Cannot write page: {exc}", exc
        ) from exc
    logger.info("Generated page: %s", output_path)
    return rendered


@dataclass
class PageFailure:
    """A content file that could not be built.

    Attributes:
        content_path: The content file.
        error: Why it failed.
    """

    content_path: Path
    error: BuildError


class PageBuilder:
    """Builds every page in a site's pages directory.

    Attributes:
        config: Site configuration shared by all pages.
        pages_dir: Directory of Markdown content files.
        templates_dir: Directory of templates.
        output_root: Output directory.
        template_extension: Suffix appended to template names.
        engine: Template engine.
        renderer: Markdown renderer.
    """

    def __init__(
        self,
        config: SiteConfig,
        pages_dir: Path,
        templates_dir: Path,
        output_root: Path,
        template_extension: str = ".jinja",
        engine: TemplateEngine | None = None,
        renderer: MarkdownRenderer | None = None,
    ):
        self.config = config
        self.pages_dir = pages_dir
        self.templates_dir = templates_dir
        self.output_root = output_root
        self.template_extension = template_extension
        self.engine = engine or TemplateEngine(templates_dir)
        self.renderer = renderer or MarkdownRenderer()

    def iter_content_files(self) -> list[Path]:
        """List the Markdown files of the pages directory in name order.

        Raises:
            BuildError: If the pages directory cannot be listed.
        """
        try:
            entries = sorted(self.pages_dir.iterdir())
        except OSError as exc:
            logger.error("Error reading pages directory %s: %s", self.pages_dir, exc)
            raise BuildError(
                self.pages_dir, f"Cannot read pages directory: {exc}", exc
            ) from exc

        files = []
        for path in entries:
            if path.is_file() and self.renderer.can_render(path):
                files.append(path)
            else:
                logger.warning("Skipping non-content entry %s", path)
        return files

    def route(self, content_path: Path) -> Route:
        """Resolve the route of one content file."""
        return resolve_route(
            self.config,
            content_path,
            self.output_root,
            self.templates_dir,
            self.template_extension,
        )

    def context_for(self, route: Route) -> dict[str, Any]:
        """Build the template variables for a page.

        Args:
            route: The page's route.

        Returns:
            Mapping with ``config``, ``page`` and, when configured, ``title``.
        """
        context: dict[str, Any] = {"config": self.config, "page": route.entry}
        title = self.config.get("title")
        if title is not None:
            context["title"] = title
        return context

    def build(self, content_path: Path) -> Route:
        """Route and build a single page.

        Raises:
            RouteNotFoundError: If the page has no menu entry.
            RenderError: If the template fails.
            PageIOError: If reading or writing fails.
        """
        route = self.route(content_path)
        build_page(
            content_path,
            route.output_path,
            route.template_path,
            self.context_for(route),
            self.engine,
            self.renderer,
        )
        return route

    def run(self) -> tuple[list[Route], list[PageFailure]]:
        """Build every page, continuing past failures.

        Returns:
            Tuple of (routes built, failures).
        """
        built: list[Route] = []
        failures: list[PageFailure] = []
        for content_path in self.iter_content_files():
            try:
                built.append(self.build(content_path))
            except (RouteNotFoundError, RenderError, PageIOError) as exc:
                logger.error("Error generating page %s: %s", content_path, exc.message)
                failures.append(PageFailure(content_path, exc))
        return built, failures
