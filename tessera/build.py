"""Site building functionality for Tessera.

This module sequences a build: load the configuration, reset the output
directory, mirror static assets, then build every page.

Config and reset failures abort the build. Asset copy failures are logged
and the build goes on. Page failures are logged and collected, and the
remaining pages are still built; the build only succeeds if every page did.

Key functions:
- build_site: Main function to build the entire site.
- plan_routes: Resolve every page's route without writing anything.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .assets import AssetCopier
from .config import DEFAULT_LAYOUT, SiteConfig, load_config
from .errors import BuildError, CopyError, RouteNotFoundError
from .pages import PageBuilder, PageFailure, Route
from .utils import reset_output_dir

logger = logging.getLogger(__name__)


class BuildPhase(enum.Enum):
    """Steps of a build, in order."""

    START = "start"
    LOAD_CONFIG = "load-config"
    RESET_OUTPUT = "reset-output"
    COPY_ASSETS = "copy-assets"
    BUILD_PAGES = "build-pages"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        config: Configuration the site was built with.
        output_dir: Directory where the site was built.
        pages: Routes of the pages that were written.
        page_failures: Pages that could not be built.
        asset_failures: Assets that could not be copied.
        phase: Last phase reached.
    """

    config: SiteConfig
    output_dir: Path
    pages: list[Route] = field(default_factory=list)
    page_failures: list[PageFailure] = field(default_factory=list)
    asset_failures: list[CopyError] = field(default_factory=list)
    phase: BuildPhase = BuildPhase.START

    @property
    def succeeded(self) -> bool:
        """True when the build finished and every page was built."""
        return self.phase is BuildPhase.DONE and not self.page_failures


def _enter(result: BuildResult, phase: BuildPhase) -> None:
    logger.debug("Build phase: %s", phase.value)
    result.phase = phase


def _overlaps(source_root: Path, output_root: Path) -> bool:
    """True if the directories are the same or one contains the other."""
    source = source_root.resolve()
    output = output_root.resolve()
    return source.is_relative_to(output) or output.is_relative_to(source)


def build_site(
    project_root: Path,
    source_dir: str | Path = DEFAULT_LAYOUT["source_dir"],
    output_dir: str | Path = DEFAULT_LAYOUT["output_dir"],
    config_file: str = DEFAULT_LAYOUT["config_file"],
    template_extension: str = DEFAULT_LAYOUT["template_extension"],
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        source_dir: Source root, relative to the project root.
        output_dir: Output directory, relative to the project root.
        config_file: Configuration filename, relative to the project root.
        template_extension: Suffix appended to template names.

    Returns:
        BuildResult describing what was built and what failed.

    Raises:
        ConfigParseError: If the configuration cannot be loaded.
        DirResetError: If the output directory cannot be reset.
        BuildError: If the source root or pages directory is missing or
            unreadable, or if the output and source directories overlap.
    """
    logger.debug("Build phase: %s", BuildPhase.LOAD_CONFIG.value)
    config = load_config(project_root, config_file)

    source_root = project_root / source_dir
    output_root = project_root / output_dir
    result = BuildResult(config=config, output_dir=output_root)
    if not source_root.is_dir():
        result.phase = BuildPhase.FAILED
        raise BuildError(source_root, "Expected source directory")
    if _overlaps(source_root, output_root):
        result.phase = BuildPhase.FAILED
        raise BuildError(output_root, "Output directory overlaps the source directory")

    _enter(result, BuildPhase.RESET_OUTPUT)
    try:
        reset_output_dir(output_root)
    except BuildError:
        result.phase = BuildPhase.FAILED
        raise

    _enter(result, BuildPhase.COPY_ASSETS)
    result.asset_failures = AssetCopier(source_root, output_root).run()

    _enter(result, BuildPhase.BUILD_PAGES)
    builder = PageBuilder(
        config,
        pages_dir=source_root / "pages",
        templates_dir=source_root / "templates",
        output_root=output_root,
        template_extension=template_extension,
    )
    try:
        result.pages, result.page_failures = builder.run()
    except BuildError:
        result.phase = BuildPhase.FAILED
        raise

    _enter(result, BuildPhase.DONE)
    logger.info(
        "Built %d page(s) into %s (%d page failure(s), %d asset failure(s))",
        len(result.pages),
        output_root,
        len(result.page_failures),
        len(result.asset_failures),
    )
    return result


def plan_routes(
    project_root: Path,
    source_dir: str | Path = DEFAULT_LAYOUT["source_dir"],
    output_dir: str | Path = DEFAULT_LAYOUT["output_dir"],
    config_file: str = DEFAULT_LAYOUT["config_file"],
    template_extension: str = DEFAULT_LAYOUT["template_extension"],
) -> tuple[list[Route], list[RouteNotFoundError]]:
    """Resolve the route of every page without building anything.

    Args:
        project_root: Root directory of the project.
        source_dir: Source root, relative to the project root.
        output_dir: Output directory, relative to the project root.
        config_file: Configuration filename, relative to the project root.
        template_extension: Suffix appended to template names.

    Returns:
        Tuple of (resolved routes, unmatched content files).
    """
    config = load_config(project_root, config_file)
    source_root = project_root / source_dir
    builder = PageBuilder(
        config,
        pages_dir=source_root / "pages",
        templates_dir=source_root / "templates",
        output_root=project_root / output_dir,
        template_extension=template_extension,
    )
    routes: list[Route] = []
    missing: list[RouteNotFoundError] = []
    for content_path in builder.iter_content_files():
        try:
            routes.append(builder.route(content_path))
        except RouteNotFoundError as exc:
            missing.append(exc)
    return routes, missing
