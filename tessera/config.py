"""Site configuration loading for Tessera.

The configuration lives in ``config.yml`` at the project root. Its ``menu``
list binds each route to the template that renders it; every other top-level
key is passed through to templates untouched.

Key items:
- SiteConfig: Immutable, parsed configuration.
- MenuEntry: One route/template binding.
- load_config: Reads and validates the configuration file.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .errors import ConfigParseError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yml"

DEFAULT_LAYOUT = {
    "source_dir": "src",
    "output_dir": "dist",
    "config_file": CONFIG_FILENAME,
    "template_extension": ".jinja",
}


@dataclass(frozen=True)
class MenuEntry:
    """A route published by the site.

    Attributes:
        path: Route identifier, also the output filename stem.
        render_templates: Template name, without extension.
    """

    path: str
    render_templates: str


@dataclass(frozen=True)
class SiteConfig:
    """Parsed site configuration.

    Pass-through keys are reachable by subscription, so templates can write
    ``config.title`` as well as ``config.menu``.

    Attributes:
        menu: Menu entries in declared order.
        extra: Every other top-level key of the configuration file.
    """

    menu: tuple[MenuEntry, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def __getitem__(self, key: str) -> Any:
        if key == "menu":
            return self.menu
        return self.extra[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Return a pass-through key, or ``default`` if it is absent."""
        try:
            return self[key]
        except KeyError:
            return default


def load_config(project_root: Path, filename: str = CONFIG_FILENAME) -> SiteConfig:
    """Load the site configuration from the project root.

    Args:
        project_root: Root directory of the project.
        filename: Configuration filename, relative to the project root.

    Returns:
        The parsed SiteConfig.

    Raises:
        ConfigParseError: If the file is missing, unreadable, not valid YAML,
            or its menu is malformed.
    """
    config_path = project_root / filename
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except OSError as exc:
        logger.error("Cannot read config %s: %s", config_path, exc)
        raise ConfigParseError(
            config_path, f"Error reading config file: {exc}", exc
        ) from exc
    except yaml.YAMLError as exc:
        logger.error("Cannot parse config %s: %s", config_path, exc)
        raise ConfigParseError(
            config_path, f"Error parsing YAML file: {exc}", exc
        ) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigParseError(
            config_path,
            f"Expected a mapping at the top level, got {type(loaded).__name__}",
        )

    raw = dict(loaded)
    menu = _parse_menu(config_path, raw.pop("menu", None))
    return SiteConfig(menu=menu, extra=raw)


def _parse_menu(config_path: Path, raw_menu: Any) -> tuple[MenuEntry, ...]:
    """Validate the ``menu`` list and build MenuEntry objects.

    Args:
        config_path: Path of the config file, for error reporting.
        raw_menu: Value of the ``menu`` key as loaded from YAML.

    Returns:
        Tuple of menu entries in declared order.
    """
    if raw_menu is None:
        return ()
    if not isinstance(raw_menu, list):
        raise ConfigParseError(
            config_path, f"'menu' must be a list, got {type(raw_menu).__name__}"
        )

    entries: list[MenuEntry] = []
    seen: set[str] = set()
    for index, item in enumerate(raw_menu):
        if not isinstance(item, dict):
            raise ConfigParseError(
                config_path, f"menu[{index}] must be a mapping"
            )
        path = item.get("path")
        template = item.get("renderTemplates")
        if not isinstance(path, str) or not path:
            raise ConfigParseError(
                config_path, f"menu[{index}] needs a string 'path'"
            )
        if not isinstance(template, str) or not template:
            raise ConfigParseError(
                config_path, f"menu[{index}] needs a string 'renderTemplates'"
            )
        if path in seen:
            logger.warning(
                "Duplicate menu path '%s' in %s; the first entry wins",
                path,
                config_path,
            )
        seen.add(path)
        entries.append(MenuEntry(path=path, render_templates=template))
    return tuple(entries)
