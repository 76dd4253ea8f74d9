import logging

import pytest

from tessera.config import MenuEntry, SiteConfig, load_config
from tessera.errors import ConfigParseError


def write_config(tmp_path, text):
    (tmp_path / "config.yml").write_text(text, encoding="utf-8")
    return tmp_path


def test_load_config_parses_menu_and_extras(tmp_path):
    write_config(
        tmp_path,
        "title: My Site\n"
        "author: Ada\n"
        "menu:\n"
        "  - path: index\n"
        "    renderTemplates: main\n"
        "  - path: about\n"
        "    renderTemplates: page\n",
    )
    config = load_config(tmp_path)
    assert config.menu == (
        MenuEntry(path="index", render_templates="main"),
        MenuEntry(path="about", render_templates="page"),
    )
    assert config["title"] == "My Site"
    assert config.get("author") == "Ada"
    assert config.get("missing", "fallback") == "fallback"
    assert config["menu"] is config.menu
    assert "menu" not in config.extra


def test_site_config_is_immutable():
    config = SiteConfig(menu=(MenuEntry("index", "main"),), extra={"title": "T"})
    with pytest.raises(AttributeError):
        config.menu = ()
    with pytest.raises(TypeError):
        config.extra["title"] = "changed"


def test_load_config_without_menu(tmp_path):
    write_config(tmp_path, "title: Empty\n")
    assert load_config(tmp_path).menu == ()

    write_config(tmp_path, "")
    assert load_config(tmp_path) == SiteConfig()


def test_load_config_custom_filename(tmp_path):
    (tmp_path / "site.yaml").write_text(
        "menu:\n  - {path: home, renderTemplates: base}\n", encoding="utf-8"
    )
    config = load_config(tmp_path, "site.yaml")
    assert config.menu[0].path == "home"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigParseError) as exc_info:
        load_config(tmp_path)
    assert exc_info.value.source_path == tmp_path / "config.yml"
    assert isinstance(exc_info.value.original_error, FileNotFoundError)


def test_load_config_invalid_yaml_includes_parser_message(tmp_path):
    write_config(tmp_path, "menu: [unclosed\n")
    with pytest.raises(ConfigParseError) as exc_info:
        load_config(tmp_path)
    assert "Error parsing YAML file" in exc_info.value.message
    assert str(exc_info.value.original_error) in exc_info.value.message


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "menu: index\n",
        "menu:\n  - index\n",
        "menu:\n  - renderTemplates: main\n",
        "menu:\n  - path: index\n",
        "menu:\n  - path: 3\n    renderTemplates: main\n",
    ],
)
def test_load_config_rejects_malformed_menu(tmp_path, text):
    write_config(tmp_path, text)
    with pytest.raises(ConfigParseError):
        load_config(tmp_path)


def test_duplicate_paths_are_kept_and_logged(tmp_path, caplog):
    write_config(
        tmp_path,
        "menu:\n"
        "  - {path: index, renderTemplates: first}\n"
        "  - {path: index, renderTemplates: second}\n",
    )
    with caplog.at_level(logging.WARNING, logger="tessera.config"):
        config = load_config(tmp_path)
    assert [entry.render_templates for entry in config.menu] == ["first", "second"]
    assert "Duplicate menu path 'index'" in caplog.text
