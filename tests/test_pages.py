import logging
from pathlib import Path

import pytest

from tessera.config import MenuEntry, SiteConfig
from tessera.errors import BuildError, PageIOError, RenderError, RouteNotFoundError
from tessera.pages import PageBuilder, build_page, find_menu_entry, resolve_route
from tessera.templates import TemplateEngine


def make_site(tmp_path: Path) -> tuple[Path, Path]:
    pages = tmp_path / "src" / "pages"
    templates = tmp_path / "src" / "templates"
    pages.mkdir(parents=True)
    templates.mkdir(parents=True)
    (templates / "main.jinja").write_text(
        "<html><title>{{ title }}</title><body>{{ content }}</body></html>",
        encoding="utf-8",
    )
    (templates / "plain.jinja").write_text("{{ page.path }}|{{ content }}", encoding="utf-8")
    return pages, templates


CONFIG = SiteConfig(
    menu=(
        MenuEntry("index", "main"),
        MenuEntry("about", "plain"),
        MenuEntry("index", "plain"),
    ),
    extra={"title": "My Static Site"},
)


def test_find_menu_entry_first_match_wins():
    assert find_menu_entry(CONFIG, "index") == MenuEntry("index", "main")
    assert find_menu_entry(CONFIG, "about") == MenuEntry("about", "plain")
    assert find_menu_entry(CONFIG, "missing") is None


def test_resolve_route(tmp_path):
    route = resolve_route(
        CONFIG, tmp_path / "pages" / "about.md", tmp_path / "dist", tmp_path / "tpl"
    )
    assert route.stem == "about"
    assert route.output_path == tmp_path / "dist" / "about.html"
    assert route.template_path == tmp_path / "tpl" / "plain.jinja"

    again = resolve_route(
        CONFIG, tmp_path / "pages" / "about.md", tmp_path / "dist", tmp_path / "tpl"
    )
    assert again == route


def test_resolve_route_custom_extension(tmp_path):
    route = resolve_route(
        CONFIG, Path("index.md"), tmp_path / "dist", tmp_path / "tpl", ".html.jinja"
    )
    assert route.template_path == tmp_path / "tpl" / "main.html.jinja"


def test_resolve_route_unknown_stem(tmp_path):
    content = tmp_path / "pages" / "contact.md"
    with pytest.raises(RouteNotFoundError) as exc_info:
        resolve_route(CONFIG, content, tmp_path / "dist", tmp_path / "tpl")
    assert exc_info.value.stem == "contact"
    assert exc_info.value.source_path == content


def test_build_page_writes_rendered_html(tmp_path):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Hi", encoding="utf-8")
    output = tmp_path / "dist" / "index.html"

    rendered = build_page(
        pages / "index.md",
        output,
        templates / "main.jinja",
        {"title": "Site", "content": "overridden"},
        TemplateEngine(templates),
    )
    assert output.read_text(encoding="utf-8") == rendered
    assert "<body><h1>Hi</h1>\n</body>" in rendered
    assert "overridden" not in rendered
    assert "<title>Site</title>" in rendered


def test_build_page_missing_content(tmp_path):
    pages, templates = make_site(tmp_path)
    with pytest.raises(PageIOError) as exc_info:
        build_page(
            pages / "gone.md",
            tmp_path / "dist" / "gone.html",
            templates / "main.jinja",
            {},
            TemplateEngine(templates),
        )
    assert exc_info.value.source_path == pages / "gone.md"


def test_build_page_missing_template(tmp_path):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Hi", encoding="utf-8")
    output = tmp_path / "dist" / "index.html"
    with pytest.raises(RenderError) as exc_info:
        build_page(
            pages / "index.md", output, templates / "nope.jinja", {}, TemplateEngine(templates)
        )
    assert "Template not found" in exc_info.value.message
    assert not output.exists()


def test_build_page_template_syntax_error(tmp_path):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Hi", encoding="utf-8")
    (templates / "broken.jinja").write_text("{% for x in items %}\nNo end!", encoding="utf-8")
    with pytest.raises(RenderError) as exc_info:
        build_page(
            pages / "index.md",
            tmp_path / "dist" / "index.html",
            templates / "broken.jinja",
            {},
            TemplateEngine(templates),
        )
    assert "syntax error" in exc_info.value.message.lower()


def test_build_page_write_failure(tmp_path):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Hi", encoding="utf-8")
    blocker = tmp_path / "dist"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    with pytest.raises(PageIOError) as exc_info:
        build_page(
            pages / "index.md",
            blocker / "index.html",
            templates / "main.jinja",
            {},
            TemplateEngine(templates),
        )
    assert exc_info.value.source_path == blocker / "index.html"


def test_page_builder_context(tmp_path):
    pages, templates = make_site(tmp_path)
    builder = PageBuilder(CONFIG, pages, templates, tmp_path / "dist")
    route = builder.route(pages / "about.md")
    context = builder.context_for(route)
    assert context["config"] is CONFIG
    assert context["page"] == MenuEntry("about", "plain")
    assert context["title"] == "My Static Site"

    untitled = PageBuilder(SiteConfig(menu=CONFIG.menu), pages, templates, tmp_path / "dist")
    assert "title" not in untitled.context_for(route)


def test_page_builder_run_collects_failures(tmp_path, caplog):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Home", encoding="utf-8")
    (pages / "about.md").write_text("About *us*", encoding="utf-8")
    (pages / "orphan.md").write_text("# Lost", encoding="utf-8")
    (pages / "notes.txt").write_text("ignored", encoding="utf-8")
    (pages / "drafts").mkdir()
    out = tmp_path / "dist"

    builder = PageBuilder(CONFIG, pages, templates, out)
    with caplog.at_level(logging.ERROR, logger="tessera.pages"):
        built, failures = builder.run()

    assert sorted(route.stem for route in built) == ["about", "index"]
    assert sorted(p.name for p in out.iterdir()) == ["about.html", "index.html"]
    assert "<em>us</em>" in (out / "about.html").read_text(encoding="utf-8")
    assert (out / "about.html").read_text(encoding="utf-8").startswith("about|")

    assert len(failures) == 1
    assert failures[0].content_path == pages / "orphan.md"
    assert isinstance(failures[0].error, RouteNotFoundError)
    assert failures[0].error.stem == "orphan"
    assert "orphan.md" in caplog.text


def test_page_builder_missing_pages_dir(tmp_path):
    builder = PageBuilder(CONFIG, tmp_path / "nope", tmp_path, tmp_path / "dist")
    with pytest.raises(BuildError):
        builder.iter_content_files()


def test_page_builder_warns_about_skipped_entries(tmp_path, caplog):
    pages, templates = make_site(tmp_path)
    (pages / "index.md").write_text("# Home", encoding="utf-8")
    (pages / "about.markdown").write_text("# About", encoding="utf-8")
    (pages / "drafts").mkdir()

    builder = PageBuilder(CONFIG, pages, templates, tmp_path / "dist")
    with caplog.at_level(logging.WARNING, logger="tessera.pages"):
        files = builder.iter_content_files()

    assert files == [pages / "index.md"]
    warned = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("about.markdown" in message for message in warned)
    assert any("drafts" in message for message in warned)
