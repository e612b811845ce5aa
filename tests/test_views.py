from fasthtml.common import to_xml

from toolbox_website.catalog import load_catalog
from toolbox_website.categories import category_index
from toolbox_website.dispatcher import import_view
from toolbox_website.favorites import FavoritesStore
from toolbox_website.routing import VIEW_MODULES
from toolbox_website.storage import MemoryStorage
from toolbox_website.views.context import ViewContext


def _ctx(path="/", params=None, query=None, favorites=None):
    return ViewContext(
        path=path,
        params=params or {},
        catalog=load_catalog(),
        categories=category_index,
        query=query or {},
        favorites=favorites,
        url=lambda p: f"/base{p}",
        base_url="https://example.com/base",
    )


def _render(view_id, **kwargs):
    page = import_view(VIEW_MODULES[view_id])(_ctx(**kwargs))
    return page, to_xml(page.content)


def test_every_view_renders_with_empty_params():
    for view_id in VIEW_MODULES:
        page, html = _render(view_id)
        assert page.title, view_id
        assert html, view_id


def test_links_use_base_path_and_swap_into_content():
    _, html = _render("home")
    assert 'href="/base/categories"' in html
    assert 'hx-target="#content"' in html
    assert "hx-sync" in html


def test_category_view_falls_back_to_default_category():
    page, html = _render("category", params={"id": "nope"})
    assert page.status == 200
    assert page.canonical_path == "/category/calculation"
    assert "Calculation Tools" in html


def test_tool_views_return_not_found_for_unknown_ids():
    for view_id in ("tool_detail", "tool_workspace"):
        page, _ = _render(view_id, params={"id": "nope"})
        assert page.status == 404
        assert page.noindex


def test_tool_workspace_structured_data():
    page, html = _render("tool_workspace", path="/tools/bmi-calculator", params={"id": "bmi-calculator"})
    types = [data["@type"] for data in page.structured_data]
    assert types == ["BreadcrumbList", "SoftwareApplication"]
    assert "Healthy weight range display" in html


def test_search_view_combines_query_and_category():
    page, html = _render("search", query={"q": "calculator", "category": "text"})
    assert page.noindex
    assert "BMI Calculator" not in html


def test_search_with_unknown_category_matches_nothing():
    page, html = _render("search", query={"q": "calculator", "category": "no-such-category"})
    assert page.noindex
    assert "No category named" in html
    assert "BMI Calculator" not in html


def test_favorite_toggle_reflects_store():
    store = FavoritesStore(MemoryStorage())
    store.initialize_sync()
    store.add_favorite(load_catalog().by_id("bmi-calculator"))

    _, html = _render("tool_detail", params={"id": "bmi-calculator"}, favorites=store)
    assert "/base/favorites/bmi-calculator/remove" in html

    _, html = _render("favorites", favorites=store)
    assert "1 saved" in html
    assert "/base/tools/bmi-calculator" in html
