"""Page shell and shared components."""

from typing import Callable
from typing import Iterable
from typing import Optional

from fasthtml.common import H1
from fasthtml.common import H2
from fasthtml.common import H5
from fasthtml.common import A
from fasthtml.common import Button
from fasthtml.common import Div
from fasthtml.common import Footer
from fasthtml.common import Form
from fasthtml.common import Header
from fasthtml.common import Input
from fasthtml.common import Li
from fasthtml.common import Main
from fasthtml.common import Nav
from fasthtml.common import Option
from fasthtml.common import P
from fasthtml.common import Section
from fasthtml.common import Select
from fasthtml.common import Span
from fasthtml.common import Ul

from toolbox_website import config
from toolbox_website.collaborators import render_icon
from toolbox_website.models import Category
from toolbox_website.models import Tool
from toolbox_website.views.context import ViewContext

CONTENT_ID = "content"
INDICATOR_ID = "loading"

NAV_LINKS = (
    ("Home", "/"),
    ("Categories", "/categories"),
    ("Search", "/search"),
    ("Favorites", "/favorite-tools"),
)

FOOTER_LINKS = (
    ("About", "/about"),
    ("Author", "/author"),
    ("Contact", "/contact"),
    ("Changelog", "/changelog"),
    ("Privacy", "/privacy"),
    ("Terms", "/terms"),
    ("Disclaimer", "/disclaimer"),
    ("DMCA", "/dmca"),
    ("Sitemap", "/sitemap"),
)


def nav_link(label, path: str, url: Callable[[str], str], **kwargs):
    """Link that swaps the target page into the content region.

    ``hx-sync`` replaces any in-flight swap so the latest click always wins.
    """
    href = url(path)
    return A(
        label,
        href=href,
        hx_get=href,
        hx_target=f"#{CONTENT_ID}",
        hx_swap="innerHTML show:window:top",
        hx_push_url="true",
        hx_sync=f"#{CONTENT_ID}:replace",
        hx_indicator=f"#{INDICATOR_ID}",
        **kwargs,
    )


def loading_placeholder():
    """Shown while a view is still loading."""
    return Div(Span("Loading…"), id=INDICATOR_ID, _class="htmx-indicator loading-placeholder", role="status")


def search_form(url: Callable[[str], str], query: str = "", category_id: str = "", categories: Iterable = ()):
    options = [Option("All categories", value="", selected=not category_id)]
    options.extend(Option(c.name, value=c.id, selected=c.id == category_id) for c in categories)
    return Form(
        Input({"type": "search", "name": "q", "value": query, "placeholder": "Search tools...", "id": "search"}),
        Select(*options, name="category", aria_label="Category") if categories else None,
        Button("Search", type="submit"),
        action=url("/search"),
        method="get",
        hx_get=url("/search"),
        hx_target=f"#{CONTENT_ID}",
        hx_push_url="true",
        hx_sync=f"#{CONTENT_ID}:replace",
        _class="search-form",
    )


def site_header(ctx: ViewContext):
    return Header(
        A(config.SITE_NAME, href=ctx.url("/"), _class="site-title"),
        Nav(Ul(*[Li(nav_link(label, path, ctx.url)) for label, path in NAV_LINKS])),
        search_form(ctx.url, ctx.query.get("q", "")),
        _class="site-header",
    )


def site_footer(ctx: ViewContext):
    return Footer(
        Ul(*[Li(nav_link(label, path, ctx.url)) for label, path in FOOTER_LINKS], _class="footer-links"),
        P(f"{config.SITE_NAME} · {len(ctx.catalog):,} free online tools"),
        _class="site-footer",
    )


def shell(ctx: ViewContext, content):
    """Full page frame around ``content``."""
    return (
        site_header(ctx),
        loading_placeholder(),
        Main(content, id=CONTENT_ID),
        site_footer(ctx),
    )


def favorite_toggle(tool: Tool, is_favorite: bool, url: Callable[[str], str]):
    """Button that adds or removes ``tool`` from the visitor's favorites."""
    action = f"/favorites/{tool.id}/remove" if is_favorite else f"/favorites/{tool.id}"
    label = "★ Saved" if is_favorite else "☆ Save"
    return Button(
        label,
        id=f"fav-{tool.id}",
        hx_post=url(action),
        hx_swap="outerHTML",
        aria_pressed="true" if is_favorite else "false",
        title="Remove from favorites" if is_favorite else "Add to favorites",
        _class="favorite-toggle active" if is_favorite else "favorite-toggle",
    )


def tool_card(tool: Tool, ctx: ViewContext, show_toggle: bool = True):
    return Div(
        nav_link(
            Div(
                render_icon(tool.icon, "tool-icon"),
                H5(tool.name),
                P(tool.description),
                _class=f"tool-card-body {tool.gradient}".strip(),
            ),
            tool.path,
            ctx.url,
        ),
        favorite_toggle(tool, ctx.is_favorite(tool.id), ctx.url) if show_toggle else None,
        _class="tool-card",
        **{"data-search": f"{tool.name.lower()} {tool.description.lower()}"},
    )


def tools_grid(tools: Iterable[Tool], ctx: ViewContext, empty_message: str = "No tools found."):
    cards = [tool_card(tool, ctx) for tool in tools]
    if not cards:
        return P(empty_message, _class="empty-state")
    return Div(*cards, _class="tools-grid")


def category_card(category: Category, count: int, ctx: ViewContext):
    return nav_link(
        Div(
            render_icon(category.icon, "category-icon"),
            H5(category.name),
            P(category.description),
            Span(f"{count} tools", _class="count"),
            _class=f"category-card {category.gradient}".strip(),
        ),
        f"/category/{category.id}",
        ctx.url,
    )


def category_section(category: Category, tools: list, ctx: ViewContext, limit: Optional[int] = None):
    shown = tools[:limit] if limit else tools
    return Section(
        H2(nav_link(category.name, f"/category/{category.id}", ctx.url)),
        Span(f"{len(tools)} tools", _class="count"),
        tools_grid(shown, ctx),
        _class="category",
    )


def breadcrumbs(ctx: ViewContext, *trail):
    """``trail`` is (label, path) pairs; the last entry is rendered as plain text."""
    parts = [nav_link("Home", "/", ctx.url)]
    for i, (label, path) in enumerate(trail):
        parts.append(" › ")
        parts.append(Span(label) if i == len(trail) - 1 else nav_link(label, path, ctx.url))
    return Div(*parts, _class="breadcrumbs")


def page_title(text: str, subtitle: str = ""):
    return Div(H1(text, _class="window-title"), P(subtitle, _class="intro") if subtitle else None)
