"""Search results page for ``/search?q=&category=``."""

from fasthtml.common import Div
from fasthtml.common import P

from toolbox_website.search import search_tools
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import page_title
from toolbox_website.views.layout import search_form
from toolbox_website.views.layout import tools_grid


def render(ctx: ViewContext) -> Page:
    query = ctx.query.get("q", "").strip()
    category_id = ctx.query.get("category", "").strip()
    category = ctx.categories.by_id(category_id) if ctx.categories.contains(category_id) else None
    unknown_category = bool(category_id) and category is None

    # No tool belongs to an unknown category, so that filter matches nothing.
    results = [] if unknown_category else search_tools(ctx.catalog.all(), query, category)
    if unknown_category:
        summary = f'No category named "{category_id}"'
    elif query and category:
        summary = f'{len(results)} results for "{query}" in {category.name}'
    elif query:
        summary = f'{len(results)} results for "{query}"'
    elif category:
        summary = f"{len(results)} tools in {category.name}"
    else:
        summary = f"All {len(results):,} tools"

    return Page(
        title=f"Search: {query}" if query else "Search Tools",
        description="Search free online calculators, converters and utilities.",
        content=Div(
            breadcrumbs(ctx, ("Search", "/search")),
            page_title("Search Tools"),
            search_form(ctx.url, query, category.id if category else "", ctx.categories.all()),
            P(summary, _class="count"),
            tools_grid(results, ctx, empty_message="No tools match your search."),
            _class="main-window",
        ),
        canonical_path="/search",
        noindex=bool(query or category_id),
    )
