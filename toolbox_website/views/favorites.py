"""The visitor's saved tools."""

from fasthtml.common import Div
from fasthtml.common import P

from toolbox_website.favorites import FavoritesState
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import nav_link
from toolbox_website.views.layout import page_title
from toolbox_website.views.layout import tools_grid


def render(ctx: ViewContext) -> Page:
    store = ctx.favorites
    tools = store.favorites() if store is not None else []

    notice = None
    if store is not None and store.state is FavoritesState.UNAVAILABLE:
        notice = P("Favorites can't be saved right now; changes last until you leave the site.", _class="notice")

    if tools:
        body = tools_grid(tools, ctx)
    else:
        body = P(
            "You haven't saved any tools yet. Tap ☆ Save on any tool, or ",
            nav_link("browse the categories", "/categories", ctx.url),
            ".",
            _class="empty-state",
        )

    return Page(
        title="Favorite Tools",
        description="Your saved tools.",
        content=Div(
            page_title("Favorite Tools", f"{len(tools)} saved"),
            notice,
            body,
            _class="main-window",
        ),
        canonical_path="/favorite-tools",
        noindex=True,
    )
