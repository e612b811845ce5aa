"""Not-found page."""

from fasthtml.common import Div
from fasthtml.common import P

from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import nav_link
from toolbox_website.views.layout import page_title
from toolbox_website.views.layout import tools_grid


def render(ctx: ViewContext) -> Page:
    return Page(
        title="Page Not Found",
        description="The page you are looking for does not exist.",
        content=Div(
            page_title("Page Not Found", f"Nothing lives at {ctx.path}."),
            P("Try one of our popular tools, or ", nav_link("browse all categories", "/categories", ctx.url), "."),
            tools_grid(ctx.catalog.popular(6), ctx),
            _class="main-window not-found",
        ),
        status=404,
        noindex=True,
    )
