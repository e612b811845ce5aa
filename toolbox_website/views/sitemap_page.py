"""Human-readable sitemap."""

from fasthtml.common import H2
from fasthtml.common import Div
from fasthtml.common import Li
from fasthtml.common import Section
from fasthtml.common import Ul

from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import FOOTER_LINKS
from toolbox_website.views.layout import NAV_LINKS
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import nav_link
from toolbox_website.views.layout import page_title


def render(ctx: ViewContext) -> Page:
    sections = [
        Section(
            H2("Pages"),
            Ul(*[Li(nav_link(label, path, ctx.url)) for label, path in (*NAV_LINKS, *FOOTER_LINKS)]),
            _class="category",
        )
    ]
    for category in ctx.categories:
        tools = ctx.catalog.by_category(category.id)
        sections.append(
            Section(
                H2(nav_link(category.name, f"/category/{category.id}", ctx.url)),
                Ul(*[Li(nav_link(tool.name, tool.path, ctx.url)) for tool in tools]),
                _class="category",
            )
        )

    return Page(
        title="Sitemap",
        description="Every page and tool on the site.",
        content=Div(breadcrumbs(ctx, ("Sitemap", "/sitemap")), page_title("Sitemap"), *sections, _class="main-window"),
        canonical_path="/sitemap",
    )
