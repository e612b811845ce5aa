"""Landing page: popular tools and category overview."""

from fasthtml.common import H2
from fasthtml.common import Div
from fasthtml.common import Section

from toolbox_website import config
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import category_card
from toolbox_website.views.layout import nav_link
from toolbox_website.views.layout import page_title
from toolbox_website.views.layout import search_form
from toolbox_website.views.layout import tools_grid

POPULAR_LIMIT = 12


def render(ctx: ViewContext) -> Page:
    counts = ctx.catalog.category_counts()
    content = Div(
        page_title(
            f"{config.SITE_NAME}: Free Online Tools",
            f"{len(ctx.catalog):,} calculators, converters and utilities that run in your browser.",
        ),
        search_form(ctx.url, categories=ctx.categories.all()),
        Section(
            H2("Popular Tools"),
            tools_grid(ctx.catalog.popular(POPULAR_LIMIT), ctx),
            _class="category",
        ),
        Section(
            H2("Browse by Category"),
            Div(*[category_card(c, counts.get(c.id, 0), ctx) for c in ctx.categories], _class="category-grid"),
            nav_link("View all categories →", "/categories", ctx.url, _class="more-link"),
            _class="category",
        ),
        _class="main-window",
    )
    return Page(
        title=f"{config.SITE_NAME} - Free Online Calculators, Converters & Utilities",
        description=(
            "Free online tools for calculation, conversion, text, PDF, images, colors, SEO and writing. "
            "No sign-up required."
        ),
        content=content,
        canonical_path="/",
        structured_data=[
            {
                "@context": "https://schema.org",
                "@type": "WebSite",
                "name": config.SITE_NAME,
                "url": ctx.base_url,
                "potentialAction": {
                    "@type": "SearchAction",
                    "target": f"{ctx.base_url}/search?q={{search_term_string}}",
                    "query-input": "required name=search_term_string",
                },
            }
        ],
    )
