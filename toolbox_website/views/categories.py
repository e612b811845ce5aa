"""All categories with their tool counts."""

from fasthtml.common import Div

from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import category_card
from toolbox_website.views.layout import page_title


def render(ctx: ViewContext) -> Page:
    counts = ctx.catalog.category_counts()
    return Page(
        title="All Tool Categories",
        description=f"Browse {len(ctx.categories)} categories of free online tools.",
        content=Div(
            breadcrumbs(ctx, ("Categories", "/categories")),
            page_title("All Categories", f"{len(ctx.catalog):,} tools across {len(ctx.categories)} categories."),
            Div(*[category_card(c, counts.get(c.id, 0), ctx) for c in ctx.categories], _class="category-grid"),
            _class="main-window",
        ),
        canonical_path="/categories",
    )
