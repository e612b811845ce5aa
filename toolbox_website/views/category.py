"""Single category listing.

Unknown category ids render the default category instead of a not-found page.
"""

from fasthtml.common import Div

from toolbox_website.seo_utils import generate_breadcrumb_list
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import page_title
from toolbox_website.views.layout import tools_grid


def render(ctx: ViewContext) -> Page:
    category = ctx.categories.by_id(ctx.params.get("id", ""))
    tools = ctx.catalog.by_category(category.id)
    canonical_path = f"/category/{category.id}"

    return Page(
        title=f"Best Free {category.name}",
        description=f"{category.description}. Explore {len(tools)} free {category.name.lower()}.",
        content=Div(
            breadcrumbs(ctx, ("Categories", "/categories"), (category.name, canonical_path)),
            page_title(category.name, category.description),
            tools_grid(tools, ctx, empty_message="No tools in this category yet."),
            _class="main-window",
        ),
        canonical_path=canonical_path,
        structured_data=[
            generate_breadcrumb_list(
                [
                    {"name": "Home", "url": ""},
                    {"name": "Categories", "url": "categories"},
                    {"name": category.name, "url": canonical_path.lstrip("/")},
                ],
                ctx.base_url,
            )
        ],
    )
