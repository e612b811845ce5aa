"""Tool overview page at ``/tool/:id``."""

from fasthtml.common import H2
from fasthtml.common import H3
from fasthtml.common import Div
from fasthtml.common import Li
from fasthtml.common import P
from fasthtml.common import Span
from fasthtml.common import Ul

from toolbox_website.collaborators import render_icon
from toolbox_website.collaborators import render_sparkline
from toolbox_website.seo_utils import generate_breadcrumb_list
from toolbox_website.seo_utils import generate_meta_description
from toolbox_website.seo_utils import generate_meta_title
from toolbox_website.seo_utils import generate_tool_schema
from toolbox_website.views import not_found
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import favorite_toggle
from toolbox_website.views.layout import nav_link
from toolbox_website.views.layout import tool_card


def render(ctx: ViewContext) -> Page:
    tool = ctx.catalog.by_id(ctx.params.get("id", ""))
    if tool is None:
        return not_found.render(ctx)

    category = tool.category
    related = ctx.catalog.related(tool)
    peers = ctx.catalog.by_category(category.id)
    rank = 1 + sum(1 for t in peers if t.views > tool.views)

    features = tool.features or [tool.description]
    content = Div(
        breadcrumbs(ctx, (category.name, f"/category/{category.id}"), (tool.name, f"/tool/{tool.id}")),
        Div(
            render_icon(tool.icon, "tool-icon large"),
            H2(tool.name, _class="tool-title"),
            favorite_toggle(tool, ctx.is_favorite(tool.id), ctx.url),
            _class="tool-heading",
        ),
        Div(
            Div(
                P(tool.description),
                H3("Features"),
                Ul(*[Li(feature) for feature in features]),
                H3("Key Information"),
                Ul(
                    Li(f"Category: {category.name}"),
                    Li(f"Views: {tool.views:,}"),
                    Li(
                        f"Rank in category: #{rank} of {len(peers)} ",
                        Span(render_sparkline([t.views for t in peers]), _class="trend"),
                    ),
                ),
                Div(nav_link("Open Tool", tool.path, ctx.url, _class="cta-button"), _class="cta-section"),
                _class="tool-content",
            ),
            Div(
                H3("Related Tools"),
                Div(*[tool_card(t, ctx, show_toggle=False) for t in related], _class="related-tools"),
                _class="sidebar",
            )
            if related
            else None,
            _class="tool-layout",
        ),
        _class="main-window",
    )

    return Page(
        title=generate_meta_title(tool.name, category.name),
        description=generate_meta_description(tool.name, tool.description),
        content=content,
        # The workspace page is the canonical home of a tool.
        canonical_path=tool.path,
        structured_data=[
            generate_breadcrumb_list(
                [
                    {"name": "Home", "url": ""},
                    {"name": category.name, "url": f"category/{category.id}"},
                    {"name": tool.name, "url": f"tool/{tool.id}"},
                ],
                ctx.base_url,
            ),
            generate_tool_schema(tool, ctx.base_url),
        ],
    )
