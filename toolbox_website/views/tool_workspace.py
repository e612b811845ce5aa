"""Workspace page for a single tool at ``/tools/<id>``."""

from fasthtml.common import H1
from fasthtml.common import H3
from fasthtml.common import Div
from fasthtml.common import Li
from fasthtml.common import Ol
from fasthtml.common import P
from fasthtml.common import Section
from fasthtml.common import Textarea

from toolbox_website.collaborators import render_icon
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
from toolbox_website.views.layout import tools_grid


def render(ctx: ViewContext) -> Page:
    tool = ctx.catalog.by_id(ctx.params.get("id", ""))
    if tool is None:
        return not_found.render(ctx)

    category = tool.category
    content = Div(
        breadcrumbs(ctx, (category.name, f"/category/{category.id}"), (tool.name, tool.path)),
        Div(
            render_icon(tool.icon, "tool-icon large"),
            H1(tool.name, _class="window-title"),
            favorite_toggle(tool, ctx.is_favorite(tool.id), ctx.url),
            _class=f"tool-heading {tool.gradient}".strip(),
        ),
        P(tool.description, _class="intro"),
        Section(
            Textarea(
                name="input",
                placeholder=f"Enter your input for {tool.name}...",
                rows="8",
                aria_label=f"{tool.name} input",
            ),
            Div(id="tool-output", _class="tool-output", aria_live="polite"),
            id="tool-workspace",
            _class="tool-workspace",
            data_tool=tool.id,
        ),
        Section(
            H3("How to use"),
            Ol(
                Li("Enter or paste your values above."),
                Li("Results update as you type."),
                Li("Copy the result or save the tool to your favorites."),
            ),
            H3("Features"),
            Div(*[P(f"✓ {feature}") for feature in tool.features], _class="features") if tool.features else None,
            nav_link("About this tool", f"/tool/{tool.id}", ctx.url, _class="more-link"),
            _class="category",
        ),
        Section(
            H3(f"More {category.name}"),
            tools_grid(ctx.catalog.related(tool, limit=4), ctx),
            _class="category",
        ),
        _class="main-window",
    )

    return Page(
        title=generate_meta_title(tool.name, category.name),
        description=generate_meta_description(tool.name, tool.description),
        content=content,
        canonical_path=tool.path,
        structured_data=[
            generate_breadcrumb_list(
                [
                    {"name": "Home", "url": ""},
                    {"name": category.name, "url": f"category/{category.id}"},
                    {"name": tool.name, "url": tool.path.lstrip("/")},
                ],
                ctx.base_url,
            ),
            generate_tool_schema(tool, ctx.base_url),
        ],
    )
