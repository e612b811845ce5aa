"""Static content pages: about, author, contact, changelog and the legal pages."""

from fasthtml.common import H2
from fasthtml.common import A
from fasthtml.common import Div
from fasthtml.common import Li
from fasthtml.common import P
from fasthtml.common import Ul

from toolbox_website import config
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import breadcrumbs
from toolbox_website.views.layout import page_title

CONTACT_EMAIL = "hello@toolbox.example.com"

CHANGELOG = (
    ("0.1.0", ["Favorites saved per visitor", "Category pages and search filters", "XML and HTML sitemaps"]),
)


def _content_page(ctx: ViewContext, title: str, description: str, *sections) -> Page:
    return Page(
        title=f"{title} | {config.SITE_NAME}",
        description=description,
        content=Div(breadcrumbs(ctx, (title, ctx.path)), page_title(title), *sections, _class="main-window"),
        canonical_path=ctx.path,
    )


def render_about(ctx: ViewContext) -> Page:
    counts = ctx.catalog.category_counts()
    return _content_page(
        ctx,
        "About",
        f"About {config.SITE_NAME}, a collection of free online tools.",
        P(
            f"{config.SITE_NAME} is a collection of {len(ctx.catalog):,} free tools for everyday calculations, "
            "conversions, text processing and writing. Everything runs in your browser and nothing requires an account."
        ),
        H2("What's inside"),
        Ul(*[Li(f"{c.name}: {counts.get(c.id, 0)} tools") for c in ctx.categories]),
    )


def render_author(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "Author",
        f"Who builds {config.SITE_NAME}.",
        P(f"{config.SITE_NAME} is built and maintained by a small independent team of developers."),
        P("Suggestions for new tools are always welcome."),
    )


def render_contact(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "Contact",
        f"Get in touch with the {config.SITE_NAME} team.",
        P("Found a bug or want to suggest a tool? Email us at ", A(CONTACT_EMAIL, href=f"mailto:{CONTACT_EMAIL}"), "."),
    )


def render_changelog(ctx: ViewContext) -> Page:
    entries = []
    for version, changes in CHANGELOG:
        entries.append(H2(version))
        entries.append(Ul(*[Li(change) for change in changes]))
    return _content_page(ctx, "Changelog", f"Recent changes to {config.SITE_NAME}.", *entries)


def render_privacy(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "Privacy Policy",
        "How we handle your data.",
        P("Tools process your input in the browser; we do not store what you type into them."),
        P(
            "We keep a random visitor id in a session cookie so your favorite tools are remembered. "
            "The list of favorites is stored with that id and nothing else."
        ),
    )


def render_terms(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "Terms of Service",
        f"Terms for using {config.SITE_NAME}.",
        P("The tools are provided as-is, free of charge, for personal and commercial use."),
        P("Do not use the site to process content you do not have the rights to."),
    )


def render_disclaimer(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "Disclaimer",
        "Limits of the information provided by our tools.",
        P(
            "Results from financial, health and scientific calculators are estimates for information only "
            "and are not professional advice."
        ),
    )


def render_dmca(ctx: ViewContext) -> Page:
    return _content_page(
        ctx,
        "DMCA",
        "Copyright infringement notices.",
        P(f"To report content that infringes your copyright, email {CONTACT_EMAIL} with the affected URL."),
    )
