import asyncio
import json
import logging
import uuid

from fasthtml.common import FtResponse
from fasthtml.common import Link
from fasthtml.common import Meta
from fasthtml.common import Script
from fasthtml.common import StyleX
from fasthtml.common import Title
from fasthtml.common import setup_toasts
from fasthtml.fastapp import fast_app
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.responses import Response

from toolbox_website import config
from toolbox_website.catalog import load_catalog
from toolbox_website.categories import category_index
from toolbox_website.collaborators import ToastNotifier
from toolbox_website.dispatcher import NavigationSessions
from toolbox_website.dispatcher import ViewDispatcher
from toolbox_website.dispatcher import ViewLoader
from toolbox_website.favorites import FavoritesProvider
from toolbox_website.favorites import FavoritesState
from toolbox_website.logging_config import setup_logging
from toolbox_website.preload import PreloadScheduler
from toolbox_website.preload import prefetch_links
from toolbox_website.preload import preload_view_ids
from toolbox_website.preload import save_data_requested
from toolbox_website.routing import build_route_table
from toolbox_website.seo_utils import canonical_url
from toolbox_website.sitemap_builder import build_sitemap
from toolbox_website.storage import get_storage_backend
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext
from toolbox_website.views.layout import favorite_toggle
from toolbox_website.views.layout import shell

setup_logging(config.log_level())
logger = logging.getLogger(__name__)

# Base path for subdirectory deployment
BASE_PATH = config.base_path()

catalog = load_catalog()
routes = build_route_table(catalog)
dispatcher = ViewDispatcher(routes, ViewLoader())
navigation = NavigationSessions(dispatcher)
favorites_provider = FavoritesProvider(get_storage_backend())
preloader = PreloadScheduler(dispatcher.loader, enabled=config.preload_enabled())


def url(path: str) -> str:
    """Prefix path with BASE_PATH for subdirectory deployment"""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{BASE_PATH}{path}"


def get_base_url() -> str:
    """Get base URL for the site"""
    return config.service_url().rstrip("/")


def get_canonical_url(path: str = "") -> str:
    """Canonical URL for a path, without a trailing slash."""
    return canonical_url(get_base_url(), path)


def get_profile_id(session) -> str:
    """Stable per-visitor id kept in the signed session cookie."""
    profile_id = session.get("profile_id")
    if not profile_id:
        profile_id = uuid.uuid4().hex
        session["profile_id"] = profile_id
    return profile_id


class TrailingSlashRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect ``/path/`` to ``/path`` so every page has one canonical URL."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path != "/" and path.endswith("/"):
            target = url(path.rstrip("/") or "/")
            if request.url.query:
                target = f"{target}?{request.url.query}"
            return RedirectResponse(target, status_code=308)
        return await call_next(request)


# App setup
app, rt = fast_app(
    static_path=str(config.STATIC_DIR),
    secret_key=config.session_key(),
    hdrs=(StyleX(str(config.STATIC_DIR / "styles.css")),),
    middleware=[Middleware(TrailingSlashRedirectMiddleware)],
)
setup_toasts(app)
# Canonical links come from page_head.
app.canonical = False


def page_head(page: Page, request: Request) -> list:
    """Title, meta tags and structured data for a page."""
    head = [Title(page.title), Meta({"name": "description", "content": page.description})]
    head.append(Meta({"name": "robots", "content": "noindex, follow" if page.noindex else "index, follow"}))
    if page.canonical_path:
        canonical = get_canonical_url(page.canonical_path)
        head.append(Link(rel="canonical", href=canonical))
        head.append(Meta({"property": "og:url", "content": canonical}))
    head.append(Meta({"property": "og:title", "content": page.title}))
    head.append(Meta({"property": "og:description", "content": page.description}))
    head.append(Meta({"property": "og:type", "content": "website"}))
    head.extend(Script(json.dumps(data), type="application/ld+json") for data in page.structured_data)
    head.extend(prefetch_links(catalog, request.headers, url))
    return head


@rt("/health")
def health():
    return {"status": "ok"}


@rt("/sitemap.xml")
async def get_sitemap():
    """Generate XML sitemap with all pages"""
    xml_content = build_sitemap(routes, catalog, category_index, get_base_url())
    return Response(xml_content, media_type="application/xml")


async def _toggle_favorite(tool_id: str, session, add: bool):
    tool = catalog.by_id(tool_id)
    if tool is None:
        return Response(f"Unknown tool: {tool_id}", status_code=404)

    store = await favorites_provider.for_profile(get_profile_id(session))
    notify = ToastNotifier(session)
    if add:
        await asyncio.to_thread(store.add_favorite, tool)
        notify(f"Saved {tool.name} to favorites", "success")
    else:
        await asyncio.to_thread(store.remove_favorite, tool.id)
        notify(f"Removed {tool.name} from favorites", "info")
    if store.state is FavoritesState.UNAVAILABLE:
        notify("Favorites can't be saved right now and will be lost when you leave", "warning")
    return favorite_toggle(tool, store.is_favorite(tool.id), url)


@app.post("/favorites/{tool_id}")
async def add_favorite(tool_id: str, session):
    return await _toggle_favorite(tool_id, session, add=True)


@app.post("/favorites/{tool_id}/remove")
async def remove_favorite(tool_id: str, session):
    return await _toggle_favorite(tool_id, session, add=False)


@rt("/{path:path}")
async def get(request: Request, session, path: str = ""):
    """Every page route goes through the route table and the lazy view loader."""
    profile_id = get_profile_id(session)
    favorites = await favorites_provider.for_profile(profile_id)
    partial = bool(request.headers.get("hx-request"))

    if partial:
        state = await navigation.get(profile_id).navigate(f"/{path}")
        if state is None:
            # A newer navigation from this visitor has taken over.
            return Response(status_code=204)
        match, view = state.match, state.view
    else:
        match, view = await dispatcher.dispatch(f"/{path}")

    ctx = ViewContext(
        path=match.path,
        params=match.params,
        catalog=catalog,
        categories=category_index,
        query=dict(request.query_params),
        favorites=favorites,
        routes=routes,
        url=url,
        base_url=get_base_url(),
    )
    page = view(ctx)

    if not save_data_requested(request.headers):
        preloader.schedule(preload_view_ids(catalog, category_index))

    if partial:
        # htmx only swaps 2xx responses, so the not-found view goes out as 200 here.
        return (*page_head(page, request), page.content)
    return FtResponse((*page_head(page, request), *shell(ctx, page.content)), status_code=page.status)


# For direct script execution
if __name__ == "__main__":
    import uvicorn

    port = config.web_port()
    print(f"Starting server on port {port}")
    uvicorn.run("toolbox_website.web:app", host="0.0.0.0", port=port, reload=True)
