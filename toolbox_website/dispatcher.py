"""Lazy view loading and last-navigation-wins dispatch."""

import asyncio
import importlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Tuple

from toolbox_website.routing import NOT_FOUND_VIEW
from toolbox_website.routing import VIEW_MODULES
from toolbox_website.routing import RouteMatch
from toolbox_website.routing import RouteTable
from toolbox_website.views.context import Page
from toolbox_website.views.context import ViewContext

logger = logging.getLogger(__name__)

ViewFn = Callable[[ViewContext], Page]
Fetcher = Callable[[str], Awaitable[ViewFn]]


class ViewLoadError(RuntimeError):
    """A view id is unknown or its module could not be imported."""


def import_view(spec: str) -> ViewFn:
    """Import ``"package.module:attribute"`` and return the attribute."""
    module_name, _, attribute = spec.partition(":")
    module = importlib.import_module(module_name)
    view = getattr(module, attribute or "render")
    if not callable(view):
        raise ViewLoadError(f"{spec} is not callable")
    return view


async def import_view_in_thread(spec: str) -> ViewFn:
    return await asyncio.to_thread(import_view, spec)


def _builtin_not_found(ctx: ViewContext) -> Page:
    return Page(title="Page Not Found", content=f"No page found at {ctx.path}", status=404, noindex=True)


class ViewLoader:
    """Loads each view on first use and caches it for the process lifetime."""

    def __init__(self, modules: Mapping[str, str] = VIEW_MODULES, fetch: Optional[Fetcher] = None):
        self._modules = dict(modules)
        self._fetch = fetch or import_view_in_thread
        self._cache: Dict[str, ViewFn] = {}
        self._pending: Dict[str, asyncio.Future] = {}

    def is_loaded(self, view_id: str) -> bool:
        return view_id in self._cache

    def _on_done(self, view_id: str, future: asyncio.Future) -> None:
        if self._pending.get(view_id) is future:
            del self._pending[view_id]
        if future.cancelled():
            return
        error = future.exception()
        if error is None:
            self._cache[view_id] = future.result()
            logger.debug(f"Loaded view '{view_id}'")

    async def load(self, view_id: str) -> ViewFn:
        view = self._cache.get(view_id)
        if view is not None:
            return view

        spec = self._modules.get(view_id)
        if spec is None:
            raise ViewLoadError(f"No module registered for view '{view_id}'")

        loop = asyncio.get_running_loop()
        pending = self._pending.get(view_id)
        if pending is None or pending.get_loop() is not loop:
            pending = asyncio.ensure_future(self._fetch(spec))
            self._pending[view_id] = pending
            pending.add_done_callback(lambda future: self._on_done(view_id, future))
        # Shielded so a cancelled caller does not abort a load other callers share.
        return await asyncio.shield(pending)

    async def preload(self, view_ids: Iterable[str]) -> int:
        """Load each view not yet cached; a failing view is logged and skipped. Returns how many loaded."""
        warmed = 0
        for view_id in view_ids:
            if self.is_loaded(view_id):
                continue
            try:
                await self.load(view_id)
                warmed += 1
            except Exception as e:  # noqa: BLE001
                logger.debug(f"Preload of view '{view_id}' failed: {e}")
        return warmed


class ViewDispatcher:
    """Resolves paths through the route table and loads the bound view."""

    def __init__(self, routes: RouteTable, loader: Optional[ViewLoader] = None):
        self.routes = routes
        self.loader = loader or ViewLoader()

    def resolve(self, path: str) -> RouteMatch:
        return self.routes.resolve(path)

    async def load(self, match: RouteMatch) -> Tuple[RouteMatch, ViewFn]:
        """Load the view for ``match``; failures degrade to the not-found view."""
        try:
            return match, await self.loader.load(match.view_id)
        except Exception as e:  # noqa: BLE001
            if match.view_id == NOT_FOUND_VIEW:
                logger.error(f"Failed to load not-found view, using built-in fallback: {e}")
                return match, _builtin_not_found
            logger.error(f"Failed to load view '{match.view_id}' for {match.path}: {e}")

        fallback = RouteMatch(match.path, NOT_FOUND_VIEW, {})
        try:
            return fallback, await self.loader.load(NOT_FOUND_VIEW)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Failed to load not-found view, using built-in fallback: {e}")
            return fallback, _builtin_not_found

    async def dispatch(self, path: str) -> Tuple[RouteMatch, ViewFn]:
        return await self.load(self.resolve(path))


class NavigationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class NavigationState:
    path: str
    status: NavigationStatus
    generation: int
    match: Optional[RouteMatch] = None
    view: Optional[ViewFn] = None

    @property
    def is_placeholder(self) -> bool:
        return self.status is NavigationStatus.LOADING


class NavigationSession:
    """Navigation state for one visitor.

    While a view loads, ``current`` is a placeholder for the target path.
    When several navigations overlap, only the most recent one is applied;
    earlier ones resolve to ``None`` and leave ``current`` untouched.
    """

    def __init__(self, dispatcher: ViewDispatcher):
        self._dispatcher = dispatcher
        self._generation = 0
        self.current = NavigationState(path="", status=NavigationStatus.IDLE, generation=0)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def navigate(self, path: str) -> Optional[NavigationState]:
        self._generation += 1
        generation = self._generation
        match = self._dispatcher.resolve(path)

        if not self._dispatcher.loader.is_loaded(match.view_id):
            self.current = NavigationState(match.path, NavigationStatus.LOADING, generation, match)

        match, view = await self._dispatcher.load(match)
        if not self.is_current(generation):
            logger.debug(f"Discarding superseded navigation to {match.path}")
            return None

        self.current = NavigationState(match.path, NavigationStatus.READY, generation, match, view)
        return self.current


class NavigationSessions:
    """Bounded map of visitor profile id to navigation session."""

    def __init__(self, dispatcher: ViewDispatcher, max_sessions: int = 1024):
        self._dispatcher = dispatcher
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, NavigationSession]" = OrderedDict()

    def get(self, profile_id: str) -> NavigationSession:
        session = self._sessions.get(profile_id)
        if session is None:
            session = NavigationSession(self._dispatcher)
            self._sessions[profile_id] = session
            while len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)
        else:
            self._sessions.move_to_end(profile_id)
        return session
