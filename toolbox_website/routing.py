"""Declarative route table mapping URL paths to lazily loaded views."""

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Tuple

from toolbox_website.models import Tool

logger = logging.getLogger(__name__)

NOT_FOUND_VIEW = "not_found"

# View id -> "module:attribute" of its render function.
VIEW_MODULES: Dict[str, str] = {
    "home": "toolbox_website.views.home:render",
    "categories": "toolbox_website.views.categories:render",
    "category": "toolbox_website.views.category:render",
    "tool_detail": "toolbox_website.views.tool_detail:render",
    "tool_workspace": "toolbox_website.views.tool_workspace:render",
    "search": "toolbox_website.views.search:render",
    "favorites": "toolbox_website.views.favorites:render",
    "about": "toolbox_website.views.pages:render_about",
    "author": "toolbox_website.views.pages:render_author",
    "contact": "toolbox_website.views.pages:render_contact",
    "changelog": "toolbox_website.views.pages:render_changelog",
    "privacy": "toolbox_website.views.pages:render_privacy",
    "terms": "toolbox_website.views.pages:render_terms",
    "disclaimer": "toolbox_website.views.pages:render_disclaimer",
    "dmca": "toolbox_website.views.pages:render_dmca",
    "sitemap": "toolbox_website.views.sitemap_page:render",
    NOT_FOUND_VIEW: "toolbox_website.views.not_found:render",
}

# Literal pages, in declaration order.
STATIC_ROUTES: Tuple[Tuple[str, str], ...] = (
    ("/", "home"),
    ("/categories", "categories"),
    ("/search", "search"),
    ("/favorite-tools", "favorites"),
    ("/about", "about"),
    ("/author", "author"),
    ("/contact", "contact"),
    ("/changelog", "changelog"),
    ("/privacy", "privacy"),
    ("/terms", "terms"),
    ("/disclaimer", "disclaimer"),
    ("/dmca", "dmca"),
    ("/sitemap", "sitemap"),
)

PARAMETERIZED_ROUTES: Tuple[Tuple[str, str], ...] = (
    ("/tool/:id", "tool_detail"),
    ("/category/:id", "category"),
)


def normalize_path(path: str) -> str:
    """Drop query string and fragment and ensure a leading slash."""
    path = (path or "").split("#", 1)[0].split("?", 1)[0]
    if not path.startswith("/"):
        path = f"/{path}"
    return path


def _split(path: str) -> List[str]:
    if path == "/":
        return []
    return path[1:].split("/")


@dataclass(frozen=True)
class RoutePattern:
    """Exact path or path with single-segment ``:name`` parameters."""

    raw: str
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> "RoutePattern":
        if not raw.startswith("/"):
            raise ValueError(f"Route pattern must start with '/': {raw!r}")
        segments = tuple(_split(raw))
        for segment in segments:
            if segment in ("", ":"):
                raise ValueError(f"Empty segment in route pattern {raw!r}")
            if "*" in segment:
                raise ValueError(f"Wildcards are not supported: {raw!r}")
        return cls(raw=raw, segments=segments)

    @property
    def is_literal(self) -> bool:
        return not any(segment.startswith(":") for segment in self.segments)

    def match(self, path: str) -> Optional[Dict[str, str]]:
        parts = _split(path)
        if len(parts) != len(self.segments):
            return None
        params: Dict[str, str] = {}
        for expected, actual in zip(self.segments, parts):
            if expected.startswith(":"):
                if not actual:
                    return None
                params[expected[1:]] = actual
            elif expected != actual:
                return None
        return params


@dataclass(frozen=True)
class RouteBinding:
    pattern: RoutePattern
    view_id: str
    defaults: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RouteMatch:
    path: str
    view_id: str
    params: Mapping[str, str]
    binding: Optional[RouteBinding] = None

    @property
    def is_not_found(self) -> bool:
        return self.binding is None


class RouteTable:
    """Ordered bindings; the first binding that matches a path wins."""

    def __init__(self, bindings: Iterable[RouteBinding] = ()):
        self._bindings: List[RouteBinding] = []
        # Literal paths index to their earliest binding; parameterized bindings are scanned in order.
        self._literal: Dict[str, Tuple[int, RouteBinding]] = {}
        self._parameterized: List[Tuple[int, RouteBinding]] = []
        for binding in bindings:
            self.add(binding)

    def add(self, binding: RouteBinding) -> None:
        if binding.view_id not in VIEW_MODULES:
            raise ValueError(f"Unknown view id {binding.view_id!r} for route {binding.pattern.raw!r}")
        position = len(self._bindings)
        self._bindings.append(binding)
        if binding.pattern.is_literal:
            self._literal.setdefault(binding.pattern.raw, (position, binding))
        else:
            self._parameterized.append((position, binding))

    def bind(self, pattern: str, view_id: str, **defaults: str) -> RouteBinding:
        binding = RouteBinding(RoutePattern.parse(pattern), view_id, dict(defaults))
        self.add(binding)
        return binding

    @property
    def bindings(self) -> List[RouteBinding]:
        return list(self._bindings)

    def literal_paths(self) -> List[str]:
        return [binding.pattern.raw for binding in self._bindings if binding.pattern.is_literal]

    def resolve(self, path: str) -> RouteMatch:
        """Resolve ``path`` to one view; unmatched paths map to the not-found view."""
        path = normalize_path(path)
        literal_position, literal = self._literal.get(path, (len(self._bindings), None))

        for position, binding in self._parameterized:
            if position > literal_position:
                break
            params = binding.pattern.match(path)
            if params is not None:
                return RouteMatch(path, binding.view_id, {**binding.defaults, **params}, binding)

        if literal is not None:
            return RouteMatch(path, literal.view_id, dict(literal.defaults), literal)
        return RouteMatch(path, NOT_FOUND_VIEW, {})

    def __len__(self) -> int:
        return len(self._bindings)


def build_route_table(tools: Iterable[Tool]) -> RouteTable:
    """Route table for the site: static pages, parameterized pages, then one route per tool."""
    table = RouteTable()
    for pattern, view_id in STATIC_ROUTES:
        table.bind(pattern, view_id)
    for pattern, view_id in PARAMETERIZED_ROUTES:
        table.bind(pattern, view_id)
    for tool in tools:
        table.bind(f"/tools/{tool.id}", "tool_workspace", id=tool.id)
    logger.info(f"Built route table with {len(table)} bindings")
    return table
