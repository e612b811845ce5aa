"""Inputs and outputs shared by every page view."""

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Mapping
from typing import Optional

from toolbox_website.catalog import ToolRegistry
from toolbox_website.categories import CategoryIndex
from toolbox_website.favorites import FavoritesStore
from toolbox_website.routing import RouteTable


def _identity(path: str) -> str:
    return path


@dataclass
class ViewContext:
    path: str
    params: Mapping[str, str]
    catalog: ToolRegistry
    categories: CategoryIndex
    query: Mapping[str, str] = field(default_factory=dict)
    favorites: Optional[FavoritesStore] = None
    routes: Optional[RouteTable] = None
    url: Callable[[str], str] = _identity
    base_url: str = ""

    def is_favorite(self, tool_id: str) -> bool:
        return self.favorites is not None and self.favorites.is_favorite(tool_id)


@dataclass
class Page:
    """What a view hands back to the shell."""

    title: str
    content: Any
    description: str = ""
    status: int = 200
    canonical_path: Optional[str] = None
    structured_data: List[Dict[str, Any]] = field(default_factory=list)
    noindex: bool = False
