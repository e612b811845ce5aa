"""Best-effort background warming of likely-next views."""

import asyncio
import logging
from typing import Callable
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Sequence

from fasthtml.common import Link

from toolbox_website.catalog import ToolRegistry
from toolbox_website.categories import CategoryIndex
from toolbox_website.dispatcher import ViewLoader

logger = logging.getLogger(__name__)

# Views most often reached from the landing page.
LIKELY_NEXT_VIEWS: Sequence[str] = ("tool_workspace", "category", "search", "tool_detail", "categories", "favorites")


def save_data_requested(headers: Mapping[str, str]) -> bool:
    """True when the client asked for reduced data usage."""
    return headers.get("save-data", "").strip().lower() == "on"


def top_category_ids(registry: ToolRegistry, limit: int = 4) -> List[str]:
    """Category ids ordered by how many tools link to them."""
    counts = registry.category_counts()
    return [category_id for category_id, _ in sorted(counts.items(), key=lambda item: -item[1])[:limit]]


def preload_view_ids(registry: ToolRegistry, categories: CategoryIndex) -> List[str]:
    """Views worth warming once the first page is out."""
    view_ids = list(LIKELY_NEXT_VIEWS)
    if not len(registry):
        view_ids.remove("tool_workspace")
        view_ids.remove("tool_detail")
    if not len(categories):
        view_ids.remove("category")
    return view_ids


def prefetch_links(
    registry: ToolRegistry, headers: Mapping[str, str], url: Callable[[str], str], limit: int = 4
) -> list:
    """Prefetch hints for the most-linked category pages, unless the client asked to save data."""
    if save_data_requested(headers):
        return []
    return [
        Link(rel="prefetch", href=url(f"/category/{category_id}")) for category_id in top_category_ids(registry, limit)
    ]


class PreloadScheduler:
    """Runs a single preload task per process; never raises to callers."""

    def __init__(self, loader: ViewLoader, enabled: bool = True):
        self._loader = loader
        self.enabled = enabled
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, view_ids: Iterable[str] = LIKELY_NEXT_VIEWS) -> Optional[asyncio.Task]:
        """Start warming ``view_ids`` in the background once; later calls are no-ops until ``cancel``."""
        if not self.enabled or self._task is not None:
            return None
        try:
            self._task = asyncio.get_running_loop().create_task(self._run(list(view_ids)))
        except RuntimeError as e:
            logger.debug(f"Preload skipped, no running event loop: {e}")
            return None
        return self._task

    async def _run(self, view_ids: List[str]) -> None:
        warmed = await self._loader.preload(view_ids)
        logger.debug(f"Preloaded {warmed} views")

    def cancel(self) -> None:
        if self.running:
            self._task.cancel()
        self._task = None
