"""Catalog search: case-insensitive substring filtering in catalog order."""

from typing import Iterable
from typing import List
from typing import Optional
from typing import Union

from toolbox_website.models import Category
from toolbox_website.models import Tool


def _category_id(category: Union[str, Category, None]) -> Optional[str]:
    if category is None:
        return None
    if isinstance(category, Category):
        return category.id
    return category or None


def matches_query(tool: Tool, needle: str) -> bool:
    """``needle`` must already be lowercased."""
    return needle in tool.name.lower() or needle in tool.description.lower()


def search_tools(
    tools: Iterable[Tool],
    query: Optional[str] = "",
    category: Union[str, Category, None] = None,
) -> List[Tool]:
    """Filter tools by text and, optionally, category.

    The text filter matches name or description. Both filters must pass.
    No ranking: results keep the order of ``tools``.
    """
    needle = (query or "").strip().lower()
    category_id = _category_id(category)

    results = []
    for tool in tools:
        if category_id is not None and tool.category.id != category_id:
            continue
        if needle and not matches_query(tool, needle):
            continue
        results.append(tool)
    return results
