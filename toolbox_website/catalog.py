"""Tool record store assembled from the topical data modules."""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from pydantic import ValidationError

from toolbox_website import config
from toolbox_website.categories import CategoryIndex
from toolbox_website.categories import category_index
from toolbox_website.models import Tool

logger = logging.getLogger(__name__)

# Registration order; first registration of an id wins.
TOOL_MODULES: Tuple[str, ...] = (
    "calculation",
    "converter",
    "image",
    "pdf_document",
    "text_string",
    "downloader",
    "color",
    "developer",
    "seo",
    "writing",
    "grammar_plagiarism",
    "writing_assistance",
)


class DuplicateToolError(RuntimeError):
    """Raised in strict mode when two modules register the same tool id."""


@dataclass(frozen=True)
class DuplicateTool:
    tool_id: str
    kept_module: str
    dropped_module: str


def _build_tool(record: Dict, categories: CategoryIndex) -> Tool:
    data = dict(record)
    data["category"] = categories.by_id(str(data.get("category") or ""))
    return Tool.model_validate(data)


def load_tool_module(name: str, *, data_dir: Path = config.TOOLS_DATA_DIR, categories: CategoryIndex = category_index):
    """Load one topical module from its JSON file; invalid records are skipped."""
    path = data_dir / f"{name}.json"
    records = json.loads(path.read_text(encoding="utf-8"))
    tools: List[Tool] = []
    for position, record in enumerate(records):
        try:
            tools.append(_build_tool(record, categories))
        except (ValidationError, TypeError) as e:
            logger.error(f"Skipping invalid record #{position} in {path.name}: {e}")
    logger.debug(f"Loaded {len(tools)} tools from module '{name}'")
    return tools


class ToolRegistry:
    """Immutable, ordered view over the merged catalog."""

    def __init__(self, tools: Iterable[Tool], duplicates: Sequence[DuplicateTool] = ()):
        self._tools: Tuple[Tool, ...] = tuple(tools)
        self._by_id: Dict[str, Tool] = {tool.id: tool for tool in self._tools}
        if len(self._by_id) != len(self._tools):
            raise ValueError("ToolRegistry requires unique tool ids; merge modules first")
        self.duplicates: Tuple[DuplicateTool, ...] = tuple(duplicates)

    def all(self) -> List[Tool]:
        return list(self._tools)

    def by_id(self, tool_id: str) -> Optional[Tool]:
        return self._by_id.get(tool_id)

    def by_category(self, category_id: str) -> List[Tool]:
        return [tool for tool in self._tools if tool.category.id == category_id]

    def popular(self, limit: int = 12) -> List[Tool]:
        """Most viewed tools; catalog order breaks ties."""
        ranked = sorted(enumerate(self._tools), key=lambda item: (-item[1].views, item[0]))
        return [tool for _, tool in ranked[:limit]]

    def related(self, tool: Tool, limit: int = 6) -> List[Tool]:
        return [t for t in self.by_category(tool.category.id) if t.id != tool.id][:limit]

    def category_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for tool in self._tools:
            counts[tool.category.id] = counts.get(tool.category.id, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._by_id

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools)


def merge_tool_modules(modules: Sequence[Tuple[str, Sequence[Tool]]], *, strict: bool = False) -> ToolRegistry:
    """Concatenate modules in order, keeping the first record for each id.

    Every dropped duplicate is logged; with ``strict`` the first duplicate
    raises ``DuplicateToolError`` instead.
    """
    merged: List[Tool] = []
    owners: Dict[str, str] = {}
    duplicates: List[DuplicateTool] = []

    for module_name, tools in modules:
        for tool in tools:
            owner = owners.get(tool.id)
            if owner is None:
                owners[tool.id] = module_name
                merged.append(tool)
                continue
            duplicate = DuplicateTool(tool_id=tool.id, kept_module=owner, dropped_module=module_name)
            if strict:
                raise DuplicateToolError(
                    f"Tool id '{tool.id}' registered by both '{owner}' and '{module_name}'"
                )
            logger.warning(
                f"Duplicate tool id '{tool.id}' in module '{module_name}' ignored; keeping record from '{owner}'"
            )
            duplicates.append(duplicate)

    return ToolRegistry(merged, duplicates)


@lru_cache()
def load_catalog() -> ToolRegistry:
    """Build the process-wide tool registry from the bundled data modules."""
    modules = [(name, load_tool_module(name)) for name in TOOL_MODULES]
    registry = merge_tool_modules(modules, strict=config.strict_catalog())
    logger.info(f"Loaded {len(registry):,} tools from {len(modules)} modules")
    if registry.duplicates:
        logger.warning(f"{len(registry.duplicates)} duplicate tool ids were dropped during catalog merge")
    return registry
