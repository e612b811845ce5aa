import json

import pytest

from toolbox_website import config
from toolbox_website.catalog import TOOL_MODULES
from toolbox_website.catalog import DuplicateToolError
from toolbox_website.catalog import ToolRegistry
from toolbox_website.catalog import load_catalog
from toolbox_website.catalog import load_tool_module
from toolbox_website.catalog import merge_tool_modules
from toolbox_website.categories import category_index
from toolbox_website.models import Tool


def _tool(tool_id, name=None, category="calculation", views=0, description=""):
    return Tool(
        id=tool_id,
        name=name or tool_id.replace("-", " ").title(),
        description=description,
        category=category_index.by_id(category),
        views=views,
    )


def test_bundled_catalog_has_unique_ids():
    registry = load_catalog()
    ids = [tool.id for tool in registry.all()]
    assert len(ids) == len(set(ids))
    assert len(registry) > 600
    assert not registry.duplicates


def test_bundled_catalog_lookup():
    registry = load_catalog()
    bmi = registry.by_id("bmi-calculator")
    assert bmi is not None
    assert bmi.name == "BMI Calculator"
    assert bmi.category.id == "calculation"
    assert bmi.features
    assert registry.by_id("no-such-tool") is None
    assert "bmi-calculator" in registry


def test_every_bundled_module_loads():
    for name in TOOL_MODULES:
        assert load_tool_module(name), name


def test_merge_keeps_first_registration_and_reports_duplicates(caplog):
    first = _tool("word-counter", name="Word Counter")
    second = _tool("word-counter", name="Word Counter v2", category="text")
    other = _tool("case-converter", category="text")

    registry = merge_tool_modules([("calculation", [first]), ("text_string", [second, other])])

    assert [tool.id for tool in registry.all()] == ["word-counter", "case-converter"]
    assert registry.by_id("word-counter").name == "Word Counter"
    assert len(registry.duplicates) == 1
    duplicate = registry.duplicates[0]
    assert (duplicate.tool_id, duplicate.kept_module, duplicate.dropped_module) == (
        "word-counter",
        "calculation",
        "text_string",
    )
    assert "Duplicate tool id 'word-counter'" in caplog.text


def test_merge_strict_mode_raises():
    with pytest.raises(DuplicateToolError):
        merge_tool_modules([("a", [_tool("x")]), ("b", [_tool("x")])], strict=True)


def test_registry_rejects_unmerged_duplicates():
    with pytest.raises(ValueError):
        ToolRegistry([_tool("x"), _tool("x")])


def test_load_tool_module_skips_invalid_records_and_resolves_categories(tmp_path):
    records = [
        {"id": "ok", "name": "Ok", "category": "text"},
        {"id": "", "name": "Blank id", "category": "text"},
        {"name": "No id", "category": "text"},
        {"id": "lost", "name": "Lost", "category": "not-a-category"},
    ]
    (tmp_path / "sample.json").write_text(json.dumps(records), encoding="utf-8")

    tools = load_tool_module("sample", data_dir=tmp_path)

    assert [tool.id for tool in tools] == ["ok", "lost"]
    assert tools[0].category.id == "text"
    assert tools[1].category == category_index.default


def test_popular_orders_by_views_with_catalog_order_tiebreak():
    registry = ToolRegistry([_tool("a", views=5), _tool("b", views=9), _tool("c", views=5), _tool("d", views=1)])
    assert [tool.id for tool in registry.popular(3)] == ["b", "a", "c"]


def test_related_excludes_tool_itself():
    a = _tool("a", category="color")
    registry = ToolRegistry([a, _tool("b", category="color"), _tool("c", category="seo")])
    assert [tool.id for tool in registry.related(a)] == ["b"]
    assert registry.category_counts() == {"color": 2, "seo": 1}


def test_tool_requires_non_blank_id():
    with pytest.raises(ValueError):
        _tool("   ")


def test_bundled_records_reference_known_categories():
    for name in TOOL_MODULES:
        records = json.loads((config.TOOLS_DATA_DIR / f"{name}.json").read_text(encoding="utf-8"))
        for record in records:
            assert category_index.contains(record["category"]), (name, record["id"])
