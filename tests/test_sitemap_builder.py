from xml.etree import ElementTree

from toolbox_website.catalog import ToolRegistry
from toolbox_website.categories import category_index
from toolbox_website.models import Tool
from toolbox_website.routing import build_route_table
from toolbox_website.sitemap_builder import build_sitemap
from toolbox_website.sitemap_builder import build_sitemaps
from toolbox_website.sitemap_builder import write_sitemaps

NS = "{http://www.sitemaps.org/schemas/sitemap/0.9}"


def _example_registry():
    return ToolRegistry(
        [
            Tool(id="bmi-calculator", name="BMI Calculator", category=category_index.by_id("calculation")),
            Tool(id="word-counter", name="Word Counter", category=category_index.by_id("text")),
        ]
    )


def _locs(xml_bytes):
    return {elem.findtext(f"{NS}loc") for elem in ElementTree.fromstring(xml_bytes)}


def test_build_sitemaps_produces_expected_sections():
    registry = _example_registry()
    base_url = "https://example.com/toolbox/"

    sitemaps = build_sitemaps(build_route_table(registry), registry, category_index, base_url)

    assert set(sitemaps) == {
        "sitemap-index.xml",
        "sitemap-static.xml",
        "sitemap-tools.xml",
        "sitemap-categories.xml",
    }
    assert "https://example.com/toolbox/sitemaps/sitemap-tools.xml" in _locs(sitemaps["sitemap-index.xml"])
    assert _locs(sitemaps["sitemap-tools.xml"]) == {
        "https://example.com/toolbox/tools/bmi-calculator",
        "https://example.com/toolbox/tools/word-counter",
    }
    assert "https://example.com/toolbox/category/pdf" in _locs(sitemaps["sitemap-categories.xml"])

    static_locs = _locs(sitemaps["sitemap-static.xml"])
    assert "https://example.com/toolbox" in static_locs
    assert "https://example.com/toolbox/about" in static_locs
    assert not any("/tools/" in loc for loc in static_locs)


def test_build_sitemap_combines_everything_once():
    registry = _example_registry()
    xml_bytes = build_sitemap(build_route_table(registry), registry, category_index, "https://example.com")

    locs = [elem.findtext(f"{NS}loc") for elem in ElementTree.fromstring(xml_bytes)]
    assert len(locs) == len(set(locs))
    assert "https://example.com/tools/word-counter" in locs
    assert "https://example.com/category/writing-assistance" in locs
    assert "https://example.com/favorite-tools" in locs


def test_write_sitemaps(tmp_path):
    paths = write_sitemaps({"sitemap-a.xml": b"<urlset/>"}, tmp_path / "out")
    assert [path.name for path in paths] == ["sitemap-a.xml"]
    assert (tmp_path / "out" / "sitemap-a.xml").read_bytes() == b"<urlset/>"
