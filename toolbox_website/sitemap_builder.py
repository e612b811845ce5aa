"""Sitemap generation utilities."""

from __future__ import annotations

import logging
from datetime import datetime
from datetime import timezone
from pathlib import Path
from typing import Dict
from typing import Iterable
from typing import List
from urllib.parse import quote
from xml.etree.ElementTree import Element
from xml.etree.ElementTree import SubElement
from xml.etree.ElementTree import tostring

from toolbox_website.catalog import ToolRegistry
from toolbox_website.categories import CategoryIndex
from toolbox_website.routing import RouteTable

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_FILES = {
    "sitemap-static.xml": "Static routes and landing pages",
    "sitemap-tools.xml": "Individual tool pages",
    "sitemap-categories.xml": "Category listing pages",
}


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _build_urlset(entries: Iterable[Dict[str, str]]) -> bytes:
    urlset = Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        url_element = SubElement(urlset, "url")
        SubElement(url_element, "loc").text = entry["loc"]
        SubElement(url_element, "lastmod").text = entry["lastmod"]
        if "changefreq" in entry:
            SubElement(url_element, "changefreq").text = entry["changefreq"]
        if "priority" in entry:
            SubElement(url_element, "priority").text = entry["priority"]
    return tostring(urlset, encoding="utf-8", xml_declaration=True)


def _build_sitemapindex(entries: Iterable[Dict[str, str]]) -> bytes:
    sitemap_index = Element("sitemapindex", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        sitemap_el = SubElement(sitemap_index, "sitemap")
        SubElement(sitemap_el, "loc").text = entry["loc"]
        SubElement(sitemap_el, "lastmod").text = entry["lastmod"]
    return tostring(sitemap_index, encoding="utf-8", xml_declaration=True)


def _build_static_entries(routes: RouteTable, base_url: str, lastmod: str) -> List[Dict[str, str]]:
    entries: List[Dict[str, str]] = []
    for path in routes.literal_paths():
        if path.startswith("/tools/"):
            continue
        if path == "/":
            entries.append({"loc": base_url, "lastmod": lastmod, "changefreq": "daily", "priority": "1.0"})
        else:
            entries.append({"loc": f"{base_url}{path}", "lastmod": lastmod, "changefreq": "weekly", "priority": "0.8"})
    return entries


def _build_tool_entries(registry: ToolRegistry, base_url: str, lastmod: str) -> List[Dict[str, str]]:
    return [
        {"loc": f"{base_url}/tools/{quote(tool.id)}", "lastmod": lastmod, "changefreq": "monthly", "priority": "0.7"}
        for tool in registry
    ]


def _build_category_entries(categories: CategoryIndex, base_url: str, lastmod: str) -> List[Dict[str, str]]:
    return [
        {
            "loc": f"{base_url}/category/{quote(category.id)}",
            "lastmod": lastmod,
            "changefreq": "weekly",
            "priority": "0.8",
        }
        for category in categories
    ]


def build_sitemaps(
    routes: RouteTable, registry: ToolRegistry, categories: CategoryIndex, base_url: str
) -> Dict[str, bytes]:
    """Build sitemap XML blobs for all sections plus a sitemap index."""
    normalized_base = base_url.rstrip("/")
    lastmod = _today()

    sitemap_blobs = {
        "sitemap-static.xml": _build_urlset(_build_static_entries(routes, normalized_base, lastmod)),
        "sitemap-tools.xml": _build_urlset(_build_tool_entries(registry, normalized_base, lastmod)),
        "sitemap-categories.xml": _build_urlset(_build_category_entries(categories, normalized_base, lastmod)),
    }
    index_entries = [
        {"loc": f"{normalized_base}/sitemaps/{quote(filename)}", "lastmod": lastmod} for filename in SITEMAP_FILES
    ]
    sitemap_blobs["sitemap-index.xml"] = _build_sitemapindex(index_entries)
    return sitemap_blobs


def build_sitemap(routes: RouteTable, registry: ToolRegistry, categories: CategoryIndex, base_url: str) -> bytes:
    """Single urlset covering static pages, categories and tools."""
    normalized_base = base_url.rstrip("/")
    lastmod = _today()
    entries = (
        _build_static_entries(routes, normalized_base, lastmod)
        + _build_category_entries(categories, normalized_base, lastmod)
        + _build_tool_entries(registry, normalized_base, lastmod)
    )
    return _build_urlset(entries)


def write_sitemaps(sitemaps: Dict[str, bytes], output_dir: Path) -> List[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, content in sitemaps.items():
        path = output_dir / filename
        path.write_bytes(content)
        logger.info(f"Wrote {path} ({len(content)} bytes)")
        written.append(path)
    return written
