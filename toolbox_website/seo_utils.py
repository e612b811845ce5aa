"""SEO utilities for page metadata and structured data."""

from typing import Dict
from typing import List

from toolbox_website.config import SITE_NAME
from toolbox_website.models import Tool


def canonical_url(base_url: str, path: str = "") -> str:
    """Absolute URL for ``path`` without a trailing slash."""
    base = base_url.rstrip("/")
    path = path.strip("/")
    return f"{base}/{path}" if path else base


def generate_meta_title(page_title: str, category: str | None = None, max_length: int = 60) -> str:
    """Generate SEO-optimized meta title."""
    if category:
        base_title = f"{page_title} - Free Online {category} | {SITE_NAME}"
        if len(base_title) <= max_length:
            return base_title

    short_title = f"{page_title} | {SITE_NAME}"
    if len(short_title) <= max_length:
        return short_title

    # Minimal version
    return page_title[:max_length]


def generate_meta_description(name: str, description: str, max_length: int = 160) -> str:
    """Generate SEO-optimized meta description."""
    if not description:
        return f"Use {name} online for free. Fast, private and works in any browser."

    # Clean and truncate description
    clean_desc = description.strip()
    if len(clean_desc) <= max_length:
        return clean_desc

    # Truncate at sentence boundary
    sentences = clean_desc.split(". ")
    result = sentences[0]

    # If first sentence is too long, hard truncate it
    if len(result) > max_length - 3:
        return result[: max_length - 3] + "..."

    for sentence in sentences[1:]:
        if len(result + ". " + sentence) <= max_length - 3:
            result += ". " + sentence
        else:
            break

    if not result.endswith("."):
        result += "..."

    return result


def generate_breadcrumb_list(path_segments: List[Dict[str, str]], base_url: str) -> Dict:
    """
    Generate JSON-LD breadcrumb structured data.

    Args:
        path_segments: List of {"name": "Display Name", "url": "relative/path"}
        base_url: Base URL for the site
    """
    items = []

    for i, segment in enumerate(path_segments, 1):
        items.append(
            {
                "@type": "ListItem",
                "position": i,
                "name": segment["name"],
                "item": canonical_url(base_url, segment["url"]),
            }
        )

    return {"@context": "https://schema.org", "@type": "BreadcrumbList", "itemListElement": items}


def generate_tool_schema(tool: Tool, base_url: str) -> Dict:
    """Generate SoftwareApplication JSON-LD schema for a tool."""
    schema = {
        "@context": "https://schema.org",
        "@type": "SoftwareApplication",
        "name": tool.name,
        "description": tool.description,
        "url": canonical_url(base_url, tool.path),
        "applicationCategory": tool.category.name,
        "operatingSystem": "Web Browser",
        "offers": {"@type": "Offer", "price": "0", "priceCurrency": "USD"},
    }

    if tool.features:
        schema["featureList"] = list(tool.features)

    return schema
