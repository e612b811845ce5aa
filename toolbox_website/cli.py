"""Command line entry points for running and inspecting the site."""

import logging
from pathlib import Path
from typing import Optional

import click

from toolbox_website import config
from toolbox_website.catalog import TOOL_MODULES
from toolbox_website.catalog import DuplicateToolError
from toolbox_website.catalog import load_tool_module
from toolbox_website.catalog import merge_tool_modules
from toolbox_website.categories import category_index
from toolbox_website.logging_config import setup_logging
from toolbox_website.routing import build_route_table
from toolbox_website.sitemap_builder import build_sitemaps
from toolbox_website.sitemap_builder import write_sitemaps

logger = logging.getLogger(__name__)


def _load_registry(strict: bool):
    modules = [(name, load_tool_module(name)) for name in TOOL_MODULES]
    return modules, merge_tool_modules(modules, strict=strict)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL.")
def main(log_level: Optional[str]) -> None:
    """Toolbox website utilities."""
    setup_logging(log_level or config.log_level())


@main.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", type=int, default=None, help="Defaults to WEB_PORT.")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def serve(host: str, port: Optional[int], reload: bool) -> None:
    """Run the web server."""
    import uvicorn

    port = port or config.web_port()
    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("toolbox_website.web:app", host=host, port=port, reload=reload)


@main.command()
@click.option("--base-url", help="Absolute base URL for the site (e.g., https://toolbox.example.com).")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("dist/sitemaps"),
    show_default=True,
)
@click.option("--dry-run", is_flag=True, help="Render sitemaps without writing them.")
def sitemap(base_url: Optional[str], output_dir: Path, dry_run: bool) -> None:
    """Render the sitemap index and section sitemaps."""
    resolved_base = base_url or config.service_url()
    _, registry = _load_registry(strict=False)
    sitemaps = build_sitemaps(build_route_table(registry), registry, category_index, resolved_base)
    if dry_run:
        for filename, content in sitemaps.items():
            click.echo(f"{filename}: {len(content)} bytes")
        return
    for path in write_sitemaps(sitemaps, output_dir):
        click.echo(str(path))


@main.command("check-catalog")
@click.option(
    "--strict/--no-strict", default=None, help="Fail on duplicate tool ids (defaults to TOOLBOX_STRICT_CATALOG)."
)
def check_catalog(strict: Optional[bool]) -> None:
    """Validate the tool data modules and report duplicate ids."""
    strict = config.strict_catalog() if strict is None else strict
    try:
        modules, registry = _load_registry(strict=strict)
    except DuplicateToolError as e:
        raise click.ClickException(str(e)) from e

    for name, tools in modules:
        click.echo(f"{name:<20} {len(tools):>5} tools")
    click.echo(f"{'total':<20} {len(registry):>5} unique tools")

    counts = registry.category_counts()
    for category in category_index:
        click.echo(f"  {category.id:<20} {counts.get(category.id, 0):>5}")

    for duplicate in registry.duplicates:
        click.echo(
            f"duplicate '{duplicate.tool_id}': kept from {duplicate.kept_module}, "
            f"dropped from {duplicate.dropped_module}"
        )


@main.command()
def routes() -> None:
    """Print the route table in declaration order."""
    _, registry = _load_registry(strict=False)
    for binding in build_route_table(registry).bindings:
        defaults = " ".join(f"{k}={v}" for k, v in binding.defaults.items())
        click.echo(f"{binding.pattern.raw:<45} {binding.view_id:<16} {defaults}".rstrip())


if __name__ == "__main__":
    main()
