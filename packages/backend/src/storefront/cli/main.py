"""Storefront CLI — run the server, browse the catalog, manage admins.

Usage:
    storefront serve                      # Run the API with uvicorn
    storefront products --page 2          # Paginated product listing
    storefront product 65a1f0c2e4b0a1b2c3d4e5f6
    storefront promote admin@example.com  # Grant the ADMIN role
"""

from __future__ import annotations

import asyncio
import json
import os
import sys

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:5500"


def _api_url() -> str:
    return os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Storefront backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "-"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


async def _get_json(path: str, params: dict | None = None) -> dict:
    async with _client() as c:
        r = await c.get(path, params=params)
        r.raise_for_status()
        return r.json()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="storefront")
def main():
    """Storefront — catalog, sessions and live chat."""


@main.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", default=None, type=int, help="Port (default from settings)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the HTTP + WebSocket server."""
    import uvicorn

    from storefront.config import settings

    uvicorn.run(
        "storefront.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command()
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=25, type=int, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def products(page: int, limit: int, as_json: bool):
    """List products, one page at a time. The API returns the whole catalog."""
    try:
        body = asyncio.run(_get_json("/api/products"))
    except httpx.HTTPError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    items = body["data"]
    start = (page - 1) * limit
    rows = items[start:start + limit]
    if as_json:
        click.echo(_pretty_json(rows))
        return

    _print_table(rows, [
        ("ID", "id", 24),
        ("TITLE", "title", 30),
        ("CODE", "code", 10),
        ("PRICE", "price", 10),
        ("STOCK", "stock", 6),
    ])
    total_pages = max(1, -(-len(items) // limit))
    click.echo(f"\nPage {page} of {total_pages} ({len(items)} products)")


@main.command()
@click.argument("product_id")
def product(product_id: str):
    """Show one product."""
    try:
        body = asyncio.run(_get_json(f"/api/products/{product_id}"))
    except httpx.HTTPStatusError as e:
        click.secho(f"Error: {e.response.json().get('data')}", fg="red", err=True)
        sys.exit(1)
    except httpx.HTTPError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if body["data"] is None:
        click.secho("Product not found", fg="yellow")
        sys.exit(1)
    click.echo(_pretty_json(body["data"]))


@main.command()
@click.argument("email")
def promote(email: str):
    """Grant the ADMIN role to an existing account (direct database access)."""
    user = asyncio.run(_promote(email))
    if user is None:
        click.secho(f"No account registered with {email}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"{email} is now ADMIN", fg="green")


async def _promote(email: str):
    from storefront.db.engine import async_session_factory, engine
    from storefront.services.user_service import UserService

    try:
        async with async_session_factory() as db:
            return await UserService(db).promote(email)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    main()
