# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from site_harvest.config import HarvestConfig

ServeFn = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def fast_config() -> HarvestConfig:
    """
    Config with short timeouts so failing requests do not slow the suite down.
    """
    return HarvestConfig(timeout=2.0, user_agent="TestAgent/1.0")


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[ServeFn]:
    """Start aiohttp apps on free ports, return their base URLs, clean up afterwards."""
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "localhost", port)
        await site.start()
        runners.append(runner)
        return f"http://localhost:{port}"

    yield _start

    for runner in runners:
        await runner.cleanup()


def html_page(title: str, body: str, description: str | None = None) -> str:
    """Build a small but complete HTML document."""
    meta = f'<meta name="description" content="{description}">' if description else ""
    return f"<html><head><title>{title}</title>{meta}</head><body>{body}</body></html>"


def urlset(*locs: str) -> str:
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def sitemap_index(*locs: str) -> str:
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
    )


def xml_response(text: str) -> web.Response:
    return web.Response(text=text, content_type="application/xml")
