"""Tests for the domain source loader."""

from datetime import datetime, timedelta, UTC

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from unittest.mock import AsyncMock, patch
from routing_common import FetchError
from routing_schemas import DnsRoutingGroup
from dns_routing.cache import URLCache
from dns_routing.fetchers import HTTPFetcher
from dns_routing.loaders import DomainLoader

URL = "https://example.com/social.txt"


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 10, 5, 12, 0, tzinfo=UTC)

    def __call__(self):
        return self.now


def http_result(content):
    return {
        "content": content,
        "metadata": {"http_status": 200, "content_length": len(content), "source_url": URL},
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loader(tmp_path, clock):
    return DomainLoader(URLCache(tmp_path / "cache", ttl=60, clock=clock))


@pytest.mark.asyncio
async def test_load_file(loader, tmp_path):
    path = tmp_path / "social.txt"
    path.write_text("# social\nfacebook.com\nyoutube\nfull:vk.com @ru\n", encoding="utf-8")

    result = await loader.load_file("social", str(path))

    assert result.kind == "file"
    assert result.domains == ["facebook.com", "vk.com"]
    assert result.skipped == 1


@pytest.mark.asyncio
async def test_load_url_fetches_and_caches(loader):
    fetch = AsyncMock(return_value=http_result("facebook.com\ninstagram.com\n"))

    with patch.object(HTTPFetcher, "fetch", fetch):
        first = await loader.load_url("social", URL)
        second = await loader.load_url("social", URL)

    assert first.domains == ["facebook.com", "instagram.com"]
    assert not first.from_cache
    assert not first.changed
    assert second.from_cache
    assert second.domains == first.domains
    assert fetch.await_count == 1


@pytest.mark.asyncio
async def test_load_url_detects_checksum_change(loader, clock):
    with patch.object(
        HTTPFetcher, "fetch", AsyncMock(return_value=http_result("facebook.com\n"))
    ):
        await loader.load_url("social", URL)

    clock.now += timedelta(seconds=61)

    with patch.object(
        HTTPFetcher, "fetch", AsyncMock(return_value=http_result("facebook.com\nvk.com\n"))
    ):
        result = await loader.load_url("social", URL)

    assert result.changed
    assert result.domains == ["facebook.com", "vk.com"]


@pytest.mark.asyncio
async def test_load_url_same_content_not_changed(loader, clock):
    fetch = AsyncMock(return_value=http_result("facebook.com\n"))

    with patch.object(HTTPFetcher, "fetch", fetch):
        await loader.load_url("social", URL)
        clock.now += timedelta(seconds=61)
        result = await loader.load_url("social", URL)

    assert fetch.await_count == 2
    assert not result.changed


@pytest.mark.asyncio
async def test_load_url_passes_fetch_settings(tmp_path):
    loader = DomainLoader(URLCache(tmp_path), fetch_timeout=7, fetch_retries=2)

    with patch("dns_routing.loaders.domain_loader.HTTPFetcher") as mock_fetcher:
        mock_fetcher.return_value.fetch = AsyncMock(return_value=http_result("a.com"))
        await loader.load_url("social", URL)

    kwargs = mock_fetcher.call_args.kwargs
    assert kwargs["timeout"] == 7
    assert kwargs["retries"] == 2


@pytest.mark.asyncio
async def test_load_group_collects_errors(loader, tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("facebook.com\n", encoding="utf-8")
    group = DnsRoutingGroup(
        name="social",
        domain_files=[str(tmp_path / "missing.txt"), str(good)],
        domain_urls=[URL],
        interface_id="Wireguard0",
    )

    failing = AsyncMock(side_effect=FetchError("Failed to fetch domain URL", context={"url": URL}))
    with patch.object(HTTPFetcher, "fetch", failing):
        results, errors = await loader.load_group(group)

    assert [r.source for r in results] == [str(good)]
    assert len(errors) == 2
    assert all(e.context["group"] == "social" for e in errors)


@pytest.mark.asyncio
async def test_load_group_reports_undecodable_url(loader, tmp_path):
    async def binary_list(request):
        return web.Response(body=b"good.com\n\xff\xfe bad\n")

    app = web.Application()
    app.router.add_get("/binary.txt", binary_list)
    server = TestServer(app)
    await server.start_server()

    good = tmp_path / "good.txt"
    good.write_text("facebook.com\n", encoding="utf-8")
    group = DnsRoutingGroup(
        name="social",
        domain_files=[str(good)],
        domain_urls=[str(server.make_url("/binary.txt"))],
        interface_id="Wireguard0",
    )

    try:
        results, errors = await loader.load_group(group)
    finally:
        await server.close()

    assert [r.source for r in results] == [str(good)]
    assert len(errors) == 1
    assert isinstance(errors[0], FetchError)
    assert errors[0].context["group"] == "social"
