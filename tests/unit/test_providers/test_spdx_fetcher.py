"""Unit tests for the SPDX license text fetcher."""

import aiohttp
import pytest
from aioresponses import aioresponses

from attribution_document.cache import LicenseTextCache
from attribution_document.network import NetworkConfig
from attribution_document.providers.spdx import SPDX_TEXT_URL, SpdxLicenseTextFetcher


def _url(license_id: str) -> str:
    return SPDX_TEXT_URL.format(license_id=license_id)


@pytest.fixture
def cache(tmp_path) -> LicenseTextCache:
    return LicenseTextCache(db_path=tmp_path / "texts.db")


@pytest.mark.asyncio
async def test_fetch_successful() -> None:
    """Test downloading a license text."""
    with aioresponses() as mock:
        mock.get(_url("MIT"), status=200, body="MIT License\n\nPermission is hereby granted")

        async with SpdxLicenseTextFetcher() as fetcher:
            text = await fetcher.fetch("MIT")

    assert text == "MIT License\n\nPermission is hereby granted"


@pytest.mark.asyncio
async def test_fetch_unknown_license() -> None:
    """Test that a 404 means there is no text."""
    with aioresponses() as mock:
        mock.get(_url("Foo"), status=404)

        async with SpdxLicenseTextFetcher() as fetcher:
            assert await fetcher.fetch("Foo") is None


@pytest.mark.asyncio
async def test_fetch_server_error() -> None:
    """Test that other error statuses mean there is no text."""
    with aioresponses() as mock:
        mock.get(_url("MIT"), status=500)

        async with SpdxLicenseTextFetcher() as fetcher:
            assert await fetcher.fetch("MIT") is None


@pytest.mark.asyncio
async def test_fetch_network_error() -> None:
    """Test that network errors are not raised."""
    with aioresponses() as mock:
        mock.get(_url("MIT"), exception=aiohttp.ClientConnectionError("refused"))

        async with SpdxLicenseTextFetcher() as fetcher:
            assert await fetcher.fetch("MIT") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("license_id", ["LicenseRef-acme", "", "../MIT"])
async def test_fetch_skips_non_spdx_identifiers(license_id: str) -> None:
    """Test that custom or path-like identifiers are never requested."""
    with aioresponses():
        async with SpdxLicenseTextFetcher() as fetcher:
            assert await fetcher.fetch(license_id) is None


@pytest.mark.asyncio
async def test_fetch_through_proxy() -> None:
    """Test that requests go through the configured proxy."""
    network = NetworkConfig.from_proxy_url("http://user:pw@proxy:3128")

    with aioresponses() as mock:
        mock.get(_url("MIT"), status=200, body="mit")

        async with SpdxLicenseTextFetcher(network=network) as fetcher:
            assert await fetcher.fetch("MIT") == "mit"

        request = next(iter(mock.requests.values()))[0]
        assert request.kwargs["proxy"] == "http://proxy:3128"
        assert request.kwargs["proxy_auth"] == aiohttp.BasicAuth("user", "pw")


@pytest.mark.asyncio
async def test_fetch_batch_fills_cache(cache: LicenseTextCache) -> None:
    """Test that a batch download stores all found texts in the cache."""
    with aioresponses() as mock:
        mock.get(_url("MIT"), status=200, body="mit")
        mock.get(_url("Apache-2.0"), status=200, body="apache")
        mock.get(_url("Foo"), status=404)

        async with SpdxLicenseTextFetcher() as fetcher:
            texts = await fetcher.fetch_batch(["MIT", "Apache-2.0", "Foo", "MIT"], cache=cache)

    assert texts == {"MIT": "mit", "Apache-2.0": "apache", "Foo": None}
    assert cache.get_batch(["MIT", "Apache-2.0", "Foo"]) == {"MIT": "mit", "Apache-2.0": "apache"}


@pytest.mark.asyncio
async def test_fetch_batch_uses_cached_texts(cache: LicenseTextCache) -> None:
    """Test that cached licenses are not downloaded again."""
    cache.set("MIT", "cached mit")

    with aioresponses() as mock:
        mock.get(_url("ISC"), status=200, body="isc")

        async with SpdxLicenseTextFetcher() as fetcher:
            texts = await fetcher.fetch_batch(["MIT", "ISC"], cache=cache)

        requested = [str(url) for _, url in mock.requests]

    assert texts == {"MIT": "cached mit", "ISC": "isc"}
    assert requested == [_url("ISC")]


@pytest.mark.asyncio
async def test_fetch_batch_without_cache() -> None:
    """Test a batch download without cache."""
    with aioresponses() as mock:
        mock.get(_url("MIT"), exception=aiohttp.ClientError("boom"))

        async with SpdxLicenseTextFetcher() as fetcher:
            texts = await fetcher.fetch_batch(["MIT"])

    assert texts == {"MIT": None}
