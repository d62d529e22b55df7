"""Downloader for license texts from the SPDX license list.

Texts are fetched concurrently ahead of report generation and stored in
the license text cache, where CachedLicenseTextProvider picks them up.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from attribution_document.cache import LicenseTextCache
from attribution_document.network import NetworkConfig

logger = logging.getLogger(__name__)

SPDX_TEXT_URL = (
    "https://raw.githubusercontent.com/spdx/license-list-data/main/text/{license_id}.txt"
)


class SpdxLicenseTextFetcher:
    """Fetches license texts from the SPDX license-list-data repository.

    Manages a shared aiohttp.ClientSession for connection reuse. Use as an
    async context manager or call close() when done.

    Attributes:
        network: Proxy configuration used for every request.
        url_template: URL template with a ``{license_id}`` placeholder.
    """

    def __init__(
        self,
        network: Optional[NetworkConfig] = None,
        url_template: str = SPDX_TEXT_URL,
    ) -> None:
        self.network = network or NetworkConfig()
        self.url_template = url_template
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            The shared aiohttp ClientSession.
        """
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=10),
                **self.network.session_kwargs(),
            )
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "SpdxLicenseTextFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def fetch(self, license_id: str) -> Optional[str]:
        """Fetch the text of a single license.

        Args:
            license_id: SPDX license identifier.

        Returns:
            The license text, or None if the license is unknown to SPDX or
            the download failed.
        """
        if not license_id or "/" in license_id or license_id.startswith("LicenseRef-"):
            return None

        url = self.url_template.format(license_id=license_id)
        logger.debug("Fetching license text from %s", url)

        try:
            session = await self._get_session()
            async with session.get(url, **self.network.request_kwargs()) as response:
                if response.status == 404:
                    logger.info("No SPDX license text for %s", license_id)
                    return None

                if response.status != 200:
                    logger.error(
                        "SPDX license list returned status %d for %s",
                        response.status,
                        license_id,
                    )
                    return None

                return await response.text()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Network error fetching license text for %s: %s", license_id, e)
            return None

    async def fetch_batch(
        self,
        license_ids: list[str],
        cache: Optional[LicenseTextCache] = None,
    ) -> dict[str, Optional[str]]:
        """Fetch the texts of multiple licenses concurrently.

        Licenses already present in the cache are not downloaded again, and
        downloaded texts are written back to it.

        Args:
            license_ids: SPDX license identifiers.
            cache: Optional cache to consult and fill.

        Returns:
            Mapping of every requested identifier to its text (or None).
        """
        ids = list(dict.fromkeys(license_ids))
        results: dict[str, Optional[str]] = dict(cache.get_batch(ids)) if cache else {}

        to_fetch = [license_id for license_id in ids if license_id not in results]
        if results:
            logger.debug("Using %d cached license texts", len(results))

        logger.info("Fetching %d license texts", len(to_fetch))
        fetched = await asyncio.gather(
            *(self.fetch(license_id) for license_id in to_fetch),
            return_exceptions=True,
        )

        downloaded: dict[str, str] = {}
        for license_id, text in zip(to_fetch, fetched):
            if isinstance(text, Exception):
                logger.error("Exception fetching license text for %s: %s", license_id, text)
                text = None
            results[license_id] = text
            if text is not None:
                downloaded[license_id] = text

        if cache and downloaded:
            cache.set_batch(downloaded)

        logger.info(
            "License text download complete: %d/%d successful",
            len(downloaded),
            len(to_fetch),
        )
        return {license_id: results[license_id] for license_id in ids}
