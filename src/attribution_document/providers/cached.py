"""License text provider backed by the license text cache."""

from typing import Optional

from attribution_document.cache import LicenseTextCache
from attribution_document.providers.base import LicenseTextProvider


class CachedLicenseTextProvider(LicenseTextProvider):
    """Provider returning texts previously downloaded into the cache.

    Attributes:
        cache: The cache to read from.
    """

    def __init__(self, cache: LicenseTextCache) -> None:
        self.cache = cache

    @property
    def name(self) -> str:
        return "cache"

    @property
    def priority(self) -> int:
        return 50

    def get_license_text(self, license_id: str) -> Optional[str]:
        return self.cache.get(license_id)
