"""Provider chaining several license text providers in priority order."""

import logging
from typing import Optional

from attribution_document.providers.base import LicenseTextProvider

logger = logging.getLogger(__name__)


class ChainedLicenseTextProvider(LicenseTextProvider):
    """Tries each provider in priority order, stopping at the first text found.

    Attributes:
        providers: Providers sorted by priority (lowest number first).
    """

    def __init__(self, providers: list[LicenseTextProvider]) -> None:
        self.providers = sorted(providers, key=lambda p: p.priority)

    @property
    def name(self) -> str:
        return "chain(" + ", ".join(p.name for p in self.providers) + ")"

    def get_license_text(self, license_id: str) -> Optional[str]:
        for provider in self.providers:
            text = provider.get_license_text(license_id)
            if text is not None:
                logger.debug("License text for %s found by %s", license_id, provider.name)
                return text

        logger.debug("No provider has a license text for %s", license_id)
        return None
