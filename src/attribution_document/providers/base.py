"""Base interface for license text providers.

Providers look up the full text of a license by its identifier, from
local directories, a cache of downloaded texts, or a chain of both.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LicenseTextProvider(ABC):
    """Abstract base class for license text providers.

    Lookups are synchronous; anything that has to come from the network
    is fetched ahead of time (see SpdxLicenseTextFetcher).
    """

    @abstractmethod
    def get_license_text(self, license_id: str) -> Optional[str]:
        """Return the text of a license.

        Args:
            license_id: License identifier (e.g., "MIT").

        Returns:
            The license text, or None if this provider has none.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name for logging/debugging.

        Returns:
            Name like "directory", "cache", etc.
        """
        ...

    @property
    def priority(self) -> int:
        """Return provider priority for chain ordering.

        Lower numbers are tried first. Default is 100.

        Returns:
            Priority value.
        """
        return 100

    def has_license_text(self, license_id: str) -> bool:
        return self.get_license_text(license_id) is not None
