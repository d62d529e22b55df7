"""License text providers.

This module provides lookups of license texts from local directories and
from texts downloaded from the SPDX license list.
"""

from attribution_document.providers.base import LicenseTextProvider
from attribution_document.providers.cached import CachedLicenseTextProvider
from attribution_document.providers.chain import ChainedLicenseTextProvider
from attribution_document.providers.directory import DirectoryLicenseTextProvider
from attribution_document.providers.spdx import SpdxLicenseTextFetcher

__all__ = [
    "LicenseTextProvider",
    "CachedLicenseTextProvider",
    "ChainedLicenseTextProvider",
    "DirectoryLicenseTextProvider",
    "SpdxLicenseTextFetcher",
]
