"""License selection and license entry construction.

Decides which licenses of a package end up in the attribution document
and turns each of them into a renderable LicenseInfo.
"""

import logging
from typing import Optional

from attribution_document.models import AnalysisResult, Identifier, LicenseInfo
from attribution_document.providers.base import LicenseTextProvider
from attribution_document.registry import SpdxLicenseRegistry

logger = logging.getLogger(__name__)

NO_LICENSE_TEXT = "No license text found."

# Width of a tab in rendered license texts.
TAB_REPLACEMENT = "    "


def collect_licenses(id: Identifier, result: AnalysisResult) -> list[str]:
    """Select the licenses that apply to a package or project.

    Concluded licenses are a manual override: if there are any, declared
    and detected licenses are ignored.

    Args:
        id: Identifier of the package or project.
        result: The analysis result to read the license sources from.

    Returns:
        Sorted, deduplicated license identifiers (possibly empty).
    """
    concluded = result.get_concluded_licenses(id)
    if concluded:
        return sorted(set(concluded))

    declared = result.get_declared_licenses(id)
    detected = result.get_detected_licenses(id)
    return sorted(set(declared) | set(detected))


def license_key(license_id: str) -> str:
    """Return the anchor key for a license.

    The key is the lowercase hex encoding of the identifier's UTF-8 bytes,
    so it only contains [0-9a-f] and is unique per identifier.
    """
    return license_id.encode("utf-8").hex()


def create_license_info(
    license_id: str,
    text_provider: LicenseTextProvider,
    registry: Optional[SpdxLicenseRegistry] = None,
) -> LicenseInfo:
    """Build the document entry for a single license.

    Args:
        license_id: License identifier.
        text_provider: Lookup for license texts.
        registry: Lookup for full license names.

    Returns:
        LicenseInfo with anchor key, text, identifier and display name.
    """
    text = text_provider.get_license_text(license_id)
    if text is None:
        logger.debug("No license text found for %s", license_id)
        text = NO_LICENSE_TEXT
    else:
        # The document fonts have no glyph for horizontal tabs.
        text = text.replace("\t", TAB_REPLACEMENT)

    full_name = registry.full_name(license_id) if registry else None

    return LicenseInfo(
        key=license_key(license_id),
        text=text,
        license_id=license_id,
        name=full_name or license_id,
    )
