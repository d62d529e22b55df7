"""SPDX license registry for resolving full license names.

Maps SPDX license identifiers to the human-readable names shown in the
attribution document. Identifiers are normalized with the
license-expression SPDX licensing before lookup, so "apache-2.0" and
"Apache-2.0" resolve to the same name.
"""

import logging
from functools import lru_cache
from typing import Optional

from license_expression import get_spdx_licensing

logger = logging.getLogger(__name__)

SPDX = get_spdx_licensing()

# Based on https://spdx.org/licenses/
SPDX_NAMES = {
    "0BSD": "BSD Zero Clause License",
    "AGPL-3.0-only": "GNU Affero General Public License v3.0 only",
    "AGPL-3.0-or-later": "GNU Affero General Public License v3.0 or later",
    "Apache-1.1": "Apache License 1.1",
    "Apache-2.0": "Apache License 2.0",
    "Artistic-2.0": "Artistic License 2.0",
    "BSD-2-Clause": 'BSD 2-Clause "Simplified" License',
    "BSD-3-Clause": 'BSD 3-Clause "New" or "Revised" License',
    "BSL-1.0": "Boost Software License 1.0",
    "CC-BY-4.0": "Creative Commons Attribution 4.0 International",
    "CC-BY-SA-4.0": "Creative Commons Attribution Share Alike 4.0 International",
    "CC0-1.0": "Creative Commons Zero v1.0 Universal",
    "CDDL-1.0": "Common Development and Distribution License 1.0",
    "EPL-1.0": "Eclipse Public License 1.0",
    "EPL-2.0": "Eclipse Public License 2.0",
    "EUPL-1.2": "European Union Public License 1.2",
    "GPL-2.0": "GNU General Public License v2.0 only",
    "GPL-2.0-only": "GNU General Public License v2.0 only",
    "GPL-2.0-or-later": "GNU General Public License v2.0 or later",
    "GPL-3.0": "GNU General Public License v3.0 only",
    "GPL-3.0-only": "GNU General Public License v3.0 only",
    "GPL-3.0-or-later": "GNU General Public License v3.0 or later",
    "ISC": "ISC License",
    "LGPL-2.0-only": "GNU Library General Public License v2 only",
    "LGPL-2.0-or-later": "GNU Library General Public License v2 or later",
    "LGPL-2.1": "GNU Lesser General Public License v2.1 only",
    "LGPL-2.1-only": "GNU Lesser General Public License v2.1 only",
    "LGPL-2.1-or-later": "GNU Lesser General Public License v2.1 or later",
    "LGPL-3.0": "GNU Lesser General Public License v3.0 only",
    "LGPL-3.0-only": "GNU Lesser General Public License v3.0 only",
    "LGPL-3.0-or-later": "GNU Lesser General Public License v3.0 or later",
    "MIT": "MIT License",
    "MPL-1.1": "Mozilla Public License 1.1",
    "MPL-2.0": "Mozilla Public License 2.0",
    "PSF-2.0": "Python Software Foundation License 2.0",
    "Python-2.0": "Python License 2.0",
    "Unlicense": "The Unlicense",
    "WTFPL": "Do What The F*ck You Want To Public License",
    "Zlib": "zlib License",
}

_NAMES_LOWERCASE = {key.lower(): name for key, name in SPDX_NAMES.items()}


@lru_cache(maxsize=1024)
def _canonical_id(license_id: str) -> str:
    """Normalize a license identifier to its SPDX spelling (cached helper).

    Returns the stripped input unchanged if it cannot be parsed.
    """
    license_id = license_id.strip()
    try:
        parsed = SPDX.parse(license_id)
    except Exception as e:
        # Unparseable identifiers are looked up verbatim
        logger.debug("Could not parse license '%s': %s", license_id, e)
        return license_id
    return str(parsed).strip() if parsed else license_id


class SpdxLicenseRegistry:
    """Registry of full SPDX license names.

    Attributes:
        names: Mapping of SPDX identifier to full name. Defaults to the
            bundled SPDX_NAMES table.
    """

    def __init__(self, names: Optional[dict[str, str]] = None) -> None:
        self.names = dict(SPDX_NAMES if names is None else names)
        self._names_lowercase = (
            _NAMES_LOWERCASE
            if names is None
            else {key.lower(): name for key, name in self.names.items()}
        )

    def full_name(self, license_id: str) -> Optional[str]:
        """Return the full name of a license.

        Args:
            license_id: License identifier in any casing.

        Returns:
            The full license name, or None if the license is unknown.
        """
        if not license_id or not license_id.strip():
            return None

        if license_id in self.names:
            return self.names[license_id]

        canonical = _canonical_id(license_id)
        return self.names.get(canonical) or self._names_lowercase.get(
            canonical.lower()
        )
