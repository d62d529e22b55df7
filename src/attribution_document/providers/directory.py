"""License text provider reading texts from local directories."""

import logging
from pathlib import Path
from typing import Optional

from attribution_document.providers.base import LicenseTextProvider

logger = logging.getLogger(__name__)


class DirectoryLicenseTextProvider(LicenseTextProvider):
    """Provider that reads license texts from files named after the license.

    For each directory, in the order given, the files ``<license_id>`` and
    ``<license_id>.txt`` are tried. The first existing file wins. This also
    covers custom ``LicenseRef-*`` texts kept next to the SPDX ones.

    Attributes:
        directories: Directories to search.
    """

    def __init__(self, directories: list[Path]) -> None:
        self.directories = [Path(d) for d in directories]

    @property
    def name(self) -> str:
        return "directory"

    @property
    def priority(self) -> int:
        """Local texts take precedence over downloaded ones.

        Returns:
            10
        """
        return 10

    def _find_file(self, license_id: str) -> Optional[Path]:
        # Identifiers are used as file names, reject anything path-like.
        if not license_id or "/" in license_id or "\\" in license_id:
            return None
        if license_id in (".", ".."):
            return None

        for directory in self.directories:
            for candidate in (directory / license_id, directory / f"{license_id}.txt"):
                if candidate.is_file():
                    return candidate
        return None

    def get_license_text(self, license_id: str) -> Optional[str]:
        path = self._find_file(license_id)
        if path is None:
            return None

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read license text %s: %s", path, e)
            return None
