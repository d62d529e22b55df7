"""Core data models for attribution_document.

This module defines the data structures consumed from the upstream
dependency analysis (identifiers, packages, projects, license findings)
and the document model handed to the emitter (license infos, attribution
entries, project metadata).
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class Identifier:
    """Unique key of a package or project.

    Frozen for hashability to enable use as dictionary keys.

    Attributes:
        type: Package manager type (e.g., "Maven", "NPM", "PyPI").
        namespace: Namespace or group (may be empty).
        name: Package or project name.
        version: Version string.
    """

    type: str
    namespace: str
    name: str
    version: str

    @classmethod
    def from_coordinates(cls, coordinates: str) -> "Identifier":
        """Parse an identifier from its "type:namespace:name:version" form.

        Args:
            coordinates: Colon separated coordinates string.

        Returns:
            The parsed Identifier.

        Raises:
            ValueError: If the string does not have exactly four components.
        """
        # The version is last and may itself contain colons (e.g. Debian epochs).
        parts = coordinates.split(":", 3)
        if len(parts) != 4:
            raise ValueError(
                f"Invalid identifier '{coordinates}', expected 'type:namespace:name:version'"
            )
        return cls(*parts)

    def to_coordinates(self) -> str:
        return f"{self.type}:{self.namespace}:{self.name}:{self.version}"

    @property
    def purl(self) -> str:
        """Return the package URL for this identifier.

        Returns:
            A string like "pkg:maven/org.example/lib@1.0".
        """
        path = f"{self.namespace}/{self.name}" if self.namespace else self.name
        return f"pkg:{self.type.lower()}/{path}@{self.version}"

    def __str__(self) -> str:
        return self.to_coordinates()


@dataclass(frozen=True)
class PathExclude:
    """A path pattern excluded from the analysis.

    Attributes:
        pattern: Glob pattern of excluded paths (e.g., "test/**").
        reason: Why the path is excluded (e.g., "TEST_OF").
        comment: Optional free-text comment.
    """

    pattern: str
    reason: str = ""
    comment: str = ""


@dataclass(frozen=True)
class LicenseFinding:
    """A license found in a source tree with the copyrights found alongside it.

    Attributes:
        license: License identifier (e.g., "MIT").
        copyrights: Copyright statements in discovery order.
        path: Path of the file the license was found in.
    """

    license: str
    copyrights: tuple[str, ...] = ()
    path: str = ""


@dataclass
class ProjectRecord:
    """A root project of the analysis together with its license sources."""

    id: Identifier
    declared_licenses: list[str] = field(default_factory=list)
    detected_licenses: list[str] = field(default_factory=list)
    concluded_licenses: list[str] = field(default_factory=list)


@dataclass
class PackageRecord:
    """A dependency package of the analysis.

    Attributes:
        id: Package identifier.
        purl: Explicit package URL, derived from the identifier if None.
        binary_artifact_url: URL of the distributed binary, empty if unknown.
        declared_licenses: Licenses declared in the package metadata.
        detected_licenses: Licenses detected by scanning the sources.
        concluded_licenses: Manually curated licenses, overriding the others.
    """

    id: Identifier
    purl: Optional[str] = None
    binary_artifact_url: str = ""
    declared_licenses: list[str] = field(default_factory=list)
    detected_licenses: list[str] = field(default_factory=list)
    concluded_licenses: list[str] = field(default_factory=list)

    @property
    def package_url(self) -> str:
        return self.purl or self.id.purl

    @property
    def binary_filename(self) -> Optional[str]:
        return binary_filename_from_url(self.binary_artifact_url)


# License findings of a single identifier, each with the path excludes
# matching the finding's path (empty list if the finding is not excluded).
FindingsByLicense = dict[LicenseFinding, list[PathExclude]]


@dataclass
class AnalysisResult:
    """The dependency analysis result an attribution document is built from.

    Attributes:
        projects: Root projects that were analyzed.
        packages: All dependency packages.
        license_findings: License findings per identifier, each paired with
            the path excludes that apply to it.
    """

    projects: list[ProjectRecord] = field(default_factory=list)
    packages: list[PackageRecord] = field(default_factory=list)
    license_findings: dict[Identifier, list[tuple[LicenseFinding, list[PathExclude]]]] = (
        field(default_factory=dict)
    )

    _index: Optional[dict[Identifier, Any]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _index_key: Optional[tuple] = field(default=None, init=False, repr=False, compare=False)

    def _record(self, record_id: Identifier):
        # Rebuilt when the package or project lists are replaced or resized.
        key = (id(self.packages), len(self.packages), id(self.projects), len(self.projects))
        if self._index is None or self._index_key != key:
            index: dict[Identifier, Any] = {}
            for record in (*self.packages, *self.projects):
                index.setdefault(record.id, record)
            self._index = index
            self._index_key = key
        return self._index.get(record_id)

    def get_concluded_licenses(self, id: Identifier) -> list[str]:
        record = self._record(id)
        return list(record.concluded_licenses) if record else []

    def get_declared_licenses(self, id: Identifier) -> list[str]:
        record = self._record(id)
        return list(record.declared_licenses) if record else []

    def get_detected_licenses(self, id: Identifier) -> list[str]:
        record = self._record(id)
        return list(record.detected_licenses) if record else []

    def collect_license_findings(
        self, omit_excluded: bool = True
    ) -> dict[Identifier, FindingsByLicense]:
        """Collect the license findings of all identifiers.

        Args:
            omit_excluded: Drop findings that match at least one path exclude.

        Returns:
            Mapping of identifier to its findings, in insertion order.
        """
        collected: dict[Identifier, FindingsByLicense] = {}
        for id, findings in self.license_findings.items():
            by_license: FindingsByLicense = {}
            for finding, excludes in findings:
                if omit_excluded and excludes:
                    continue
                by_license.setdefault(finding, []).extend(excludes)
            collected[id] = by_license
        return collected


@dataclass(frozen=True)
class LicenseInfo:
    """A license as rendered in the attribution document.

    Attributes:
        key: Alphanumeric anchor used to reference the license text.
        text: License text with tabs expanded to spaces.
        license_id: The license identifier.
        name: Full license name, or the identifier if unknown.
    """

    key: str
    text: str
    license_id: str
    name: str


@dataclass(frozen=True)
class AttributionEntry:
    """One package of the attribution document.

    Attributes:
        purl: Package URL of the package.
        binary_filename: File name of the distributed binary, if known.
        licenses: Licenses of the package, sorted by identifier.
        copyright: Newline separated copyright statements.
    """

    purl: str
    binary_filename: Optional[str]
    licenses: tuple[LicenseInfo, ...]
    copyright: str


@dataclass(frozen=True)
class ProjectMetadata:
    """Document-level values describing the root project."""

    name: str
    version: str
    copyright: str


def binary_filename_from_url(url: Optional[str]) -> Optional[str]:
    """Extract the file name component of a binary artifact URL.

    Args:
        url: The artifact URL, possibly empty.

    Returns:
        The last path component, or None if the URL is empty or has none.
    """
    if not url:
        return None
    name = PurePosixPath(urlparse(url).path).name
    return name or None
