"""Reader for analysis results stored as JSON.

The document has three top-level lists::

    {
      "projects": [{"id": "Gradle::app:1.0", "declared_licenses": ["MIT"]}],
      "packages": [{"id": "Maven:org.example:lib:2.1",
                    "binary_artifact": {"url": "https://repo/lib-2.1.jar"},
                    "declared_licenses": ["Apache-2.0"],
                    "detected_licenses": [],
                    "concluded_licenses": []}],
      "license_findings": [{"id": "Maven:org.example:lib:2.1",
                            "license": "Apache-2.0",
                            "copyrights": ["Copyright 2020 Example"],
                            "path": "LICENSE",
                            "path_excludes": []}]
    }
"""

import json
from pathlib import Path
from typing import Any

from attribution_document.models import (
    AnalysisResult,
    Identifier,
    LicenseFinding,
    PackageRecord,
    PathExclude,
    ProjectRecord,
)
from attribution_document.readers.base import BaseReader


class JsonResultReader(BaseReader):
    """Reader for JSON analysis result files."""

    def read(self) -> AnalysisResult:
        """Read and parse the JSON analysis result.

        Returns:
            The parsed AnalysisResult.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If the JSON is invalid or misses required fields.
        """
        if self.source_path is None:
            raise ValueError("source_path must be set before calling read()")

        if not self.source_path.exists():
            raise FileNotFoundError(f"Analysis result not found: {self.source_path}")

        try:
            with open(self.source_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.source_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.source_path}")

        try:
            return self.parse(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid analysis result in {self.source_path}: {e}") from e

    @classmethod
    def parse(cls, data: dict[str, Any]) -> AnalysisResult:
        """Build an AnalysisResult from decoded JSON data.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If an entry is not an object or an identifier is malformed.
        """
        projects = [
            ProjectRecord(
                id=Identifier.from_coordinates(entry["id"]),
                **_license_lists(entry),
            )
            for entry in _objects(data.get("projects", []), "project")
        ]

        packages = []
        for entry in _objects(data.get("packages", []), "package"):
            binary_artifact = _object(entry.get("binary_artifact") or {}, "binary_artifact")
            packages.append(
                PackageRecord(
                    id=Identifier.from_coordinates(entry["id"]),
                    purl=entry.get("purl"),
                    binary_artifact_url=binary_artifact.get("url", ""),
                    **_license_lists(entry),
                )
            )

        license_findings: dict[Identifier, list[tuple[LicenseFinding, list[PathExclude]]]] = {}
        for entry in _objects(data.get("license_findings", []), "license finding"):
            id = Identifier.from_coordinates(entry["id"])
            finding = LicenseFinding(
                license=entry["license"],
                copyrights=tuple(entry.get("copyrights", [])),
                path=entry.get("path", ""),
            )
            excludes = [
                PathExclude(
                    pattern=exclude["pattern"],
                    reason=exclude.get("reason", ""),
                    comment=exclude.get("comment", ""),
                )
                for exclude in _objects(entry.get("path_excludes", []), "path exclude")
            ]
            license_findings.setdefault(id, []).append((finding, excludes))

        return AnalysisResult(
            projects=projects,
            packages=packages,
            license_findings=license_findings,
        )

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this reader can handle the given file.

        Returns:
            True for files with a ".json" suffix.
        """
        return path.suffix.lower() == ".json"

    @property
    def source_name(self) -> str:
        return "JSON analysis result"


def _license_lists(entry: dict[str, Any]) -> dict[str, list[str]]:
    return {
        key: list(entry.get(key) or [])
        for key in ("declared_licenses", "detected_licenses", "concluded_licenses")
    }


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected an object for {what}, got {type(value).__name__}")
    return value


def _objects(values: Any, what: str) -> list[dict[str, Any]]:
    if not isinstance(values, list):
        raise ValueError(f"Expected a list of {what} entries, got {type(values).__name__}")
    return [_object(value, what) for value in values]
