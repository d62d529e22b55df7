"""Base interface for document emitters.

Emitters turn the attribution document model into a file, using a
template selected by its identifier.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from attribution_document.models import AttributionEntry, LicenseInfo, ProjectMetadata


class TemplateSources:
    """Ordered registry of additional template directories.

    Registered directories are searched before the bundled templates, in
    registration order. A registry belongs to a single generation call.
    """

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths: list[Path] = []
        for path in paths:
            self.register(path)

    def register(self, path: Path) -> None:
        """Add a template directory.

        Args:
            path: Directory containing ``<template_id>.html.j2`` files.
        """
        path = Path(path)
        if path not in self._paths:
            self._paths.append(path)

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


def collect_license_texts(artifacts: Iterable[AttributionEntry]) -> list[LicenseInfo]:
    """Return the distinct licenses of all artifacts, sorted by identifier.

    Each license text appears once in a document; the entries reference it
    through its anchor key.
    """
    by_key: dict[str, LicenseInfo] = {}
    for artifact in artifacts:
        for info in artifact.licenses:
            by_key.setdefault(info.key, info)
    return sorted(by_key.values(), key=lambda info: info.license_id)


class DocumentEmitter(ABC):
    """Abstract base class for document emitters."""

    @abstractmethod
    def emit(
        self,
        artifacts: list[AttributionEntry],
        values: ProjectMetadata,
        template_id: str,
        sources: TemplateSources,
        working_dir: Path,
    ) -> Path:
        """Render the document into the working directory.

        Args:
            artifacts: One entry per package.
            values: Document-level project values.
            template_id: Identifier of the template to render.
            sources: Additional template directories.
            working_dir: Scratch directory owned by the caller.

        Returns:
            Path of the generated document. The file may not exist if the
            emitter had nothing to write.
        """
        ...

    @property
    @abstractmethod
    def default_filename(self) -> str:
        """Return the file name of generated documents.

        Returns:
            File name like "attribution-document.html".
        """
        ...
