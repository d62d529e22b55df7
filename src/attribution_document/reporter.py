"""Attribution document reporter.

Builds the attribution document model from an analysis result and hands
it to a document emitter:

1. Collect the license findings of all packages and projects, without
   path-excluded findings.
2. Build one AttributionEntry per package from its selected licenses and
   the copyrights found for them.
3. Build the document values of the single root project.
4. Render the document in a scratch directory and copy it to the output.
"""

import logging
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import BinaryIO, Optional

from attribution_document.copyrights import create_copyright_statement
from attribution_document.emitters.base import DocumentEmitter, TemplateSources
from attribution_document.licenses import collect_licenses, create_license_info
from attribution_document.models import (
    AnalysisResult,
    AttributionEntry,
    FindingsByLicense,
    Identifier,
    ProjectMetadata,
)
from attribution_document.providers.base import LicenseTextProvider
from attribution_document.registry import SpdxLicenseRegistry

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_ID = "basic-attribution-template"
TEMPLATE_ID = "template.id"
TEMPLATE_PATH = "template.path"


class ProjectCountError(ValueError):
    """Raised when an analysis result does not have exactly one project."""


class AttributionDocumentReporter:
    """Reporter generating an attribution document for a single project.

    Attributes:
        emitter: Renders the document model to a file.
        text_provider: Looks up license texts.
        registry: Looks up full license names.
    """

    name = "AttributionDocument"

    def __init__(
        self,
        emitter: DocumentEmitter,
        text_provider: LicenseTextProvider,
        registry: Optional[SpdxLicenseRegistry] = None,
    ) -> None:
        self.emitter = emitter
        self.text_provider = text_provider
        self.registry = registry or SpdxLicenseRegistry()

    @property
    def default_filename(self) -> str:
        return self.emitter.default_filename

    def build_artifacts(
        self,
        result: AnalysisResult,
        license_findings: Mapping[Identifier, FindingsByLicense],
    ) -> list[AttributionEntry]:
        """Build one attribution entry per package of the result."""
        artifacts = []
        for package in result.packages:
            licenses = collect_licenses(package.id, result)
            artifacts.append(
                AttributionEntry(
                    purl=package.package_url,
                    binary_filename=package.binary_filename,
                    licenses=tuple(
                        create_license_info(license_id, self.text_provider, self.registry)
                        for license_id in licenses
                    ),
                    copyright=create_copyright_statement(
                        package.id, licenses, license_findings
                    ),
                )
            )
        return artifacts

    def build_project_metadata(
        self,
        result: AnalysisResult,
        license_findings: Mapping[Identifier, FindingsByLicense],
    ) -> ProjectMetadata:
        """Build the document values of the root project.

        Raises:
            ProjectCountError: If the result does not contain exactly one project.
        """
        # TODO: Support results with multiple projects, e.g. one section per project.
        if len(result.projects) != 1:
            raise ProjectCountError(
                f"The {self.name} reporter requires exactly one project, "
                f"but the result contains {len(result.projects)}."
            )

        project = result.projects[0]
        return ProjectMetadata(
            name=project.id.name,
            version=project.id.version,
            copyright=create_copyright_statement(
                project.id, collect_licenses(project.id, result), license_findings
            ),
        )

    def generate_report(
        self,
        output: BinaryIO,
        result: AnalysisResult,
        options: Optional[Mapping[str, str]] = None,
    ) -> Optional[int]:
        """Generate the attribution document and write it to ``output``.

        Custom templates are used only if both the ``template.id`` and the
        ``template.path`` options are given.

        Args:
            output: Binary stream the document is copied to.
            result: The analysis result to report on.
            options: Generation options.

        Returns:
            Number of bytes written, or None if the emitter produced no file.

        Raises:
            ProjectCountError: If the result does not contain exactly one project.
        """
        options = options or {}

        license_findings = result.collect_license_findings(omit_excluded=True)
        artifacts = self.build_artifacts(result, license_findings)
        values = self.build_project_metadata(result, license_findings)

        sources = TemplateSources()
        template_id = DEFAULT_TEMPLATE_ID
        if TEMPLATE_ID in options and TEMPLATE_PATH in options:
            template_id = options[TEMPLATE_ID]
            sources.register(Path(options[TEMPLATE_PATH]))
            logger.debug("Using template %s from %s", template_id, options[TEMPLATE_PATH])

        working_dir = Path(tempfile.mkdtemp(prefix="attribution-document-"))
        try:
            document = self.emitter.emit(artifacts, values, template_id, sources, working_dir)

            if not document.is_file():
                logger.warning("The %s emitter did not produce a document.", self.name)
                return None

            with document.open("rb") as f:
                written = _copy_stream(f, output)
            logger.info("Wrote %d bytes for %d packages", written, len(artifacts))
            return written
        finally:
            _remove_dir(working_dir)


def _copy_stream(source: BinaryIO, target: BinaryIO, chunk_size: int = 64 * 1024) -> int:
    written = 0
    while chunk := source.read(chunk_size):
        target.write(chunk)
        written += len(chunk)
    return written


def _remove_dir(path: Path) -> None:
    """Remove a directory tree, logging instead of raising on failure."""
    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning("Could not delete working directory %s: %s", path, e)
