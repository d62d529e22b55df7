"""HTML emitter rendering attribution documents with Jinja2 templates."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from attribution_document.emitters.base import (
    DocumentEmitter,
    TemplateSources,
    collect_license_texts,
)
from attribution_document.models import AttributionEntry, ProjectMetadata

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html.j2"


class HtmlDocumentEmitter(DocumentEmitter):
    """Emitter producing a standalone HTML attribution document.

    Templates are looked up as ``<template_id>.html.j2``, first in the
    registered template sources and then in the bundled templates.

    Rendering is deterministic: the document only carries a generation
    timestamp when one is passed as ``generated_at``.
    """

    def __init__(
        self,
        filename: str = "attribution-document.html",
        generated_at: Optional[datetime] = None,
    ) -> None:
        self._filename = filename
        self._generated_at = generated_at

    @property
    def default_filename(self) -> str:
        return self._filename

    def _environment(self, sources: TemplateSources) -> Environment:
        loaders = [FileSystemLoader(str(path)) for path in sources.paths]
        loaders.append(PackageLoader("attribution_document", "templates"))
        return Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "html.j2"]),
            keep_trailing_newline=True,
        )

    def emit(
        self,
        artifacts: list[AttributionEntry],
        values: ProjectMetadata,
        template_id: str,
        sources: TemplateSources,
        working_dir: Path,
    ) -> Path:
        """Render the document with the given template.

        Raises:
            jinja2.TemplateNotFound: If no source provides the template.
        """
        template = self._environment(sources).get_template(template_id + TEMPLATE_SUFFIX)
        logger.debug("Rendering %d artifacts with template %s", len(artifacts), template.filename)

        content = template.render(
            artifacts=artifacts,
            licenses=collect_license_texts(artifacts),
            project=values,
            generated_at=self._generated_at,
        )

        document = working_dir / self.default_filename
        document.write_text(content, encoding="utf-8")
        return document
