"""Document emitters for rendering the attribution document model.

This module provides the emitter interface, the template source registry
and the bundled HTML emitter.
"""

from attribution_document.emitters.base import (
    DocumentEmitter,
    TemplateSources,
    collect_license_texts,
)
from attribution_document.emitters.html import HtmlDocumentEmitter

__all__ = [
    "DocumentEmitter",
    "HtmlDocumentEmitter",
    "TemplateSources",
    "collect_license_texts",
]
