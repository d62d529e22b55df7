"""Attribution Document - license attribution documents for dependency analyses.

This package selects the licenses and copyrights of every analyzed package
and assembles them into a single attribution document.
"""

__version__ = "0.1.0"

from attribution_document.models import (
    AnalysisResult,
    AttributionEntry,
    Identifier,
    LicenseFinding,
    LicenseInfo,
    PackageRecord,
    PathExclude,
    ProjectMetadata,
    ProjectRecord,
)
from attribution_document.reporter import AttributionDocumentReporter, ProjectCountError

__all__ = [
    "__version__",
    "AnalysisResult",
    "AttributionDocumentReporter",
    "AttributionEntry",
    "Identifier",
    "LicenseFinding",
    "LicenseInfo",
    "PackageRecord",
    "PathExclude",
    "ProjectCountError",
    "ProjectMetadata",
    "ProjectRecord",
]
