"""Base interface for analysis result readers.

Readers load the dependency analysis result that an attribution document
is generated from.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from attribution_document.models import AnalysisResult


class BaseReader(ABC):
    """Abstract base class for analysis result readers.

    Attributes:
        source_path: Optional path to the file being read.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        """Initialize the reader.

        Args:
            source_path: Optional path to the analysis result file.
        """
        self.source_path = source_path

    @abstractmethod
    def read(self) -> AnalysisResult:
        """Read the analysis result.

        Returns:
            The parsed AnalysisResult.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If the source format is invalid.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this reader can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this reader can process the file, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this reader's source type."""
        ...
