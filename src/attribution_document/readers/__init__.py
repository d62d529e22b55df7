"""Readers for dependency analysis results.

This module provides readers that load the analysis result an
attribution document is generated from.
"""

from pathlib import Path

from attribution_document.readers.base import BaseReader
from attribution_document.readers.json_result import JsonResultReader

__all__ = [
    "BaseReader",
    "JsonResultReader",
    "get_reader",
]

# Registry of available readers in priority order
_READERS: list[type[BaseReader]] = [
    JsonResultReader,
]


def get_reader(path: Path) -> BaseReader:
    """Get the appropriate reader for a given file path.

    Args:
        path: Path to the analysis result file.

    Returns:
        Reader instance configured for the given file.

    Raises:
        ValueError: If no reader can handle the given file.
    """
    for reader_cls in _READERS:
        if reader_cls.can_handle(path):
            return reader_cls(path)

    raise ValueError(
        f"No reader available for '{path.name}'. Supported files: *.json"
    )
