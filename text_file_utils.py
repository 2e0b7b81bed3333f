"""
File Utilities for the Text Analyzer
====================================

Reads whole text files into memory. Every failure is surfaced as a
FileReadError so the caller can report it before any analysis runs.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from config import TextAnalyzerError

logger = logging.getLogger(__name__)


class FileReadError(TextAnalyzerError):
    """Raised when the input file cannot be read or decoded."""

    def __init__(self, file_path: Union[str, os.PathLike], reason: str):
        super().__init__(f"Unable to read {file_path}: {reason}")
        self.file_path = str(file_path)
        self.reason = reason


def read_file_content(
    file_path: Union[str, os.PathLike],
    *,
    encoding: str = "utf-8",
    max_bytes: int = 0,
) -> str:
    """
    Read the entire content of a text file.

    Args:
        file_path: Path to the text file
        encoding: Encoding used to decode the file
        max_bytes: Refuse files larger than this many bytes (0 disables the limit)

    Returns:
        The decoded file content

    Raises:
        FileReadError: The file is missing, unreadable, too large or not decodable
    """
    path = Path(file_path)

    try:
        size = path.stat().st_size
    except OSError as exc:
        logger.error(f"Error reading file {path}: {exc}")
        raise FileReadError(path, exc.strerror or str(exc)) from exc

    if max_bytes and size > max_bytes:
        logger.error(f"Refusing to read {path}: {size} bytes exceeds the {max_bytes} byte limit")
        raise FileReadError(path, f"file size {size} bytes exceeds the {max_bytes} byte limit")

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        logger.error(f"Error reading file {path}: {exc}")
        raise FileReadError(path, str(exc)) from exc

    logger.debug(f"Read {len(content)} characters ({size} bytes) from {path}")
    return content
