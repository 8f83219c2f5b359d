#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/_input_utils.py
"""File reading and writing helpers with library exceptions.

Functions
---------
- read_text_file: Read a UTF-8 text file, raising FileNotFoundError/FileError
- write_text_file: Write a UTF-8 text file, raising FileError
"""

from __future__ import annotations

import logging
from pathlib import Path

from llm_docs_builder.exceptions import FileError, FileNotFoundError

logger = logging.getLogger(__name__)


def read_text_file(path: str | Path) -> str:
    """Read ``path`` as UTF-8 text.

    Parameters
    ----------
    path : str or Path
        File to read

    Returns
    -------
    str
        File contents

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist or is not a regular file
    FileError
        If the file cannot be read

    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(str(path))

    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e


def write_text_file(path: str | Path, content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8, creating parent directories.

    Raises
    ------
    FileError
        If the file cannot be written

    """
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not write {path}: {e}", file_path=str(path), original_error=e) from e

    logger.info("Wrote %s", file_path)
    return file_path
