"""Test utilities for the llm-docs-builder test suite.

This module provides helpers for creating temporary documentation trees and
checking rendered Markdown tables.
"""

import tempfile
from pathlib import Path


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` under ``root`` and return ``root``."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def count_unescaped_pipes(line: str) -> int:
    """Count ``|`` characters that are not preceded by a backslash escape."""
    count = 0
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char == "|":
            count += 1
        index += 1
    return count


def assert_pipe_table_aligned(markdown: str, column_count: int) -> None:
    """Assert that every table line holds exactly ``column_count + 1`` pipes."""
    table_lines = [line for line in markdown.split("\n") if line.startswith("|")]
    assert table_lines, "no table lines found"
    for line in table_lines:
        assert count_unescaped_pipes(line) == column_count + 1, line


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)
