"""Pytest configuration and shared fixtures for the llm-docs-builder test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir, write_files


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def docs_tree(temp_dir: Path) -> Path:
    """Provide a small documentation directory.

    Returns
    -------
    Path
        Directory holding a README, a guide, an API reference and a nested
        page.

    """
    docs = temp_dir / "docs"
    write_files(
        docs,
        {
            "README.md": "# My Project\n\nA tool for things.\n\nMore text here.\n",
            "getting-started.md": "# Getting Started\n\nInstall the tool first.\n",
            "api.md": "# API Reference\n\nAll public functions.\n",
            "guides/advanced_usage.md": "Some advanced notes without a heading.\n",
        },
    )
    return docs


@pytest.fixture
def sample_markdown() -> str:
    """Provide sample Markdown content for transformation tests.

    Returns
    -------
    str
        Document with frontmatter, badges, comments, code and links.

    """
    return """---
title: Sample
---

# Sample Document

[![Build](https://img.shields.io/badge/build-passing-green.svg)](https://ci.example.com)

<!-- internal note -->

This is a **sample document** with `inline code`.

## Installation

Click here to [read the installation guide](install.md).

```bash
pip install sample
```

## Usage

![Diagram](images/diagram.png)

> Note: this is a quote.
"""
