#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/bulk_transformer.py
"""Transform every Markdown file in a documentation tree."""

from __future__ import annotations

import logging
from pathlib import Path

from llm_docs_builder._input_utils import write_text_file
from llm_docs_builder.exceptions import GenerationError
from llm_docs_builder.generator import find_markdown_files
from llm_docs_builder.markdown_transformer import MarkdownTransformer
from llm_docs_builder.options import BuilderOptions

logger = logging.getLogger(__name__)


class BulkTransformer:
    """Write an AI-optimized copy of each Markdown file beside its source.

    ``guide.md`` becomes ``guide.llm.md`` with the default suffix. An empty
    suffix overwrites each file in place.

    Parameters
    ----------
    docs_path : str or Path
        Directory to walk
    options : BuilderOptions, optional
        Transformation flags, ``suffix`` and ``excludes``

    """

    def __init__(self, docs_path: str | Path, options: BuilderOptions | None = None):
        """Initialize the bulk transformer."""
        self.docs_path = Path(docs_path)
        self.options = options if options is not None else BuilderOptions()

    def transform_all(self) -> list[str]:
        """Transform all matching files and return the written paths.

        Raises
        ------
        GenerationError
            If ``docs_path`` is not a directory

        """
        if not self.docs_path.is_dir():
            raise GenerationError(f"Directory not found: {self.docs_path}")

        written: list[str] = []
        for file_path in self.find_markdown_files():
            logger.debug("Transforming %s", file_path)
            content = MarkdownTransformer(file_path, self.options.create_updated(content=None)).transform()
            output_path = self.output_path_for(file_path)
            write_text_file(output_path, content)
            written.append(str(output_path))
        return written

    def find_markdown_files(self) -> list[Path]:
        """Return source files, skipping outputs of a previous run."""
        files = find_markdown_files(self.docs_path, self.options.excludes, self.options.include_hidden)
        marker = f"{self.options.suffix}.md"
        if not self.options.suffix:
            return files

        sources = []
        for path in files:
            if path.name.endswith(marker):
                logger.debug("Skipping previously transformed file %s", path)
                continue
            sources.append(path)
        return sources

    def output_path_for(self, input_path: Path) -> Path:
        """Return ``{stem}{suffix}.md`` in the source file's directory."""
        name = input_path.name
        stem = name[: -len(".md")] if name.endswith(".md") else input_path.stem
        return input_path.parent / f"{stem}{self.options.suffix}.md"
