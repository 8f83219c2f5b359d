#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/generator.py
"""Build an ``llms.txt`` index from a tree of Markdown documentation.

Each Markdown file becomes one link entry carrying its title and the first
paragraph as a description. Entries are ordered so that READMEs and
getting-started guides come before API references.

Examples
--------
    >>> options = BuilderOptions(output="llms.txt", base_url="https://example.com/docs")
    >>> print(Generator("docs", options).generate())
    # My Project
    <BLANKLINE>
    > A tool for things.
    <BLANKLINE>
    ## Documentation
    <BLANKLINE>
    - [My Project](https://example.com/docs/README.md): A tool for things.

"""

from __future__ import annotations

import fnmatch
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from llm_docs_builder._input_utils import read_text_file, write_text_file
from llm_docs_builder.constants import DEFAULT_PRIORITY, MAX_DESCRIPTION_LENGTH, PRIORITY_KEYWORDS
from llm_docs_builder.exceptions import LlmDocsBuilderError
from llm_docs_builder.markdown_transformer import MarkdownTransformer
from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.token_estimator import TokenEstimator, round_half_up
from llm_docs_builder.transformers.links import join_url

logger = logging.getLogger(__name__)

_TITLE_HEADING = re.compile(r"^#[ \t]+(.+)", re.MULTILINE)
_STEM_SEPARATORS = re.compile(r"[_-]")


@dataclass
class DocumentEntry:
    """One documentation file as listed in ``llms.txt``.

    Parameters
    ----------
    path : str
        POSIX path relative to the documentation root
    title : str
        First H1, or a title derived from the file name
    description : str
        First paragraph, at most 200 characters
    priority : int
        1 (README) through 7 (everything else)

    """

    path: str
    title: str
    description: str
    priority: int
    tokens: int | None = None
    compression: float | None = None
    updated: str | None = None


def extract_title(content: str, file_path: str | Path) -> str:
    """Return the first ``# `` heading, or a title-cased file stem."""
    match = _TITLE_HEADING.search(content)
    if match:
        return match.group(1).strip()

    name = Path(file_path).name
    stem = name[: -len(".md")] if name.endswith(".md") else name
    return " ".join(word.capitalize() for word in _STEM_SEPARATORS.sub(" ", stem).split())


def extract_description(content: str) -> str:
    """Return the first paragraph after any leading headings and blank lines."""
    lines = content.splitlines()
    index = 0
    while index < len(lines) and (lines[index].startswith("#") or not lines[index].strip()):
        index += 1

    paragraph: list[str] = []
    for line in lines[index:]:
        if not line.strip():
            break
        paragraph.append(line.strip())

    return " ".join(paragraph).strip()[:MAX_DESCRIPTION_LENGTH]


def calculate_priority(file_path: str | Path) -> int:
    """Rank a file by name: README first, then guides, tutorials and references."""
    name = Path(file_path).name.lower()
    if name.startswith("readme"):
        return 1
    for keyword, priority in PRIORITY_KEYWORDS:
        if keyword in name:
            return priority
    return DEFAULT_PRIORITY


def priority_label(priority: int) -> str | None:
    if 1 <= priority <= 2:
        return "priority:high"
    if 3 <= priority <= 5:
        return "priority:medium"
    if 6 <= priority <= 7:
        return "priority:low"
    return None


def _match_segments(parts: list[str], pattern_parts: list[str]) -> bool:
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_segments(parts[index:], rest) for index in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatchcase(parts[0], head) and _match_segments(parts[1:], rest)


def path_matches_pattern(path: str, pattern: str) -> bool:
    """Match a POSIX path against a glob one segment at a time.

    ``*`` and ``?`` never cross a ``/``; a ``**`` segment matches zero or
    more whole segments.
    """
    return _match_segments(path.split("/"), pattern.split("/"))


def matches_excludes(file_path: Path, relative_path: str, excludes: tuple[str, ...]) -> bool:
    """Return True when the absolute or relative path matches an exclude pattern."""
    candidates = (file_path.as_posix(), relative_path)
    return any(path_matches_pattern(candidate, pattern) for pattern in excludes for candidate in candidates)


def find_markdown_files(root: Path, excludes: tuple[str, ...] = (), include_hidden: bool = False) -> list[Path]:
    """Return the ``*.md`` files under ``root`` in sorted order.

    Dotfiles are skipped unless ``include_hidden`` is set. The extension check
    ignores case.
    """
    files = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() != ".md":
            continue
        if path.name.startswith(".") and not include_hidden:
            continue
        if matches_excludes(path.resolve(), path.relative_to(root).as_posix(), excludes):
            logger.debug("Excluding %s", path)
            continue
        files.append(path)
    return files


class Generator:
    """Generate ``llms.txt`` content for a documentation file or directory.

    Parameters
    ----------
    docs_path : str or Path
        Markdown file or directory to index
    options : BuilderOptions, optional
        Title, description, base URL and metadata flags; when ``output`` is
        set the result is also written there

    """

    def __init__(self, docs_path: str | Path, options: BuilderOptions | None = None):
        """Initialize the generator."""
        self.docs_path = Path(docs_path)
        self.options = options if options is not None else BuilderOptions()
        self._estimator = TokenEstimator()

    def generate(self) -> str:
        """Return the ``llms.txt`` content, writing it to ``options.output`` when set.

        Raises
        ------
        FileError
            If a documentation file cannot be read or the output cannot be
            written

        """
        docs = self.find_documentation_files()
        content = self.build_llms_txt(docs)

        if self.options.output:
            write_text_file(self.options.output, content)
        return content

    def find_documentation_files(self) -> list[DocumentEntry]:
        """Analyze every documentation file, ordered by priority."""
        if not self.docs_path.exists():
            logger.debug("Documentation path %s does not exist", self.docs_path)
            return []
        if self.docs_path.is_file():
            return [self.analyze_file(self.docs_path)]

        files = find_markdown_files(self.docs_path, self.options.excludes, self.options.include_hidden)
        entries = [self.analyze_file(path) for path in files]
        return sorted(entries, key=lambda entry: entry.priority)

    def analyze_file(self, file_path: Path) -> DocumentEntry:
        """Extract the title, description, priority and metadata of one file."""
        if self.docs_path.is_file():
            relative_path = file_path.name
        else:
            relative_path = file_path.relative_to(self.docs_path).as_posix()

        content = read_text_file(file_path)
        entry = DocumentEntry(
            path=relative_path,
            title=extract_title(content, file_path),
            description=extract_description(content),
            priority=calculate_priority(file_path),
        )

        if not self.options.include_metadata:
            return entry

        if self.options.include_tokens:
            counted = self._transformed(content, file_path) if self.options.transformations_enabled else content
            entry.tokens = self._estimator.estimate(counted)
        if self.options.include_timestamps:
            entry.updated = datetime.fromtimestamp(file_path.stat().st_mtime).strftime("%Y-%m-%d")
        if self.options.calculate_compression:
            original_tokens = self._estimator.estimate(content)
            if original_tokens:
                transformed_tokens = self._estimator.estimate(self._transformed(content, file_path))
                entry.compression = round_half_up(transformed_tokens / original_tokens, 2)
        return entry

    def build_llms_txt(self, docs: list[DocumentEntry]) -> str:
        """Render the ``llms.txt`` document for the analyzed files."""
        title = self.options.title or self._project_title(docs)
        description = self.options.description or self._project_description(docs)

        lines = [f"# {title}", ""]
        if description:
            lines.extend([f"> {description}", ""])
        if self.options.body:
            lines.extend([self.options.body.strip(), ""])

        if docs:
            lines.extend(["## Documentation", ""])
            lines.extend(self._entry_line(doc) for doc in docs)

        return "\n".join(lines).rstrip("\n") + "\n"

    def _entry_line(self, doc: DocumentEntry) -> str:
        url = join_url(self.options.base_url, doc.path) if self.options.base_url else doc.path
        line = f"- [{doc.title}]({url})"
        if doc.description:
            line += f": {doc.description}"

        if self.options.include_metadata:
            parts = []
            if doc.tokens is not None:
                parts.append(f"tokens:{doc.tokens}")
            if doc.compression is not None:
                parts.append(f"compression:{doc.compression}")
            if doc.updated:
                parts.append(f"updated:{doc.updated}")
            if self.options.include_priority:
                label = priority_label(doc.priority)
                if label:
                    parts.append(label)
            if parts:
                line += " " + " ".join(parts)
        return line

    def _transformed(self, content: str, file_path: Path) -> str:
        options = self.options.create_updated(content=content)
        try:
            return MarkdownTransformer(file_path, options).transform()
        except LlmDocsBuilderError as e:
            logger.warning("Could not transform %s for metadata, using raw content: %s", file_path, e)
            return content

    @staticmethod
    def _project_title(docs: list[DocumentEntry]) -> str:
        readme = next((doc for doc in docs if "readme" in doc.path.lower()), None)
        if readme is not None:
            return readme.title
        return Path.cwd().name

    @staticmethod
    def _project_description(docs: list[DocumentEntry]) -> str | None:
        readme = next((doc for doc in docs if "readme" in doc.path.lower()), None)
        if readme is not None and readme.description:
            return readme.description
        return None
