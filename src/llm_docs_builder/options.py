#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/options.py
"""Option objects controlling generation and transformation.

:class:`BuilderOptions` is an immutable dataclass shared by the generator,
the bulk transformer and the Markdown pipeline. :class:`CompressionPresets`
bundles the transformation flags into named profiles.

Examples
--------
Start from a preset and override a single flag:

    >>> options = BuilderOptions(**CompressionPresets.get("moderate", generate_toc=False))
    >>> options.simplify_links
    True

Derive a modified copy:

    >>> options.create_updated(base_url="https://example.com/docs")

"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from llm_docs_builder.constants import (
    DEFAULT_BULK_SUFFIX,
    DEFAULT_DOCS_PATH,
    DEFAULT_HEADING_SEPARATOR,
    DEFAULT_OUTPUT_PATH,
)
from llm_docs_builder.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Flags that make token counts differ between source and transformed content
TRANSFORMATION_FLAGS = (
    "remove_comments",
    "normalize_whitespace",
    "remove_badges",
    "remove_frontmatter",
    "remove_code_examples",
    "remove_images",
    "simplify_links",
    "remove_blockquotes",
    "remove_stopwords",
    "remove_duplicates",
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BuilderOptions(CloneFrozenMixin):
    """Settings for llms.txt generation and Markdown transformation.

    Cleanup flags that are safe for any document (comments, whitespace,
    badges, frontmatter) are on by default; every other transformation is
    opt-in.

    Parameters
    ----------
    docs : str, default "."
        File or directory to process
    output : str, default "llms.txt"
        Output path for the generated index or transformed document
    base_url : str, optional
        Base URL used to absolutize relative links and index entries
    suffix : str, default ".llm"
        Suffix inserted before ``.md`` by bulk transformation; empty
        overwrites the source files
    excludes : tuple of str
        fnmatch patterns of files to skip

    """

    docs: str = field(
        default=DEFAULT_DOCS_PATH,
        metadata={"help": "Documentation file or directory to process", "importance": "core"},
    )
    output: str = field(
        default=DEFAULT_OUTPUT_PATH,
        metadata={"help": "Output file path", "importance": "core"},
    )
    base_url: str | None = field(
        default=None,
        metadata={"help": "Base URL for expanding relative links", "importance": "core"},
    )
    title: str | None = field(
        default=None,
        metadata={"help": "Project title used in the llms.txt header", "importance": "core"},
    )
    description: str | None = field(
        default=None,
        metadata={"help": "Project description used in the llms.txt header", "importance": "core"},
    )
    body: str | None = field(
        default=None,
        metadata={"help": "Free-form text placed after the llms.txt description", "importance": "advanced"},
    )
    suffix: str = field(
        default=DEFAULT_BULK_SUFFIX,
        metadata={"help": "Suffix for bulk-transformed files; empty string overwrites in place", "importance": "core"},
    )
    excludes: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Glob patterns of files to exclude", "importance": "core"},
    )
    verbose: bool = field(
        default=False,
        metadata={"help": "Report progress and validation details", "importance": "advanced"},
    )
    bulk: bool = field(
        default=False,
        metadata={"help": "Transform every Markdown file in a directory", "importance": "advanced"},
    )
    include_hidden: bool = field(
        default=False,
        metadata={"help": "Include dotfiles when walking directories", "importance": "advanced"},
    )
    convert_urls: bool = field(
        default=False,
        metadata={"help": "Rewrite .html/.htm URLs to .md", "importance": "core"},
    )
    remove_comments: bool = field(
        default=True,
        metadata={"help": "Remove HTML comments", "importance": "core"},
    )
    normalize_whitespace: bool = field(
        default=True,
        metadata={"help": "Strip trailing spaces and collapse long runs of blank lines", "importance": "core"},
    )
    remove_badges: bool = field(
        default=True,
        metadata={"help": "Remove badge and shield images", "importance": "core"},
    )
    remove_frontmatter: bool = field(
        default=True,
        metadata={"help": "Remove YAML or TOML frontmatter", "importance": "core"},
    )
    remove_code_examples: bool = field(
        default=False,
        metadata={"help": "Remove fenced, indented and inline code", "importance": "advanced"},
    )
    remove_images: bool = field(
        default=False,
        metadata={"help": "Remove inline and reference images", "importance": "core"},
    )
    simplify_links: bool = field(
        default=False,
        metadata={"help": "Drop filler words such as 'click here to' from link text", "importance": "core"},
    )
    remove_blockquotes: bool = field(
        default=False,
        metadata={"help": "Remove blockquote markers", "importance": "advanced"},
    )
    generate_toc: bool = field(
        default=False,
        metadata={"help": "Insert a table of contents after the first H1", "importance": "core"},
    )
    custom_instruction: str | None = field(
        default=None,
        metadata={"help": "AI context note inserted after the first H1", "importance": "core"},
    )
    remove_stopwords: bool = field(
        default=False,
        metadata={"help": "Remove common English stopwords from prose", "importance": "advanced"},
    )
    remove_duplicates: bool = field(
        default=False,
        metadata={"help": "Remove repeated paragraphs", "importance": "advanced"},
    )
    normalize_headings: bool = field(
        default=False,
        metadata={"help": "Prefix subheadings with their ancestor titles", "importance": "advanced"},
    )
    heading_separator: str = field(
        default=DEFAULT_HEADING_SEPARATOR,
        metadata={"help": "Separator between heading titles when normalizing headings", "importance": "advanced"},
    )
    include_metadata: bool = field(
        default=False,
        metadata={"help": "Append metadata to llms.txt entries", "importance": "advanced"},
    )
    include_tokens: bool = field(
        default=False,
        metadata={"help": "Include estimated token counts in entry metadata", "importance": "advanced"},
    )
    include_timestamps: bool = field(
        default=False,
        metadata={"help": "Include file modification dates in entry metadata", "importance": "advanced"},
    )
    include_priority: bool = field(
        default=False,
        metadata={"help": "Include priority labels in entry metadata", "importance": "advanced"},
    )
    calculate_compression: bool = field(
        default=False,
        metadata={"help": "Include transformed/original token ratios in entry metadata", "importance": "advanced"},
    )
    content: str | None = field(
        default=None,
        metadata={"help": "Pre-loaded content to transform instead of reading the file", "exclude_from_cli": True},
    )
    source_url: str | None = field(
        default=None,
        metadata={"help": "URL the pre-loaded content was fetched from", "exclude_from_cli": True},
    )

    def __post_init__(self) -> None:
        """Validate option values and freeze collection fields.

        Raises
        ------
        ValidationError
            If ``excludes`` is not a sequence of strings or the separator is
            not a string

        """
        if isinstance(self.excludes, str):
            object.__setattr__(self, "excludes", (self.excludes,))
        elif self.excludes is None:
            object.__setattr__(self, "excludes", ())
        elif not isinstance(self.excludes, tuple):
            object.__setattr__(self, "excludes", tuple(self.excludes))

        if not all(isinstance(pattern, str) for pattern in self.excludes):
            raise ValidationError(
                "excludes must contain only glob pattern strings",
                parameter_name="excludes",
                parameter_value=self.excludes,
            )
        if not isinstance(self.heading_separator, str):
            raise ValidationError(
                f"heading_separator must be a string, got {type(self.heading_separator).__name__}",
                parameter_name="heading_separator",
                parameter_value=self.heading_separator,
            )

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(option.name for option in fields(cls))

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "BuilderOptions":
        """Build options from a mapping, ignoring keys that are not option fields."""
        known = cls.field_names()
        for key in values:
            if key not in known:
                logger.debug("Ignoring unknown option: %s", key)
        return cls(**{key: value for key, value in values.items() if key in known})

    @property
    def transformations_enabled(self) -> bool:
        """Whether any flag that changes document content is set."""
        return any(getattr(self, name) for name in TRANSFORMATION_FLAGS)


DEFAULT_DOCUMENTATION_INSTRUCTION = (
    "This documentation has been optimized for AI consumption with reduced redundancy "
    "while preserving all technical content and code examples."
)
TUTORIAL_INSTRUCTION = (
    "This is a tutorial document with step-by-step instructions. "
    "Code examples and detailed explanations are preserved for learning purposes."
)
API_REFERENCE_INSTRUCTION = (
    "This is an API reference document. Focus on method signatures, "
    "parameters, return values, and code examples."
)


class CompressionPresets:
    """Named bundles of transformation flags.

    Presets grow from ``conservative`` (safe cleanup only) through
    ``moderate`` to ``aggressive``; ``documentation``, ``tutorial`` and
    ``api_reference`` are tuned for specific kinds of pages.
    """

    @staticmethod
    def conservative() -> dict[str, Any]:
        return {
            "remove_frontmatter": True,
            "remove_comments": True,
            "remove_badges": True,
            "remove_images": True,
            "normalize_whitespace": True,
        }

    @classmethod
    def moderate(cls) -> dict[str, Any]:
        return {**cls.conservative(), "simplify_links": True, "remove_blockquotes": True, "generate_toc": True}

    @classmethod
    def aggressive(cls) -> dict[str, Any]:
        return {**cls.moderate(), "remove_code_examples": True, "remove_duplicates": True, "remove_stopwords": True}

    @classmethod
    def documentation(cls, custom_instruction: str | None = None) -> dict[str, Any]:
        return {
            **cls.moderate(),
            "remove_duplicates": True,
            "custom_instruction": custom_instruction or DEFAULT_DOCUMENTATION_INSTRUCTION,
        }

    @classmethod
    def tutorial(cls) -> dict[str, Any]:
        return {**cls.conservative(), "generate_toc": True, "custom_instruction": TUTORIAL_INSTRUCTION}

    @staticmethod
    def api_reference() -> dict[str, Any]:
        return {
            "remove_frontmatter": True,
            "remove_comments": True,
            "remove_badges": True,
            "remove_images": True,
            "remove_blockquotes": True,
            "remove_duplicates": True,
            "simplify_links": True,
            "generate_toc": True,
            "normalize_whitespace": True,
            "custom_instruction": API_REFERENCE_INSTRUCTION,
        }

    @classmethod
    def names(cls) -> list[str]:
        """Return the available preset names."""
        return list(cls._registry())

    @classmethod
    def get(cls, name: str, **overrides: Any) -> dict[str, Any]:
        """Return the flags of preset ``name`` merged with ``overrides``.

        Parameters
        ----------
        name : str
            One of :meth:`names`
        **overrides : Any
            Flags that replace the preset's values

        Returns
        -------
        dict
            Option values suitable for :class:`BuilderOptions`

        Raises
        ------
        ValidationError
            If ``name`` is not a known preset

        """
        factory = cls._registry().get(str(name))
        if factory is None:
            raise ValidationError(
                f"Unknown preset: {name}. Available: {', '.join(cls.names())}",
                parameter_name="preset",
                parameter_value=name,
            )
        return {**factory(), **overrides}

    @classmethod
    def _registry(cls) -> dict[str, Callable[[], dict[str, Any]]]:
        return {
            "conservative": cls.conservative,
            "moderate": cls.moderate,
            "aggressive": cls.aggressive,
            "documentation": cls.documentation,
            "tutorial": cls.tutorial,
            "api_reference": cls.api_reference,
        }
