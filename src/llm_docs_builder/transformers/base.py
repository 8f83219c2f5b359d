#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/base.py
"""Abstract base class for Markdown text transformers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llm_docs_builder.options import BuilderOptions


class BaseTransformer(ABC):
    """Abstract base class for one stage of the Markdown pipeline.

    Each transformer reads the flags it cares about from a
    :class:`~llm_docs_builder.options.BuilderOptions` and returns the content
    unchanged when none of them is set.

    Examples
    --------
    >>> class UppercaseTransformer(BaseTransformer):
    ...     def transform(self, content, options=None):
    ...         return content.upper()
    >>>
    >>> UppercaseTransformer().transform("# title")
    '# TITLE'

    """

    @abstractmethod
    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        """Transform Markdown content.

        Parameters
        ----------
        content : str
            Markdown content
        options : BuilderOptions, optional
            Transformation flags; defaults apply when omitted

        Returns
        -------
        str
            Transformed content

        """

    @staticmethod
    def resolve_options(options: BuilderOptions | None) -> BuilderOptions:
        return options if options is not None else BuilderOptions()
