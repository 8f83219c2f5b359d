#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/comparator.py
"""Measure how much smaller the AI-facing version of a page is.

A page is fetched once with a browser ``User-Agent`` and once with an AI
crawler ``User-Agent`` (or compared against a local Markdown file), and the
byte and token sizes of both versions are reported.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable

from llm_docs_builder._input_utils import read_text_file
from llm_docs_builder.constants import AI_USER_AGENT, HUMAN_USER_AGENT
from llm_docs_builder.exceptions import FileNotFoundError as DocsFileNotFoundError
from llm_docs_builder.token_estimator import TokenEstimator, round_half_up
from llm_docs_builder.url_fetcher import UrlFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    """Sizes of the human and AI versions of one page.

    Parameters
    ----------
    human_size, ai_size : int
        UTF-8 byte counts
    reduction_bytes : int
        ``human_size - ai_size``; negative when the AI version is larger
    reduction_percent : int
        Rounded percentage of ``human_size``
    factor : float
        ``human_size / ai_size`` rounded to one decimal, ``inf`` when the AI
        version is empty
    human_source, ai_source : str
        Where each version came from

    """

    human_size: int
    ai_size: int
    reduction_bytes: int
    reduction_percent: int
    factor: float
    human_tokens: int
    ai_tokens: int
    token_reduction: int
    token_reduction_percent: int
    human_source: str
    ai_source: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _percent_of(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def calculate_results(
    human_content: str,
    ai_content: str,
    human_source: str,
    ai_source: str,
    estimator: TokenEstimator | None = None,
) -> ComparisonResult:
    """Compare two versions of a page by size and estimated tokens."""
    estimator = estimator or TokenEstimator()
    human_size = len(human_content.encode("utf-8"))
    ai_size = len(ai_content.encode("utf-8"))
    reduction_bytes = human_size - ai_size

    factor = round_half_up(human_size / ai_size, 1) if ai_size > 0 else math.inf

    human_tokens = estimator.estimate(human_content)
    ai_tokens = estimator.estimate(ai_content)
    token_reduction = human_tokens - ai_tokens

    return ComparisonResult(
        human_size=human_size,
        ai_size=ai_size,
        reduction_bytes=reduction_bytes,
        reduction_percent=_percent_of(reduction_bytes, human_size),
        factor=factor,
        human_tokens=human_tokens,
        ai_tokens=ai_tokens,
        token_reduction=token_reduction,
        token_reduction_percent=_percent_of(token_reduction, human_tokens),
        human_source=human_source,
        ai_source=ai_source,
    )


class Comparator:
    """Compare the human and AI versions of a documentation page.

    Parameters
    ----------
    url : str
        Page to fetch
    local_file : str or Path, optional
        Markdown file to use as the AI version instead of a second fetch
    human_user_agent : str
        ``User-Agent`` for the human version
    ai_user_agent : str
        ``User-Agent`` for the AI version
    fetcher_factory : callable, default UrlFetcher
        Called as ``fetcher_factory(user_agent=...)`` to build a fetcher

    Examples
    --------
    >>> result = Comparator("https://example.com/docs/").compare()
    >>> result.reduction_percent
    83

    """

    def __init__(
        self,
        url: str,
        local_file: str | Path | None = None,
        human_user_agent: str = HUMAN_USER_AGENT,
        ai_user_agent: str = AI_USER_AGENT,
        fetcher_factory: Callable[..., UrlFetcher] = UrlFetcher,
    ):
        """Initialize the comparator."""
        self.url = url
        self.local_file = Path(local_file) if local_file is not None else None
        self.human_user_agent = human_user_agent
        self.ai_user_agent = ai_user_agent
        self.fetcher_factory = fetcher_factory

    def compare(self) -> ComparisonResult:
        """Fetch both versions and compute the comparison.

        Raises
        ------
        FileNotFoundError
            If ``local_file`` is given but does not exist
        NetworkError
            If a fetch fails

        """
        if self.local_file is not None:
            return self._compare_with_local_file(self.local_file)
        return self._compare_remote_versions()

    def _compare_remote_versions(self) -> ComparisonResult:
        logger.info("Fetching human version from %s", self.url)
        human_content = self._fetch(self.human_user_agent)
        logger.info("Fetching AI version from %s", self.url)
        ai_content = self._fetch(self.ai_user_agent)
        return calculate_results(
            human_content,
            ai_content,
            f"{self.url} (User-Agent: human)",
            f"{self.url} (User-Agent: AI)",
        )

    def _compare_with_local_file(self, local_file: Path) -> ComparisonResult:
        if not local_file.is_file():
            raise DocsFileNotFoundError(str(local_file), message=f"Local file not found: {local_file}")

        logger.info("Fetching human version from %s", self.url)
        human_content = self._fetch(self.human_user_agent)
        logger.info("Reading local file %s", local_file)
        ai_content = read_text_file(local_file)
        return calculate_results(human_content, ai_content, self.url, str(local_file))

    def _fetch(self, user_agent: str) -> str:
        return self.fetcher_factory(user_agent=user_agent).fetch(self.url)
