#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/url_fetcher.py
"""Fetch remote documentation pages over HTTP(S) with httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from llm_docs_builder.constants import (
    ALLOWED_URL_SCHEMES,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_REDIRECTS,
)
from llm_docs_builder.exceptions import NetworkError

logger = logging.getLogger(__name__)


def validate_url(url: str) -> None:
    """Ensure ``url`` is an absolute http or https URL with a host.

    Raises
    ------
    NetworkError
        If the scheme is not http/https or the host is missing

    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise NetworkError(f"Invalid URL format: {e}", url=url, original_error=e) from e

    scheme = (parsed.scheme or "").lower()
    if scheme not in ALLOWED_URL_SCHEMES:
        raise NetworkError(
            f"Unsupported URL scheme: {parsed.scheme or 'none'} (only http/https allowed)",
            url=url,
        )
    if not parsed.hostname:
        raise NetworkError(f"Invalid URL: missing host in {url}", url=url)


class UrlFetcher:
    """Download a page as text, following redirects.

    Parameters
    ----------
    user_agent : str
        ``User-Agent`` header sent with every request
    connect_timeout : float, default 10.0
        Seconds allowed for establishing the connection
    read_timeout : float, default 30.0
        Seconds allowed for reading the response
    max_redirects : int, default 10
        Redirects followed before giving up
    transport : httpx.BaseTransport, optional
        Custom transport, e.g. ``httpx.MockTransport`` in tests

    Examples
    --------
    >>> fetcher = UrlFetcher(user_agent="docs-bot/1.0")
    >>> html = fetcher.fetch("https://example.com/docs/")

    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        max_redirects: int = MAX_REDIRECTS,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the fetcher."""
        self.user_agent = user_agent
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_redirects = max_redirects
        self.transport = transport

    def create_client(self) -> httpx.Client:
        """Create the httpx client used for one fetch.

        Every request URL, including redirect targets, is validated by an
        event hook before it is sent.
        """

        def validate_request_url(request: httpx.Request) -> None:
            validate_url(str(request.url))

        def log_redirect(response: httpx.Response) -> None:
            if response.is_redirect:
                logger.debug("Redirecting to %s", response.headers.get("location"))

        client_kwargs: dict[str, Any] = {
            "timeout": httpx.Timeout(self.read_timeout, connect=self.connect_timeout),
            "follow_redirects": True,
            "max_redirects": self.max_redirects,
            "event_hooks": {"request": [validate_request_url], "response": [log_redirect]},
            "headers": {"User-Agent": self.user_agent},
        }
        if self.transport is not None:
            client_kwargs["transport"] = self.transport
        return httpx.Client(**client_kwargs)

    def fetch(self, url: str) -> str:
        """Return the decoded body of ``url``.

        Raises
        ------
        NetworkError
            If the URL is invalid, the server answers with an error status,
            redirects exceed the limit or the transport fails

        """
        validate_url(url)

        try:
            with self.create_client() as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    response.read()
                    logger.debug("Fetched %d bytes from %s", len(response.content), url)
                    return response.text
        except httpx.TooManyRedirects as e:
            raise NetworkError(
                f"Too many redirects ({self.max_redirects}) when fetching {url}", url=url, original_error=e
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise NetworkError(
                f"Failed to fetch {url}: {status} {e.response.reason_phrase}", url=url, original_error=e
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Error fetching {url}: {e}", url=url, original_error=e) from e
