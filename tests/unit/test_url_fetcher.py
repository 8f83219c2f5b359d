"""Unit tests for remote page fetching."""

import httpx
import pytest

from llm_docs_builder.exceptions import NetworkError
from llm_docs_builder.url_fetcher import UrlFetcher, validate_url


def _fetcher(handler, **kwargs) -> UrlFetcher:
    return UrlFetcher(transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.unit
class TestValidateUrl:
    """Test URL validation."""

    @pytest.mark.parametrize("url", ["https://example.com", "http://example.com/docs/page.html", "HTTPS://EXAMPLE.COM"])
    def test_valid(self, url):
        validate_url(url)

    @pytest.mark.parametrize("url", ["ftp://example.com/file", "file:///etc/passwd", "example.com/docs"])
    def test_unsupported_scheme(self, url):
        with pytest.raises(NetworkError, match="Unsupported URL scheme"):
            validate_url(url)

    def test_missing_host(self):
        with pytest.raises(NetworkError, match="missing host"):
            validate_url("https:///path")

    def test_malformed(self):
        with pytest.raises(NetworkError, match="Invalid URL format"):
            validate_url("http://[::1")


@pytest.mark.unit
class TestUrlFetcher:
    """Test fetching through a mock transport."""

    def test_fetch_text(self):
        fetcher = _fetcher(lambda request: httpx.Response(200, text="# Docs"))
        assert fetcher.fetch("https://example.com/docs.md") == "# Docs"

    def test_user_agent_header(self):
        seen = []

        def handler(request):
            seen.append(request.headers["User-Agent"])
            return httpx.Response(200, text="ok")

        _fetcher(handler, user_agent="docs-bot/1.0").fetch("https://example.com/")
        assert seen == ["docs-bot/1.0"]

    def test_redirect_is_followed(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.com/new"})
            return httpx.Response(200, text=f"at {request.url.path}")

        assert _fetcher(handler).fetch("https://example.com/old") == "at /new"

    def test_too_many_redirects(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": f"https://example.com{request.url.path}x"})

        with pytest.raises(NetworkError, match=r"Too many redirects \(2\) when fetching https://example.com/a"):
            _fetcher(handler, max_redirects=2).fetch("https://example.com/a")

    def test_error_status(self):
        fetcher = _fetcher(lambda request: httpx.Response(404))
        with pytest.raises(NetworkError) as exc_info:
            fetcher.fetch("https://example.com/missing")
        assert str(exc_info.value) == "Failed to fetch https://example.com/missing: 404 Not Found"
        assert exc_info.value.url == "https://example.com/missing"
        assert isinstance(exc_info.value.original_error, httpx.HTTPStatusError)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="Error fetching https://example.com/: connection refused"):
            _fetcher(handler).fetch("https://example.com/")

    def test_invalid_url_is_rejected_before_request(self):
        calls = []
        fetcher = _fetcher(lambda request: calls.append(request) or httpx.Response(200))
        with pytest.raises(NetworkError):
            fetcher.fetch("ftp://example.com/")
        assert calls == []

    def test_client_settings(self):
        fetcher = UrlFetcher(user_agent="ua", connect_timeout=1.0, read_timeout=2.0, max_redirects=3)
        with fetcher.create_client() as client:
            assert client.headers["User-Agent"] == "ua"
            assert client.max_redirects == 3
            assert client.follow_redirects is True
            assert client.timeout.connect == 1.0
            assert client.timeout.read == 2.0
