import asyncio
import time

import httpx
import pytest
from urllist.services.web_fetcher import WebFetcher
from urllist.services.url_parser import URLParser
from urllist.services.exceptions import (
    FetchError,
    FetchTimeoutError,
    HTTPFetchError,
    InvalidURLError,
    NetworkError,
    UnsafeURLError,
    UnsupportedContentTypeError,
)

HTML = "<html><head><title>Hello</title></head></html>"


def make_fetcher(handler, block_private_hosts=True, timeout=15):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return WebFetcher(URLParser(), client=client, timeout=timeout, block_private_hosts=block_private_hosts)


class TestWebFetcher:
    """Unit tests for WebFetcher"""

    @pytest.mark.asyncio
    async def test_fetch_html_success(self):
        """Test that an HTML response body is returned."""
        # Arrange
        def handler(request):
            return httpx.Response(200, text=HTML, headers={"content-type": "text/html; charset=utf-8"})

        fetcher = make_fetcher(handler)

        # Act
        result = await fetcher.fetch_html("https://example.com")

        # Assert
        assert result == HTML
        await fetcher.aclose()

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self):
        """Test that the request carries a browser signature."""
        # Arrange
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, text=HTML, headers={"content-type": "text/html"})

        fetcher = make_fetcher(handler)

        # Act
        await fetcher.fetch_html("https://example.com")

        # Assert
        assert seen["user-agent"].startswith("Mozilla/5.0")
        assert "text/html" in seen["accept"]
        assert seen["accept-language"].startswith("en-US")

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        """Test that redirects are followed transparently."""
        # Arrange
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"location": "https://example.com/new"})
            return httpx.Response(200, text="<title>New</title>", headers={"content-type": "text/html"})

        fetcher = make_fetcher(handler)

        # Act & Assert
        assert await fetcher.fetch_html("https://example.com/old") == "<title>New</title>"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 404, 500, 503])
    async def test_non_success_status(self, status):
        """Test that non-2xx responses raise HTTPFetchError with the status."""
        # Arrange
        fetcher = make_fetcher(lambda request: httpx.Response(status, text="nope"))

        # Act & Assert
        with pytest.raises(HTTPFetchError) as exc_info:
            await fetcher.fetch_html("https://example.com")
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that a transport timeout raises FetchTimeoutError."""
        # Arrange
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = make_fetcher(handler)

        # Act & Assert
        with pytest.raises(FetchTimeoutError) as exc_info:
            await fetcher.fetch_html("https://example.com")
        assert isinstance(exc_info.value, TimeoutError)
        assert exc_info.value.timeout == 15

    @pytest.mark.asyncio
    async def test_slow_drip_body_hits_total_deadline(self):
        """Test that a body trickling in under the per-read timeout still times out overall."""
        # Arrange
        async def drip():
            for _ in range(50):
                await asyncio.sleep(0.05)
                yield b"<"

        def handler(request):
            return httpx.Response(200, content=drip(), headers={"content-type": "text/html"})

        fetcher = make_fetcher(handler, timeout=0.3)

        # Act
        started = time.monotonic()
        with pytest.raises(FetchTimeoutError) as exc_info:
            await fetcher.fetch_html("https://example.com")
        elapsed = time.monotonic() - started

        # Assert
        assert elapsed < 2
        assert exc_info.value.timeout == 0.3

    @pytest.mark.asyncio
    async def test_slow_response_hits_total_deadline(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, text=HTML, headers={"content-type": "text/html"})

        fetcher = make_fetcher(handler, timeout=0.2)

        with pytest.raises(FetchTimeoutError):
            await fetcher.fetch_html("https://example.com")

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test that connection failures raise NetworkError."""
        # Arrange
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = make_fetcher(handler)

        # Act & Assert
        with pytest.raises(NetworkError):
            await fetcher.fetch_html("https://example.com")

    @pytest.mark.asyncio
    async def test_non_html_content(self):
        fetcher = make_fetcher(
            lambda request: httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})
        )

        with pytest.raises(UnsupportedContentTypeError):
            await fetcher.fetch_html("https://example.com/logo.png")

    @pytest.mark.asyncio
    async def test_missing_content_type_is_accepted(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, content=HTML.encode()))

        assert await fetcher.fetch_html("https://example.com") == HTML

    @pytest.mark.asyncio
    async def test_private_host_is_refused(self):
        """Test that loopback targets never reach the network."""
        # Arrange
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, text=HTML)

        fetcher = make_fetcher(handler)

        # Act & Assert
        with pytest.raises(UnsafeURLError):
            await fetcher.fetch_html("http://127.0.0.1:8000/admin")
        assert isinstance(UnsafeURLError(), FetchError)
        assert calls == []

    @pytest.mark.asyncio
    async def test_private_host_allowed_when_guard_disabled(self):
        fetcher = make_fetcher(
            lambda request: httpx.Response(200, text=HTML, headers={"content-type": "text/html"}),
            block_private_hosts=False,
        )

        assert await fetcher.fetch_html("http://localhost:8000/") == HTML

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, text=HTML))

        with pytest.raises(InvalidURLError):
            await fetcher.fetch_html("not a url")
