import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from urllist.core.config import settings
from .url_parser import URLParserInterface, is_private_host
from .exceptions import (
    FetchTimeoutError,
    HTTPFetchError,
    NetworkError,
    UnsafeURLError,
    UnsupportedContentTypeError,
)

logger = logging.getLogger(__name__)

# Bodies served as any of these are parsed as HTML
_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "text/plain", "application/xml", "text/xml")


def build_browser_headers() -> Dict[str, str]:
    """Headers that make the request look like an ordinary desktop browser"""
    return {
        "User-Agent": settings.fetch_user_agent,
        "Accept": settings.fetch_accept,
        "Accept-Language": settings.fetch_accept_language,
        "DNT": "1",
        "Upgrade-Insecure-Requests": "1",
    }


class WebFetcherInterface(ABC):
    """Interface for fetching web content following the Dependency Inversion Principle"""

    @abstractmethod
    async def fetch_html(self, url: str) -> str:
        pass


class WebFetcher(WebFetcherInterface):
    """
    Fetches HTML content from URLs with a browser signature, a fixed
    timeout and transparent redirects. Never retries.
    """

    def __init__(
        self,
        url_parser: URLParserInterface,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        block_private_hosts: Optional[bool] = None,
    ):
        self.url_parser = url_parser
        self.timeout = timeout if timeout is not None else settings.fetch_timeout
        self.block_private_hosts = (
            settings.block_private_hosts if block_private_hosts is None else block_private_hosts
        )
        self._client = client

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=settings.fetch_follow_redirects,
            max_redirects=settings.fetch_max_redirects,
        )

    async def fetch_html(self, url: str) -> str:
        """Fetch HTML content from a URL"""
        logger.info(f"Fetching HTML content from URL: {url}")

        parts = self.url_parser.parse(url)
        if self.block_private_hosts and is_private_host(parts.hostname):
            logger.warning(f"Refusing to fetch private address: {url}")
            raise UnsafeURLError(url)

        if self._client is not None:
            return await self._get(self._client, url)
        async with self._new_client() as client:
            return await self._get(client, url)

    async def _get(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            # httpx timeouts are per phase; wait_for bounds the whole request
            res = await asyncio.wait_for(
                client.get(url, headers=build_browser_headers(), timeout=self.timeout),
                timeout=self.timeout,
            )
            res.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Timed out after {self.timeout}s fetching URL {url}: {e!r}")
            raise FetchTimeoutError(self.timeout)
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error occurred while fetching URL {url}: {e}")
            raise HTTPFetchError(status_code=e.response.status_code)
        except httpx.RequestError as e:
            logger.warning(f"Request error occurred while fetching URL {url}: {e!r}")
            raise NetworkError(f"Request error occurred: {str(e) or type(e).__name__}")

        content_type = res.headers.get("content-type", "")
        if content_type and not any(t in content_type.lower() for t in _HTML_CONTENT_TYPES):
            logger.warning(f"URL does not return HTML content. Content-Type: {content_type}")
            raise UnsupportedContentTypeError(content_type)

        logger.info(f"Successfully fetched HTML content from URL: {url}")
        return res.text

    async def aclose(self) -> None:
        """Close the shared client, if one was given"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
