import asyncio
import logging
from typing import AsyncIterator, Iterable, List, Optional

from .url_parser import URLParserInterface
from .web_fetcher import WebFetcherInterface
from .metadata_extractor import MetadataExtractorInterface
from .cache_service import CacheInterface
from .fallback import FallbackSynthesizer
from .exceptions import InvalidURLError, FetchError
from urllist.core.config import settings
from urllist.core.models import LinkMetadata, PendingURLState, URLParts

logger = logging.getLogger(__name__)


class MetadataService:
    """
    Resolves link previews: cache lookup, fetch, extract, fall back, store.

    This is the only place fallback values are computed; routes and other
    callers always go through it.
    """

    def __init__(
        self,
        url_parser: URLParserInterface,
        web_fetcher: WebFetcherInterface,
        metadata_extractor: MetadataExtractorInterface,
        cache: CacheInterface,
        fallback: Optional[FallbackSynthesizer] = None,
        synthesize_missing_description: Optional[bool] = None,
    ):
        self.url_parser = url_parser
        self.web_fetcher = web_fetcher
        self.metadata_extractor = metadata_extractor
        self.cache = cache
        self.fallback = fallback or FallbackSynthesizer()
        if synthesize_missing_description is None:
            synthesize_missing_description = settings.synthesize_missing_description
        self.synthesize_missing_description = synthesize_missing_description

    async def resolve(self, url: str) -> LinkMetadata:
        """
        Resolve preview metadata for a URL, using the cache when possible.

        Args:
            url: The URL exactly as the caller holds it; also the cache key

        Returns:
            A LinkMetadata with non-empty title, site name, favicon and domain

        Raises:
            InvalidURLError: If the URL cannot be parsed. Nothing is cached.
        """
        parts = self.url_parser.parse(url)

        cached = self.cache.get(url)
        if cached is not None:
            logger.info(f"Metadata retrieved from cache for URL: {url}")
            return cached

        logger.info(f"Metadata not in cache, fetching HTML for URL: {url}")
        try:
            html = await self.web_fetcher.fetch_html(url)
        except FetchError as e:
            logger.warning(f"Fetch failed for URL {url}, using fallback metadata: {e.message}")
            metadata = self.fallback.synthesize(url, parts)
        else:
            metadata = self._from_html(url, parts, html)

        self.cache.set(url, metadata)
        logger.info(f"Metadata resolved and cached for URL: {url}")
        return metadata

    def _from_html(self, url: str, parts: URLParts, html: str) -> LinkMetadata:
        extracted = self.metadata_extractor.extract(html, url, parts.hostname)

        description = extracted.description
        if not description and self.synthesize_missing_description:
            description = self.fallback.description_for(parts)

        return LinkMetadata(
            url=url,
            title=extracted.title or self.fallback.title_for(parts),
            description=description or None,
            site_name=extracted.site_name or parts.hostname,
            favicon=extracted.favicon or self.fallback.favicon_for(parts.hostname),
            domain=parts.hostname,
        )

    def pending(self, url: str) -> PendingURLState:
        """Initial state for a URL that has been registered for resolution"""
        return PendingURLState.pending(url)

    async def resolve_state(self, url: str) -> PendingURLState:
        """Resolve one URL into a terminal state. Never raises."""
        try:
            metadata = await self.resolve(url)
        except InvalidURLError as e:
            logger.warning(f"Skipping invalid URL {url!r}: {e.message}")
            return PendingURLState.failed(url, "Invalid URL format")
        except Exception as e:
            logger.error(f"Unexpected error resolving URL {url}: {str(e)}", exc_info=True)
            return PendingURLState.failed(url, "Failed to load preview")
        return PendingURLState.resolved(metadata)

    async def resolve_all(self, urls: Iterable[str]) -> List[PendingURLState]:
        """
        Resolve every URL concurrently. Results keep the input order and a
        failure for one URL only affects that URL's state.
        """
        urls = list(urls)
        logger.info(f"Resolving {len(urls)} URLs")
        return list(await asyncio.gather(*(self.resolve_state(url) for url in urls)))

    async def iter_resolve(self, urls: Iterable[str]) -> AsyncIterator[PendingURLState]:
        """Yield terminal states in completion order"""
        for next_done in asyncio.as_completed([self.resolve_state(url) for url in urls]):
            yield await next_done

    def invalidate(self, url: str) -> bool:
        """Drop a cached entry so the next resolve fetches again"""
        return self.cache.invalidate(url)
