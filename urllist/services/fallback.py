import logging
import re
from typing import Optional
from urllib.parse import quote, unquote

from urllist.core.config import settings
from urllist.core.models import (
    LinkMetadata,
    URLParts,
    TITLE_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    SITE_NAME_MAX_LENGTH,
)

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[-_]")
_EXTENSION = re.compile(r"\.[^.]*$")
_WORD_START = re.compile(r"\b\w")


def humanize_segment(segment: str) -> str:
    """
    Turn a path segment into a title: ``my-cool_article.html`` becomes
    ``My Cool Article``.
    """
    text = _SEPARATORS.sub(" ", unquote(segment))
    text = _EXTENSION.sub("", text)
    text = _WORD_START.sub(lambda m: m.group(0).upper(), text)
    return " ".join(text.split())


class FallbackSynthesizer:
    """
    Builds a preview from URL structure alone, for pages that could not be
    fetched or that lack the tags the extractor looks for.
    """

    def __init__(self, favicon_service_url: Optional[str] = None):
        self.favicon_service_url = favicon_service_url or settings.favicon_service_url

    def favicon_for(self, domain: str) -> str:
        return self.favicon_service_url.format(domain=quote(domain, safe=".-:[]"))

    def title_for(self, parts: URLParts) -> str:
        if parts.has_path and parts.path_segments:
            title = humanize_segment(parts.path_segments[-1])
            if title:
                return title[:TITLE_MAX_LENGTH]
        return parts.hostname[:TITLE_MAX_LENGTH]

    def description_for(self, parts: URLParts) -> str:
        if parts.has_path:
            return f"Visit {parts.hostname}{parts.path}"[:DESCRIPTION_MAX_LENGTH]
        return f"Visit {parts.hostname}"[:DESCRIPTION_MAX_LENGTH]

    def synthesize(self, url: str, parts: URLParts) -> LinkMetadata:
        """Never fails for a parsed URL"""
        logger.debug(f"Synthesizing fallback metadata for URL: {url}")
        domain = parts.hostname
        return LinkMetadata(
            url=url,
            title=self.title_for(parts),
            description=self.description_for(parts),
            site_name=domain[:SITE_NAME_MAX_LENGTH],
            favicon=self.favicon_for(domain),
            domain=domain,
        )
