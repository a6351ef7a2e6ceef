import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .html_parser import HTMLParser
from urllist.core.models import (
    TITLE_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    SITE_NAME_MAX_LENGTH,
)


logger = logging.getLogger(__name__)

TITLE_META_KEYS = ("og:title", "twitter:title", "title")
DESCRIPTION_META_KEYS = ("og:description", "twitter:description", "description", "twitter:card")
SITE_NAME_META_KEYS = ("og:site_name", "application-name", "apple-mobile-web-app-title")


def truncate(value: Optional[str], limit: int) -> Optional[str]:
    """Hard cut at ``limit`` characters"""
    if value is None:
        return None
    return value[:limit]


@dataclass(frozen=True)
class ExtractedMetadata:
    """Fields found in a page. ``None`` means no candidate matched."""
    title: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = None
    favicon: Optional[str] = None


class MetadataExtractorInterface(ABC):
    """Interface for metadata extraction following the Dependency Inversion Principle"""

    @abstractmethod
    def extract(self, html: str, url: str, hostname: str) -> ExtractedMetadata:
        pass


class MetadataExtractor(MetadataExtractorInterface):
    """
    Extracts title, description, site name and favicon from HTML using
    Open Graph, Twitter Card and generic meta tags.

    Each field walks an ordered candidate list and the first non-empty match
    wins. Title and site name end with the hostname; description has no
    default here and stays ``None`` when nothing matches.
    """

    def extract(self, html: str, url: str, hostname: str) -> ExtractedMetadata:
        """Extract metadata from HTML content"""
        logger.debug(f"Extracting metadata from HTML for URL: {url}")

        try:
            parser = HTMLParser(html, url)
        except Exception as e:
            # Unparseable markup is treated like a page without tags
            logger.warning(f"Failed to parse HTML for URL {url}: {str(e)}")
            return ExtractedMetadata(title=hostname, site_name=hostname)

        title = self._first_meta(parser, TITLE_META_KEYS) or parser.get_tag_text("title") or hostname
        description = self._first_meta(parser, DESCRIPTION_META_KEYS)
        site_name = self._first_meta(parser, SITE_NAME_META_KEYS) or hostname
        favicon = parser.get_favicon()

        if description is None:
            logger.debug(f"No description found in HTML for URL: {url}")

        return ExtractedMetadata(
            title=truncate(title, TITLE_MAX_LENGTH),
            description=truncate(description, DESCRIPTION_MAX_LENGTH),
            site_name=truncate(site_name, SITE_NAME_MAX_LENGTH),
            favicon=favicon,
        )

    @staticmethod
    def _first_meta(parser: HTMLParser, keys) -> Optional[str]:
        for key in keys:
            value = parser.get_meta_content(key)
            if value:
                return value
        return None
