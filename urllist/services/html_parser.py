"""HTML parsing utilities for metadata extraction"""

import html as html_entities
import logging
import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup


logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

# Icon rel tokens in order of preference; mask-icon is a monochrome SVG mask
_ICON_RELS = (("icon",), ("shortcut", "icon"), ("apple-touch-icon",), ("apple-touch-icon-precomposed",))


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Turn non-breaking spaces into spaces, collapse whitespace and trim"""
    if value is None:
        return None
    text = str(value).replace("\xa0", " ")
    text = _WHITESPACE.sub(" ", text).strip()
    return text or None


def clean_text(value: Optional[str]) -> Optional[str]:
    """
    Strip markup from undecoded source text, then decode entities. Stripping
    first keeps encoded brackets such as ``&lt;T&gt;`` in the result.
    """
    if value is None:
        return None
    text = _TAG_PATTERN.sub("", str(value))
    return normalize_text(html_entities.unescape(text))


def _attribute_matcher(key: str):
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*$", re.IGNORECASE)
    return lambda value: value is not None and bool(pattern.match(str(value)))


class HTMLParser:
    """Encapsulates HTML parsing functionality"""

    def __init__(self, html: str, url: str):
        """
        Initialize the HTML parser

        Args:
            html: HTML content to parse
            url: Base URL for resolving relative links
        """
        self.html = html
        self.url = url
        self.soup = BeautifulSoup(html or "", "lxml")

    def get_meta_content(self, key: str) -> Optional[str]:
        """
        Content of the first ``<meta>`` whose ``property`` or ``name`` equals
        ``key`` (case-insensitive). Attribute order in the source markup does
        not matter. Empty content counts as absent.
        """
        matcher = _attribute_matcher(key)
        for attr in ("property", "name"):
            for el in self.soup.find_all("meta", attrs={attr: matcher}):
                content = el.get("content")
                if isinstance(content, list):
                    content = " ".join(content)
                text = normalize_text(content)
                if text:
                    return text
        return None

    def get_tag_text(self, tag: str) -> Optional[str]:
        """
        Text content of the first ``tag`` element. Nested markup is stripped
        from the raw source before entities are decoded.
        """
        pattern = re.compile(rf"<{re.escape(tag)}\b[^>]*>(.*?)</{re.escape(tag)}\s*>", re.IGNORECASE | re.DOTALL)
        match = pattern.search(self.html or "")
        if match:
            return clean_text(match.group(1))

        el = self.soup.find(tag)
        if el is None:
            return None
        return normalize_text(el.get_text())

    def get_favicon(self) -> Optional[str]:
        """Absolute URL of the page's declared icon, if any"""
        candidates = {}
        for link in self.soup.find_all("link", rel=True, href=True):
            rel = link.get("rel")
            tokens = tuple(token.lower() for token in (rel.split() if isinstance(rel, str) else rel))
            href = str(link.get("href") or "").strip()
            if tokens in _ICON_RELS and href and not href.lower().startswith("data:"):
                candidates.setdefault(tokens, href)

        for rel in _ICON_RELS:
            if rel in candidates:
                return urljoin(self.url, candidates[rel])
        return None
