import ipaddress
import re
from abc import ABC, abstractmethod
from urllib.parse import urlparse

from urllist.core.models import URLParts
from .exceptions import InvalidURLError

ALLOWED_SCHEMES = ("http", "https")

# Characters that can never appear in a hostname
_BAD_HOST_CHARS = re.compile(r"[\s<>\"'{}|\\^`]")

_PRIVATE_HOST_PATTERNS = [
    r"^localhost$",
    r"\.localhost$",
    r"^0\.0\.0\.0$",
]


def normalize_url(raw: str) -> str:
    """
    Trim a user-entered link and prepend ``https://`` when it carries no
    http(s) scheme. This is the collection builder's policy; the resolver
    itself never rewrites the URLs it is given.
    """
    if raw is None:
        return ""
    candidate = raw.strip()
    if not candidate:
        return candidate
    lowered = candidate.lower()
    if not (lowered.startswith("http://") or lowered.startswith("https://")):
        candidate = "https://" + candidate
    return candidate


def is_private_host(hostname: str) -> bool:
    """True for loopback, link-local and RFC 1918 hosts"""
    hostname = hostname.lower()
    for pattern in _PRIVATE_HOST_PATTERNS:
        if re.search(pattern, hostname):
            return True
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
    )


class URLParserInterface(ABC):
    """Interface for URL parsing following the Dependency Inversion Principle"""

    @abstractmethod
    def parse(self, url: str) -> URLParts:
        """
        Parse a URL into hostname and path parts.

        Args:
            url: The URL string to parse

        Returns:
            The parsed URLParts

        Raises:
            InvalidURLError: If the string is not an http(s) URL
        """
        pass


class URLParser(URLParserInterface):
    """
    Parses raw URL strings into the pieces the resolver needs.
    """

    def parse(self, url: str) -> URLParts:
        if not isinstance(url, str) or not url.strip():
            raise InvalidURLError(url or "")
        try:
            parsed = urlparse(url)
            # Out-of-range ports raise here
            parsed.port
        except ValueError:
            raise InvalidURLError(url)

        if parsed.scheme.lower() not in ALLOWED_SCHEMES:
            raise InvalidURLError(url)
        if not parsed.netloc or _BAD_HOST_CHARS.search(parsed.netloc):
            raise InvalidURLError(url)

        hostname = parsed.hostname or ""
        if not hostname or _BAD_HOST_CHARS.search(hostname):
            raise InvalidURLError(url)
        if hostname.startswith(".") or hostname.endswith("..") or ".." in hostname:
            raise InvalidURLError(url)

        path = parsed.path or ""
        segments = tuple(segment for segment in path.split("/") if segment)
        return URLParts(hostname=hostname, path=path, path_segments=segments)
