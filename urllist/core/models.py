from typing import Optional, Dict, Any, Tuple
from dataclasses import dataclass, field

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 300
SITE_NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class URLParts:
    """Hostname and path pieces of a parsed URL"""
    hostname: str
    path: str = ""
    path_segments: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_path(self) -> bool:
        return bool(self.path) and self.path != "/"


@dataclass(frozen=True)
class LinkMetadata:
    """
    Preview record for a single link. ``url`` is the exact input string
    and doubles as the cache key.
    """
    url: str
    title: str
    domain: str
    site_name: str
    favicon: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the metadata to the JSON shape served by the API"""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "siteName": self.site_name,
            "favicon": self.favicon,
            "domain": self.domain,
        }


@dataclass(frozen=True)
class PendingURLState:
    """
    Per-URL resolution state as seen by a UI. Starts as ``loading`` and is
    replaced, never mutated, by exactly one terminal state.
    """
    url: str
    loading: bool = True
    error: Optional[str] = None
    metadata: Optional[LinkMetadata] = None

    @classmethod
    def pending(cls, url: str) -> "PendingURLState":
        return cls(url=url)

    @classmethod
    def resolved(cls, metadata: LinkMetadata) -> "PendingURLState":
        return cls(url=metadata.url, loading=False, metadata=metadata)

    @classmethod
    def failed(cls, url: str, error: str) -> "PendingURLState":
        return cls(url=url, loading=False, error=error)

    @property
    def is_resolved(self) -> bool:
        return not self.loading and self.metadata is not None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "url": self.url,
            "loading": self.loading,
            "error": self.error,
            "title": None,
            "description": None,
            "siteName": None,
            "favicon": None,
            "domain": None,
        }
        if self.metadata is not None:
            result.update(self.metadata.to_dict())
        return result
