import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional, MutableMapping

from cachetools import LRUCache, TTLCache

from urllist.core.config import settings
from urllist.core.models import LinkMetadata

logger = logging.getLogger(__name__)


class CacheInterface(ABC):
    """Interface for caching following the Dependency Inversion Principle"""

    @abstractmethod
    def get(self, key: str) -> Optional[LinkMetadata]:
        """
        Get metadata from cache.

        Args:
            key: The exact URL string the metadata was resolved for

        Returns:
            The cached LinkMetadata if found, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: str, value: LinkMetadata) -> None:
        """
        Set metadata in cache, replacing any previous entry.

        Args:
            key: The exact URL string the metadata was resolved for
            value: The LinkMetadata to cache
        """
        pass

    @abstractmethod
    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns True if it was present."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MetadataCache(CacheInterface):
    """
    In-memory metadata cache keyed by URL string.

    ``maxsize`` bounds the entry count with LRU eviction; ``maxsize=0`` keeps
    every entry for the process lifetime. A ``ttl`` switches to a TTL cache.
    All access goes through one lock since cachetools containers are not
    thread-safe.
    """

    def __init__(self, maxsize: int = None, ttl: float = None):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of items to cache (uses config default if None)
            ttl: Time to live in seconds (uses config default if None)
        """
        if maxsize is None:
            maxsize = settings.cache_maxsize
        if ttl is None:
            ttl = settings.cache_ttl_seconds

        self.maxsize = maxsize
        self.ttl = ttl
        self._lock = threading.Lock()
        self.cache: MutableMapping[str, LinkMetadata]
        if maxsize and ttl:
            self.cache = TTLCache(maxsize=maxsize, ttl=ttl)
        elif maxsize:
            self.cache = LRUCache(maxsize=maxsize)
        else:
            if ttl:
                logger.warning(
                    f"Cache TTL of {ttl}s ignored: maxsize=0 keeps entries for the process lifetime"
                )
            self.cache = {}

    def get(self, key: str) -> Optional[LinkMetadata]:
        logger.debug(f"Checking cache for key: {key}")
        with self._lock:
            cached_item = self.cache.get(key)
        if cached_item is not None:
            logger.debug(f"Cache hit for key: {key}")
        else:
            logger.debug(f"Cache miss for key: {key}")
        return cached_item

    def set(self, key: str, value: LinkMetadata) -> None:
        logger.debug(f"Storing metadata in cache for key: {key}")
        with self._lock:
            self.cache[key] = value

    def invalidate(self, key: str) -> bool:
        with self._lock:
            removed = self.cache.pop(key, None) is not None
        if removed:
            logger.info(f"Invalidated cache entry for key: {key}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self.cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self.cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self.cache
