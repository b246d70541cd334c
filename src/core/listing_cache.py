"""
Run-scoped cache of remote artwork listings.

Each (platform, art type) listing is fetched at most once per cache and
then reused for every ROM of that platform. Entries are never refreshed:
one network round trip per key is the point, freshness is not.
"""

import logging
import threading
from typing import Optional

from core.models import ArtType
from integrations.libretro_thumbnails import ThumbnailIndexClient

logger = logging.getLogger(__name__)

ListingKey = tuple[str, ArtType]


class ListingCache:
    """
    Lazily populated mapping of (platform, art type) to remote filenames.

    Concurrent first requests for the same key wait on a per-key lock, so
    only one of them fetches; requests for different keys fetch in parallel.
    Failed fetches propagate and leave the key empty.
    """

    def __init__(self, client: Optional[ThumbnailIndexClient] = None):
        """
        Initialize listing cache.

        Args:
            client: Thumbnail server client used on cache misses
        """
        self.client = client or ThumbnailIndexClient()
        self._listings: dict[ListingKey, tuple[str, ...]] = {}
        self._key_locks: dict[ListingKey, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self.hits = 0
        self.fetches = 0

    def _lock_for(self, key: ListingKey) -> threading.Lock:
        with self._locks_guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _count(self, counter: str) -> None:
        with self._locks_guard:
            setattr(self, counter, getattr(self, counter) + 1)

    def get_listing(self, platform: str, art_type: ArtType) -> tuple[str, ...]:
        """
        Get the remote filenames of a platform's art folder.

        Args:
            platform: Platform id
            art_type: Art type folder

        Returns:
            Remote filenames in listing order

        Raises:
            IntegrationException: If the listing cannot be fetched
        """
        key = (platform, art_type)
        listing = self._listings.get(key)
        if listing is not None:
            self._count("hits")
            return listing

        with self._lock_for(key):
            listing = self._listings.get(key)
            if listing is not None:
                self._count("hits")
                return listing

            listing = tuple(self.client.fetch_listing(platform, art_type))
            self._count("fetches")
            self._listings[key] = listing
            logger.debug(f"Cached {len(listing)} arts for '{platform}' ({art_type.value})")
            return listing

    def __contains__(self, key: ListingKey) -> bool:
        return key in self._listings

    def clear(self) -> int:
        """
        Drop every cached listing.

        Returns:
            Number of listings dropped
        """
        with self._locks_guard:
            dropped = len(self._listings)
            self._listings.clear()
            self._key_locks.clear()
        return dropped

    def summary(self) -> str:
        """Get cache usage summary."""
        return f"{self.fetches} fetched, {self.hits} served from cache"
