"""Run-scoped state shared by every resolution of a run."""

import logging
from typing import Optional

from constants import LIBRETRO_THUMBNAILS_URL
from core.listing_cache import ListingCache
from core.models import RunStatistics
from core.platforms import PlatformCatalog
from integrations.libretro_thumbnails import ThumbnailIndexClient

logger = logging.getLogger(__name__)


class ResolutionContext:
    """
    Owns the platform catalog, listing cache and counters of one run.

    Construct one per run and close it when the run ends; nothing here is
    shared between contexts.
    """

    def __init__(
        self,
        catalog: Optional[PlatformCatalog] = None,
        listing_cache: Optional[ListingCache] = None,
        stats: Optional[RunStatistics] = None,
        base_url: str = LIBRETRO_THUMBNAILS_URL,
        timeout: Optional[float] = None,
    ):
        """
        Initialize resolution context.

        Args:
            catalog: Platform catalog (default: built-in platforms)
            listing_cache: Listing cache (default: one backed by a new thumbnail client)
            stats: Run statistics (default: fresh counters)
            base_url: Thumbnail server root, used when creating the client
            timeout: Listing request timeout, used when creating the client
        """
        self.catalog = catalog or PlatformCatalog()
        self.listing_cache = listing_cache or ListingCache(
            ThumbnailIndexClient(base_url=base_url, timeout=timeout)
        )
        self.stats = stats or RunStatistics()

    @property
    def client(self) -> ThumbnailIndexClient:
        """Thumbnail server client behind the listing cache."""
        return self.listing_cache.client

    def close(self) -> None:
        """Drop cached listings and release the HTTP session."""
        dropped = self.listing_cache.clear()
        self.client.close()
        logger.debug(f"Resolution context closed ({dropped} listings dropped)")

    def __enter__(self) -> "ResolutionContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
