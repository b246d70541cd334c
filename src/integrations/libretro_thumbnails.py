"""
libretro thumbnail server integration.

Fetches the directory listing of a platform's artwork folder and builds
artwork URLs. The server exposes a plain HTML index where each file is an
anchor whose href is the percent-encoded filename.
"""

import logging
import re
from typing import Optional
from urllib.parse import unquote

import requests

from constants import LIBRETRO_THUMBNAILS_URL
from core.exceptions import IntegrationException
from core.models import ArtType

logger = logging.getLogger(__name__)

_ANCHOR_HREF = re.compile(r'<a href="([^"]+)">')


def parse_listing(html: str) -> list[str]:
    """
    Extract the decoded filenames of every anchor in a listing page.

    Args:
        html: Listing page markup

    Returns:
        Filenames in page order
    """
    return [unquote(href) for href in _ANCHOR_HREF.findall(html)]


class ThumbnailIndexClient:
    """
    Client for the libretro thumbnail server.

    The client imposes no timeout of its own; callers pass one.
    """

    SERVICE = "libretro-thumbnails"

    def __init__(
        self,
        base_url: str = LIBRETRO_THUMBNAILS_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize thumbnail client.

        Args:
            base_url: Thumbnail server root
            timeout: Request timeout in seconds (None waits indefinitely)
            session: Optional requests session to reuse connections
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def listing_url(self, platform: str, art_type: ArtType) -> str:
        """Build the listing endpoint of a platform's art folder."""
        return f"{self.base_url}/{platform}/{art_type.value}/"

    def art_url(self, platform: str, art_type: ArtType, filename: str) -> str:
        """Build the URL of an artwork file."""
        return f"{self.base_url}/{platform}/{art_type.value}/{filename}"

    def fetch_listing(self, platform: str, art_type: ArtType) -> list[str]:
        """
        Fetch the artwork filenames available for a platform and art type.

        Args:
            platform: Platform id
            art_type: Art type folder

        Returns:
            Decoded remote filenames, in listing order

        Raises:
            IntegrationException: If the request fails or returns a non-2xx status
        """
        url = self.listing_url(platform, art_type)
        logger.debug(f"Fetching arts list for '{platform}' ({art_type.value})")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise IntegrationException(self.SERVICE, f"listing {url} failed: {e}") from e

        filenames = parse_listing(response.text)
        logger.debug(f"Listed {len(filenames)} files for '{platform}' ({art_type.value})")
        return filenames

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
