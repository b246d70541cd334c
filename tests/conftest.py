"""
Pytest fixtures and configuration for romart tests.

Provides shared fixtures and test utilities across the test suite.
"""

import json
from unittest.mock import Mock

import pytest

from core.context import ResolutionContext
from core.listing_cache import ListingCache
from core.models import ArtType
from integrations.libretro_thumbnails import ThumbnailIndexClient

GBC = "Nintendo - Game Boy Color"
GB = "Nintendo - Game Boy"
SNES = "Nintendo - Super Nintendo Entertainment System"
MEGA_DRIVE = "Sega - Mega Drive - Genesis"
PS = "Sony - PlayStation"


class FakeThumbnailClient(ThumbnailIndexClient):
    """Thumbnail client serving in-memory listings and recording requests."""

    def __init__(self, listings=None):
        super().__init__(base_url="https://thumbnails.test", session=Mock())
        self.listings = listings or {}
        self.requests = []

    def fetch_listing(self, platform, art_type):
        self.requests.append((platform, art_type))
        listing = self.listings.get((platform, art_type), [])
        if isinstance(listing, Exception):
            raise listing
        return list(listing)


def anthropic_message(text):
    """Build a mock Anthropic message whose single content block holds text."""
    content = Mock()
    content.text = text
    message = Mock()
    message.content = [content]
    return message


def best_match_message(best_match):
    """Build a mock Anthropic message answering a bestMatch."""
    return anthropic_message(json.dumps({"bestMatch": best_match}))


@pytest.fixture
def make_context():
    """Factory building a resolution context over in-memory listings."""

    def _make(listings=None):
        client = FakeThumbnailClient(listings)
        return ResolutionContext(listing_cache=ListingCache(client))

    return _make


@pytest.fixture
def sample_listings():
    """Box art listings for a handful of platforms."""
    return {
        (GBC, ArtType.BOXART): ["Tetris DX (World).png", "Wario Land II (USA, Europe).png"],
        (GB, ArtType.BOXART): ["Tetris (World) (Rev 1).png", "Super Mario Land (World).png"],
        (SNES, ArtType.BOXART): ["Super Mario World (USA).png"],
        (MEGA_DRIVE, ArtType.BOXART): [
            "Sonic The Hedgehog (USA).png",
            "Sonic The Hedgehog 2 (Europe).png",
        ],
    }


@pytest.fixture
def mock_anthropic_client():
    """Mock Anthropic API client."""
    return Mock()
