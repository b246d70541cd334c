"""Tests for the libretro thumbnail server integration."""

from unittest.mock import Mock

import pytest
import requests

from core.exceptions import IntegrationException
from core.models import ArtType
from integrations.libretro_thumbnails import ThumbnailIndexClient, parse_listing

LISTING_HTML = """<html>
<head><title>Index of /Nintendo - Game Boy/Named_Boxarts/</title></head>
<body>
<h1>Index of /Nintendo - Game Boy/Named_Boxarts/</h1><hr><pre><a href="../">../</a>
<a href="Tetris%20%28World%29%20%28Rev%201%29.png">Tetris (World) (Rev 1).png</a>    10-Feb-2023 10:12  47k
<a href="Pok%C3%A9mon%20-%20Red%20Version%20%28USA%2C%20Europe%29.png">Pokémon - Red Version (USA, Europe).png</a>
</pre><hr></body>
</html>
"""


@pytest.fixture
def mock_session():
    """Mock requests session returning the sample listing."""
    session = Mock()
    response = Mock()
    response.text = LISTING_HTML
    response.raise_for_status.return_value = None
    session.get.return_value = response
    return session


class TestParseListing:
    """Tests for parse_listing."""

    def test_decodes_hrefs_in_page_order(self):
        assert parse_listing(LISTING_HTML) == [
            "../",
            "Tetris (World) (Rev 1).png",
            "Pokémon - Red Version (USA, Europe).png",
        ]

    def test_empty_page(self):
        assert parse_listing("<html><body></body></html>") == []


class TestThumbnailIndexClient:
    """Tests for ThumbnailIndexClient."""

    def test_urls(self):
        client = ThumbnailIndexClient(base_url="https://thumbnails.test/", session=Mock())

        assert client.listing_url("Nintendo - Game Boy", ArtType.BOXART) == (
            "https://thumbnails.test/Nintendo - Game Boy/Named_Boxarts/"
        )
        assert client.art_url("Nintendo - Game Boy", ArtType.SNAP, "Tetris (World).png") == (
            "https://thumbnails.test/Nintendo - Game Boy/Named_Snaps/Tetris (World).png"
        )

    def test_fetch_listing(self, mock_session):
        """Test that the listing is fetched with the configured timeout and parsed."""
        client = ThumbnailIndexClient(base_url="https://thumbnails.test", timeout=5, session=mock_session)

        listing = client.fetch_listing("Nintendo - Game Boy", ArtType.BOXART)

        assert "Tetris (World) (Rev 1).png" in listing
        mock_session.get.assert_called_once_with(
            "https://thumbnails.test/Nintendo - Game Boy/Named_Boxarts/", timeout=5
        )

    def test_no_timeout_by_default(self, mock_session):
        client = ThumbnailIndexClient(session=mock_session)
        client.fetch_listing("Nintendo - Game Boy", ArtType.BOXART)

        assert mock_session.get.call_args.kwargs["timeout"] is None

    def test_http_error_raises_integration_exception(self, mock_session):
        """Test that non-2xx responses surface as integration errors."""
        mock_session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        client = ThumbnailIndexClient(session=mock_session)

        with pytest.raises(IntegrationException) as exc_info:
            client.fetch_listing("Nintendo - Game Boy", ArtType.BOXART)

        assert exc_info.value.service == "libretro-thumbnails"
        assert "404" in str(exc_info.value)

    def test_connection_error_raises_integration_exception(self, mock_session):
        mock_session.get.side_effect = requests.ConnectionError("connection refused")
        client = ThumbnailIndexClient(session=mock_session)

        with pytest.raises(IntegrationException, match="connection refused"):
            client.fetch_listing("Nintendo - Game Boy", ArtType.BOXART)

    def test_close_releases_session(self, mock_session):
        ThumbnailIndexClient(session=mock_session).close()
        mock_session.close.assert_called_once()
