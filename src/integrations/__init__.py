"""Integrations with external services."""

from integrations.libretro_thumbnails import ThumbnailIndexClient

__all__ = [
    "ThumbnailIndexClient",
]
