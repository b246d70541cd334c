"""
Centralized configuration constants for romart.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Thumbnail Server
# ============================================================================

LIBRETRO_THUMBNAILS_URL = "https://thumbnails.libretro.com"
"""Base URL of the libretro thumbnail server (no trailing slash)."""

ART_FILE_EXTENSION = ".png"
"""Extension of every artwork file on the thumbnail server."""

# ============================================================================
# Matching Configuration
# ============================================================================

FUZZY_SIMILARITY_THRESHOLD = 0.85
"""Minimum Jaro-Winkler similarity for a fuzzy candidate (inclusive)."""

FUZZY_MAX_DISTINCT_MATCHES = 25
"""Maximum number of distinct stripped names kept by the fuzzy filter."""

AI_MATCH_RETRIES = 2
"""Extra attempts granted to the AI matcher when it answers a non-candidate."""

# ============================================================================
# LLM Configuration
# ============================================================================

DEFAULT_LLM_MODEL = "claude-sonnet-4-5"
"""Default Claude model for AI-assisted matching."""

LLM_MODEL_OPTIONS = {
    "claude-sonnet-4-5": "Balanced performance and accuracy",
    "claude-opus-4-1": "Highest accuracy, slower",
    "claude-haiku-4-5": "Fastest, cheapest",
}
"""Available Claude models for AI-assisted matching."""

LLM_MAX_TOKENS = 256
"""Token budget for a single AI matching answer."""

DEFAULT_REGIONS = ["USA", "World", "Europe", "Japan"]
"""Default region preference order forwarded to the AI prompt."""

# ============================================================================
# Concurrency and Timeouts
# ============================================================================

DEFAULT_MAX_WORKERS = 4
"""Default number of ROM files resolved concurrently."""

API_REQUEST_TIMEOUT = 30
"""Default timeout for listing requests, in seconds."""

# ============================================================================
# Output
# ============================================================================

DEFAULT_OUTPUT_FILE = "output/artwork.csv"
"""Default CSV file receiving resolved artwork URLs."""

DEFAULT_UNMATCHED_FILE = "output/unmatched.txt"
"""Default file receiving unmatched and failed ROM files."""
