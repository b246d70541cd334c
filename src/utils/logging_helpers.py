"""
Logging helper utilities for the romart CLI.

Section-formatted output for fatal configuration errors and the end-of-run
summary of a library resolution.
"""

import logging
from typing import Mapping, Optional, Sequence

SECTION_WIDTH = 60


def log_error_section(
    title: str,
    messages: Sequence[str],
    logger: Optional[logging.Logger] = None,
    width: int = SECTION_WIDTH,
) -> None:
    """
    Log an error section with separator lines and multiple messages.

    Args:
        title: Title message for the error section
        messages: Error messages to display (empty strings become blank lines)
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters

    Examples:
        >>> log_error_section(
        ...     "Invalid configuration.",
        ...     ["Validation failed for art_type: Invalid art type: 'boxarts'"]
        ... )
        ============================================================
        Invalid configuration.
        Validation failed for art_type: Invalid art type: 'boxarts'
        ============================================================
    """
    logger = logger or logging.getLogger()

    logger.error("=" * width)
    logger.error(title)
    for message in messages:
        logger.error(message or "")
    logger.error("=" * width)


def log_summary_section(
    title: str,
    rows: Mapping[str, object],
    logger: Optional[logging.Logger] = None,
    width: int = SECTION_WIDTH,
) -> None:
    """
    Log a run summary: a title between separators, then one aligned line per row.

    Args:
        title: Summary title
        rows: Labels and values, logged in mapping order
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters

    Examples:
        >>> log_summary_section("Resolution complete", {"ROMs": 3, "Matched": 2})
        ============================================================
        Resolution complete
        ============================================================
          ROMs:    3
          Matched: 2
    """
    logger = logger or logging.getLogger()

    logger.info("=" * width)
    logger.info(title)
    logger.info("=" * width)

    label_width = max((len(label) for label in rows), default=0) + 1
    for label, value in rows.items():
        logger.info(f"  {label + ':':<{label_width}} {value}")
