"""
Command-line interface for romart - ROM artwork resolver.

Walks a ROM library (one folder per platform) and resolves every ROM to
its libretro thumbnail URL(s).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from constants import (
    API_REQUEST_TIMEOUT,
    DEFAULT_LLM_MODEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_UNMATCHED_FILE,
    LLM_MODEL_OPTIONS,
)
from core.exceptions import ConfigurationException, RomArtException, ValidationException
from core.models import ArtTypeOption
from utils.logging_helpers import log_error_section

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the resolve command."""
    parser = argparse.ArgumentParser(
        prog="romart",
        description="romart - Resolve ROM files to libretro artwork",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Models: " + ", ".join(f"{name} ({desc})" for name, desc in LLM_MODEL_OPTIONS.items()),
    )

    io_group = parser.add_argument_group("input/output")
    matching_group = parser.add_argument_group("matching options")
    network_group = parser.add_argument_group("network options")

    # Input/Output arguments
    io_group.add_argument("library", type=Path, help="ROM library folder (one sub-folder per platform).")
    io_group.add_argument("-o", "--output", type=Path, default=Path(DEFAULT_OUTPUT_FILE), help="Output CSV file.")
    io_group.add_argument("--unmatched", type=Path, default=Path(DEFAULT_UNMATCHED_FILE), help="Output file for unmatched ROMs.")
    io_group.add_argument("--config", type=Path, help="YAML options file.")
    io_group.add_argument("--force", action="store_true", default=None, help="Resolve ROMs already present in the output.")

    # Matching options
    matching_group.add_argument(
        "-t", "--type",
        dest="art_type",
        choices=[option.value for option in ArtTypeOption],
        help="Art type(s) to resolve (default: boxart).",
    )
    matching_group.add_argument("--ai", action="store_true", default=None, help="Enable AI-assisted matching.")
    matching_group.add_argument("--ai-model", type=str, help=f"Claude model for matching (default: {DEFAULT_LLM_MODEL}).")
    matching_group.add_argument("--regions", type=str, help="Region preference order (comma-separated).")
    matching_group.add_argument("--anthropic-api-key", type=str, help="Anthropic API key.")

    # Network options
    network_group.add_argument("--base-url", type=str, help="Thumbnail server URL.")
    network_group.add_argument("--max-workers", type=int, help=f"Number of parallel workers (default: {DEFAULT_MAX_WORKERS}).")
    network_group.add_argument("--timeout", type=float, help=f"Listing request timeout in seconds (default: {API_REQUEST_TIMEOUT}).")

    # Other options
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    return parser.parse_args(args)


def build_overrides(args: argparse.Namespace) -> dict:
    """Collect option overrides given on the command line."""
    return {
        "ai": args.ai,
        "ai_model": args.ai_model,
        "regions": args.regions,
        "force": args.force,
        "art_type": args.art_type,
        "base_url": args.base_url,
        "max_workers": args.max_workers,
        "timeout": args.timeout,
        "anthropic_api_key": args.anthropic_api_key,
    }


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the resolve command."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    from core.options import load_options

    try:
        options = load_options(args.config, build_overrides(args))
    except ValidationException as e:
        log_error_section("Invalid configuration.", [str(e)], logger=logger)
        return 1

    if not args.library.is_dir():
        logger.error(f"Library folder not found: {args.library}")
        return 1

    from commands.resolve import resolve_library

    try:
        _, unmatched, failed = resolve_library(
            library_dir=args.library,
            output_file=args.output,
            unmatched_file=args.unmatched,
            options=options,
        )
    except ConfigurationException as e:
        log_error_section("Platform configuration error.", [str(e)], logger=logger)
        return 1
    except RomArtException as e:
        logger.error(f"Resolve command failed: {e}", exc_info=True)
        return 1

    if not unmatched and not failed:
        logger.info("All ROMs matched successfully.")
    return 0


def main_dispatch():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_dispatch()
