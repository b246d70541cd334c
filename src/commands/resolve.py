"""
Resolve command for finding the artwork of a ROM library.

Implements the `romart` command: walks a ROM library, resolves every ROM to
its libretro artwork URL(s) and writes the results to CSV.
"""

import csv
import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.context import ResolutionContext
from core.exceptions import RomArtException
from core.models import MatchOutcome
from core.options import ResolverOptions
from core.platforms import PlatformCatalog
from core.resolver import ArtworkResolver, rom_base_name
from utils.logging_helpers import log_summary_section
from utils.names import sanitize_local_name, strip_annotations
from utils.similarity import fuzzy_matches

logger = logging.getLogger(__name__)

CSV_HEADER = ["rom", "name", "platform", "art_type", "match", "url", "secondary_match", "secondary_url"]

_DISC_SUFFIX = re.compile(r" \(Disc \d+\).+$")


@dataclass(frozen=True)
class RomFile:
    """A ROM found in the library."""

    path: str
    """Library-relative path, "/"-separated, first segment is the platform folder"""

    platform: str
    """Detected platform id"""


@dataclass
class ResolvedRom:
    """Artwork resolution result for one ROM."""

    rom: RomFile
    primary: MatchOutcome
    secondary: Optional[MatchOutcome] = None

    @property
    def matched(self) -> bool:
        """Whether any artwork was found."""
        return self.primary.matched or bool(self.secondary and self.secondary.matched)

    def to_row(self) -> list[str]:
        """Convert to a CSV row."""
        return [
            self.rom.path,
            sanitize_local_name(rom_base_name(self.rom.path)),
            self.rom.platform,
            self.primary.art_type.value if self.primary.art_type else "",
            self.primary.kind.value,
            self.primary.url or "",
            self.secondary.kind.value if self.secondary else "",
            (self.secondary.url or "") if self.secondary else "",
        ]


def collect_rom_files(library_dir: Path, catalog: PlatformCatalog) -> list[RomFile]:
    """
    Find the ROM files of a library.

    Only top-level folders naming a known platform are walked. An .m3u
    playlist stands for its parent folder, and disc images listed by a
    sibling playlist are left out.

    Args:
        library_dir: Library root containing one folder per platform
        catalog: Platform catalog used for detection

    Returns:
        ROM files in path order
    """
    roms: list[RomFile] = []
    platform_dirs = sorted(d for d in library_dir.iterdir() if d.is_dir() and catalog.is_rom_folder(d.name))

    for platform_dir in platform_dirs:
        logger.info(f"Scanning folder: {platform_dir.name} [Detected: {catalog.lookup_platform(platform_dir.name, True)}]")
        for file in sorted(p for p in platform_dir.rglob("*") if p.is_file()):
            relative = file.relative_to(library_dir).as_posix()
            platform = catalog.lookup_platform(relative)
            if not platform:
                continue

            rom_path = relative
            if file.suffix == ".m3u":
                # Playlists inside a game folder stand for that folder
                if file.parent != platform_dir:
                    rom_path = file.parent.relative_to(library_dir).as_posix()
                    logger.debug(f"File is m3u, using parent folder for scraping: {rom_path}")
            elif Path(_DISC_SUFFIX.sub("", str(file)) + ".m3u").exists():
                logger.debug(f"File is a multi-disc part, skipping: {relative}")
                continue

            roms.append(RomFile(path=rom_path, platform=platform))

    return roms


def read_resolved_rows(output_file: Path) -> dict[str, list[str]]:
    """
    Read rows of a previous run that found artwork.

    Args:
        output_file: CSV written by a previous run

    Returns:
        Rows keyed by ROM path (empty if the file does not exist)
    """
    if not output_file.exists():
        return {}

    rows = {}
    with open(output_file, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header != CSV_HEADER:
            logger.warning(f"Ignoring {output_file}: unexpected header")
            return {}
        for row in reader:
            if len(row) == len(CSV_HEADER) and (row[5] or row[7]):
                rows[row[0]] = row

    return rows


def resolve_library(
    library_dir: Path,
    output_file: Path,
    unmatched_file: Path,
    options: ResolverOptions,
    context: Optional[ResolutionContext] = None,
    resolver: Optional[ArtworkResolver] = None,
) -> tuple[list[ResolvedRom], list[ResolvedRom], list[tuple[RomFile, str]]]:
    """
    Resolve the artwork of every ROM of a library.

    Args:
        library_dir: Library root containing one folder per platform
        output_file: Output CSV file with resolved URLs
        unmatched_file: Output file for unmatched and failed ROMs
        options: Resolver options
        context: Resolution context (default: a new one, closed on return)
        resolver: Artwork resolver (default: one built on the context)

    Returns:
        Tuple of (resolved ROMs, unmatched ROMs, failed ROMs with reasons)
    """
    owns_context = context is None
    if context is None:
        context = ResolutionContext(base_url=options.base_url, timeout=options.timeout)
    resolver = resolver or ArtworkResolver(context, options)

    try:
        roms = collect_rom_files(library_dir, context.catalog)
        logger.info(f"Found {len(roms)} ROM files in {library_dir}")

        previous_rows = {} if options.force else read_resolved_rows(output_file)
        pending = []
        for rom in roms:
            if rom.path in previous_rows:
                logger.debug(f"Artwork already resolved, skipping '{rom.path}'")
                context.stats.increment("skipped")
            else:
                pending.append(rom)

        results = _resolve_all(resolver, pending, options.max_workers)

        resolved = [r for r in results if isinstance(r, ResolvedRom) and r.matched]
        unmatched = [r for r in results if isinstance(r, ResolvedRom) and not r.matched]
        failed = [r for r in results if isinstance(r, tuple)]

        output_file.parent.mkdir(parents=True, exist_ok=True)
        kept_rows = [previous_rows[rom.path] for rom in roms if rom.path in previous_rows]
        logger.info(f"Writing artwork URLs to {output_file}")
        write_results_csv(output_file, kept_rows, resolved + unmatched)

        if unmatched or failed:
            unmatched_file.parent.mkdir(parents=True, exist_ok=True)
            logger.warning(f"Writing {len(unmatched) + len(failed)} unmatched ROMs to {unmatched_file}")
            write_unmatched_file(unmatched_file, unmatched, failed, context)
        elif unmatched_file.exists():
            unmatched_file.unlink()

        log_summary_section("Resolution complete", {
            "ROMs": f"{len(roms)} ({context.stats.skipped} already resolved)",
            "Matched": len(resolved),
            "Unmatched": len(unmatched),
            "Failed": len(failed),
            "Matches": context.stats.summary(),
            "Listings": context.listing_cache.summary(),
        }, logger=logger)

        return resolved, unmatched, failed

    finally:
        if owns_context:
            context.close()


def _resolve_all(resolver: ArtworkResolver, roms: list[RomFile], max_workers: int) -> list:
    """Resolve ROMs in parallel, keeping input order in the result."""
    results: list = [None] * len(roms)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(_resolve_rom, resolver, rom): i
            for i, rom in enumerate(roms)
        }

        for done, future in enumerate(as_completed(future_to_index), 1):
            index = future_to_index[future]
            rom = roms[index]
            try:
                result = future.result()
            except RomArtException as e:
                logger.error(f"[{done}/{len(roms)}] Failed: {rom.path}: {e}")
                results[index] = (rom, str(e))
                continue
            except Exception as e:
                logger.error(f"[{done}/{len(roms)}] Unexpected error resolving {rom.path}: {e}", exc_info=True)
                results[index] = (rom, f"{type(e).__name__}: {e}")
                continue

            if result.matched:
                logger.info(f"[{done}/{len(roms)}] ✓ {rom.path} → {result.primary.url or result.secondary.url}")
            else:
                logger.info(f"[{done}/{len(roms)}] No art found for '{rom.path}'")
            results[index] = result

    return results


def _resolve_rom(resolver: ArtworkResolver, rom: RomFile) -> ResolvedRom:
    logger.debug(f"Platform: {rom.platform} (file: {rom.path})")
    primary, secondary = resolver.resolve_art_types(rom.path, rom.platform)
    return ResolvedRom(rom=rom, primary=primary, secondary=secondary)


def write_results_csv(file_path: Path, kept_rows: list[list[str]], results: list[ResolvedRom]) -> None:
    """Write previous rows and new results to the artwork CSV."""
    rows = kept_rows + [result.to_row() for result in results]
    rows.sort(key=lambda row: row[0])

    with open(file_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(rows)


def suggest_candidates(context: ResolutionContext, rom: ResolvedRom, limit: int = 5) -> list[str]:
    """
    Suggest artwork names close to an unmatched ROM.

    Only listings already cached by the run are consulted.

    Returns:
        Up to `limit` similar remote filenames
    """
    art_type = rom.primary.art_type
    if (rom.rom.platform, art_type) not in context.listing_cache:
        return []

    listing = context.listing_cache.get_listing(rom.rom.platform, art_type)
    search = strip_annotations(rom_base_name(rom.rom.path))
    return fuzzy_matches(search, listing)[:limit]


def write_unmatched_file(
    file_path: Path,
    unmatched: list[ResolvedRom],
    failed: list[tuple[RomFile, str]],
    context: ResolutionContext,
) -> None:
    """Write unmatched ROMs (with close artwork names) and failed ROMs to a text file."""
    with open(file_path, "w", encoding="utf-8") as f:
        for rom in unmatched:
            f.write(f"{rom.rom.path}\n")
            for suggestion in suggest_candidates(context, rom):
                f.write(f"#   similar: {suggestion}\n")
        for rom, reason in failed:
            f.write(f"{rom.path}\n")
            f.write(f"#   error: {reason}\n")
