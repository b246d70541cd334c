"""
Artwork resolution for ROM files.

Implements a cascading match strategy to find the remote artwork of a ROM:

1. Exact: the sanitized ROM name is a file of the platform's listing
2. Stripped: listing entries containing the ROM name without annotations,
   then without "DX", then without subtitle, disambiguated by the AI
   matcher (when enabled) and by edit distance
3. Fallback: the same cascade against each fallback platform, one level deep
4. Miss
"""

import logging
import re
from typing import Callable, Optional, Sequence

from constants import ART_FILE_EXTENSION
from core.context import ResolutionContext
from core.models import ArtType, ArtTypeOption, MatchKind, MatchOutcome
from core.options import ResolverOptions
from utils.ai_matcher import AIMatcher
from utils.names import remove_extension, sanitize_for_remote_path, search_terms
from utils.similarity import closest_by_edit_distance

logger = logging.getLogger(__name__)

MatchTier = Callable[[str, Sequence[str], str, ArtType], Optional[MatchOutcome]]


def rom_base_name(file_path: str) -> str:
    """
    Get the name of a ROM file or folder without directory and extension.

    Examples:
        >>> rom_base_name("GBC/Tetris DX (World).gbc")
        'Tetris DX (World)'
    """
    base_name = re.split(r"[\\/]", file_path.rstrip("/\\"))[-1]
    return remove_extension(base_name)


class ArtworkResolver:
    """
    Resolves ROM files to artwork URLs on the thumbnail server.

    All mutable state (listings, counters) lives on the ResolutionContext,
    so one resolver can serve concurrent resolutions.
    """

    def __init__(
        self,
        context: ResolutionContext,
        options: Optional[ResolverOptions] = None,
        ai_matcher: Optional[AIMatcher] = None,
    ):
        """
        Initialize artwork resolver.

        Args:
            context: Run context holding catalog, listing cache and counters
            options: Resolver options (default: AI disabled, box art)
            ai_matcher: AI matcher to use when options.ai is set
                (default: one built from the options)
        """
        self.context = context
        self.options = options or ResolverOptions()

        self.ai_matcher = None
        if self.options.ai:
            self.ai_matcher = ai_matcher or AIMatcher(
                api_key=self.options.anthropic_api_key,
                model=self.options.ai_model,
                regions=self.options.regions,
            )
            if self.ai_matcher.enabled:
                logger.info(f"AI matching enabled (model: {self.ai_matcher.model})")

        # Order matters: the first tier returning an outcome ends the cascade
        self.tiers: list[MatchTier] = [
            self._match_exact,
            self._match_stripped,
        ]

    def resolve(
        self,
        file_path: str,
        platform: str,
        art_type: ArtType = ArtType.BOXART,
        allow_fallback: bool = True,
    ) -> MatchOutcome:
        """
        Find the artwork of a ROM file.

        Args:
            file_path: ROM file (or multi-disc folder) path
            platform: Platform id of the ROM
            art_type: Art type to resolve
            allow_fallback: Whether fallback platforms may be searched;
                nested fallback resolutions never search further

        Returns:
            MatchOutcome (kind NONE when nothing matched)

        Raises:
            UnknownPlatformException: If the platform is not registered
            IntegrationException: If a listing cannot be fetched
        """
        record = self.context.catalog.get(platform)
        listing = self.context.listing_cache.get_listing(platform, art_type)
        file_name = rom_base_name(file_path)

        for tier in self.tiers:
            outcome = tier(file_name, listing, platform, art_type)
            if outcome:
                return outcome

        if not allow_fallback:
            return MatchOutcome.miss(platform, art_type)

        for fallback in record.fallbacks:
            outcome = self.resolve(file_path, fallback, art_type, allow_fallback=False)
            if outcome.matched:
                logger.debug(f"Found match for '{file_name}' in fallback platform '{fallback}'")
                return outcome

            logger.debug(f"No match for '{file_name}' in fallback platform '{fallback}'")

        self.context.stats.record(MatchKind.NONE)
        return MatchOutcome.miss(platform, art_type)

    def find_art_url(self, file_path: str, platform: str, art_type: ArtType = ArtType.BOXART) -> Optional[str]:
        """Find the artwork URL of a ROM file, or None."""
        return self.resolve(file_path, platform, art_type).url

    def resolve_art_types(
        self,
        file_path: str,
        platform: str,
        option: Optional[ArtTypeOption] = None,
    ) -> tuple[MatchOutcome, Optional[MatchOutcome]]:
        """
        Resolve the art type(s) selected by an art type option.

        Args:
            file_path: ROM file path
            platform: Platform id of the ROM
            option: Art type selector (default: the resolver options' selector)

        Returns:
            (primary outcome, secondary outcome or None for single-art selectors)
        """
        primary, secondary = (option or self.options.art_type).art_types()
        primary_outcome = self.resolve(file_path, platform, primary)
        secondary_outcome = self.resolve(file_path, platform, secondary) if secondary else None
        return primary_outcome, secondary_outcome

    def _outcome(self, kind: MatchKind, candidate: str, platform: str, art_type: ArtType) -> MatchOutcome:
        return MatchOutcome(
            kind=kind,
            url=self.context.client.art_url(platform, art_type, candidate),
            candidate=candidate,
            platform=platform,
            art_type=art_type,
        )

    def _match_exact(
        self, file_name: str, listing: Sequence[str], platform: str, art_type: ArtType
    ) -> Optional[MatchOutcome]:
        """Tier 1: the sanitized file name is literally in the listing."""
        art_name = sanitize_for_remote_path(f"{file_name}{ART_FILE_EXTENSION}")
        if art_name not in listing:
            return None

        logger.debug(f"Found exact match for '{file_name}'")
        self.context.stats.record(MatchKind.EXACT)
        return self._outcome(MatchKind.EXACT, art_name, platform, art_type)

    def _match_stripped(
        self, file_name: str, listing: Sequence[str], platform: str, art_type: ArtType
    ) -> Optional[MatchOutcome]:
        """Tier 2: progressively stripped names as substring filters."""
        previous_term = None
        for term in search_terms(file_name):
            # Same term as the previous step yields the same (empty) candidates
            if term == previous_term:
                continue
            previous_term = term

            outcome = self._find_best_match(term, file_name, listing, platform, art_type)
            if outcome:
                return outcome

        return None

    def _find_best_match(
        self, term: str, file_name: str, listing: Sequence[str], platform: str, art_type: ArtType
    ) -> Optional[MatchOutcome]:
        needle = sanitize_for_remote_path(term)
        candidates = [art for art in listing if needle in art]
        if not candidates:
            return None

        if self.ai_matcher:
            best_match = self.ai_matcher.resolve_with_assistant(
                term, file_name, candidates, stats=self.context.stats
            )
            if best_match:
                return self._outcome(MatchKind.AI, best_match, platform, art_type)

        best_match = closest_by_edit_distance(term, candidates)
        logger.info(f"Partial match for '{file_name}' (searched: '{term}'): '{best_match}'")
        self.context.stats.record(MatchKind.PARTIAL)
        return self._outcome(MatchKind.PARTIAL, best_match, platform, art_type)
