"""
Platform catalog for ROM libraries.

Maps libretro platform ids to the file extensions, folder aliases and
fallback platforms used to recognise ROM files and find their artwork.
"""

import logging
import re
from typing import Iterable, Optional

from core.exceptions import ConfigurationException, UnknownPlatformException
from core.models import PlatformRecord

logger = logging.getLogger(__name__)


def _platform(name: str, extensions: Iterable[str], aliases: Iterable[str], fallbacks: Iterable[str] = ()) -> PlatformRecord:
    return PlatformRecord(
        name=name,
        extensions=frozenset(extensions),
        aliases=tuple(aliases),
        fallbacks=tuple(fallbacks),
    )


# Declaration order is lookup order: the first platform whose alias appears in
# the folder name wins, so generic aliases must stay below specific ones.
DEFAULT_PLATFORMS: tuple[PlatformRecord, ...] = (
    _platform("Nintendo - Game Boy Color", ["gbc", "zip"], ["GBC", "Game Boy Color"], ["Nintendo - Game Boy"]),
    _platform("Nintendo - Game Boy Advance", ["gba", "zip"], ["GBA", "Game Boy Advance"]),
    _platform("Nintendo - Game Boy", ["gb", "sgb", "zip"], ["GB", "SGB", "Game Boy"], ["Nintendo - Game Boy Color"]),
    _platform(
        "Nintendo - Super Nintendo Entertainment System",
        ["sfc", "smc", "zip"],
        ["SNES", "SFC", "Super Famicom", "Super Nintendo", "Super NES"],
    ),
    _platform("Nintendo - Nintendo 64DD", ["n64dd", "zip"], ["N64DD", "Nintendo 64DD"], ["Nintendo - Nintendo 64"]),
    _platform("Nintendo - Nintendo 64", ["n64", "v64", "zip"], ["N64", "Nintendo 64"]),
    _platform(
        "Nintendo - Family Computer Disk System",
        ["fds", "zip"],
        ["FDS", "Family Computer Disk System", "Famicom Disk System"],
    ),
    _platform("Nintendo - Nintendo Entertainment System", ["nes", "zip"], ["NES", "FC", "Famicom", "Nintendo"]),
    _platform("Nintendo - Nintendo DSi", ["dsi", "zip"], ["DSi", "Nintendo DSi"], ["Nintendo - Nintendo DS"]),
    _platform("Nintendo - Nintendo DS", ["nds", "zip"], ["DS", "Nintendo DS"]),
    _platform("Nintendo - Pokemon Mini", ["pm", "zip"], ["PKM", "Pokemon Mini"]),
    _platform("Nintendo - Virtual Boy", ["vb", "zip"], ["VB", "Virtual Boy"]),
    _platform("Handheld Electronic Game", ["gw", "zip"], ["GW", "Game & Watch"]),
    _platform("Sega - 32X", ["32x", "zip"], ["32X", "THIRTYTWOX"]),
    _platform("Sega - Dreamcast", ["dc", "chd", "gdi", "m3u"], ["DC", "Dreamcast"]),
    _platform("Sega - Mega Drive - Genesis", ["md", "gen", "zip"], ["MD", "Mega Drive", "Genesis"]),
    _platform("Sega - Mega-CD - Sega CD", ["chd", "iso", "cue", "m3u"], ["Mega CD", "Sega CD", "MegaCD", "SegaCD"]),
    _platform("Sega - Game Gear", ["gg", "zip"], ["GG", "Game Gear"]),
    _platform("Sega - Master System - Mark III", ["sms", "zip"], ["SMS", "MS", "Master System", "Mark III"]),
    _platform("Sega - Saturn", ["chd", "cue"], ["Saturn"]),
    _platform(
        "Sony - PlayStation Portable",
        ["iso", "cso", "chd", "m3u"],
        ["PSP", "PlayStation Portable"],
        ["Sony - PlayStation"],
    ),
    _platform("Sony - PlayStation", ["chd", "cue", "m3u"], ["PS", "PSX", "PS1", "PlayStation"]),
    _platform("Amstrad - CPC", ["dsk", "zip"], ["CPC", "Amstrad"]),
    _platform("Atari - 2600", ["a26", "zip"], ["A26", "2600", "Atari 2600"]),
    _platform("Atari - 5200", ["a52", "zip"], ["A52", "5200", "Atari 5200"]),
    _platform("Atari - 7800", ["a78", "zip"], ["A78", "7800", "Atari 7800"]),
    _platform("Atari - Jaguar", ["jag", "zip"], ["JAG", "Jaguar"]),
    _platform("Atari - Lynx", ["lynx", "zip"], ["LYNX", "Lynx"]),
    _platform("Atari - ST", ["st", "zip"], ["ST", "Atari ST"]),
    _platform("Bandai - WonderSwan Color", ["wsc", "zip"], ["WSC", "WonderSwan Color"], ["Bandai - WonderSwan"]),
    _platform("Bandai - WonderSwan", ["ws", "zip"], ["WS", "WonderSwan"]),
    _platform("Coleco - ColecoVision", ["col", "zip"], ["COL", "Coleco", "ColecoVision"]),
    _platform("Commodore - Amiga", ["adf", "zip"], ["ADF", "Amiga"]),
    _platform("Commodore - VIC-20", ["v64", "zip"], ["VIC"]),
    _platform("Commodore - 64", ["d64", "zip"], ["D64", "C64", "Commodore 64", "Commodore"]),
    _platform("FBNeo - Arcade Games", ["zip"], ["FBN", "FBNeo", "FB Alpha", "FBA", "Final Burn Alpha"]),
    _platform("GCE - Vectrex", ["vec", "zip"], ["VEC", "Vectrex"]),
    _platform("GamePark - GP32", ["gp", "zip"], ["GP32", "GamePark"]),
    _platform("MAME", ["zip"], ["MAME"]),
    _platform("Microsoft - MSX", ["rom", "zip"], ["MSX"]),
    _platform("Mattel - Intellivision", ["int", "zip"], ["INT", "Intellivision"]),
    _platform(
        "NEC - PC Engine CD - TurboGrafx-CD",
        ["chd", "cue", "m3u"],
        ["PCECD", "TGCD", "PC Engine CD", "TurboGrafx-CD"],
    ),
    _platform("NEC - PC Engine SuperGrafx", ["sgx", "zip"], ["SGFX", "SGX", "SuperGrafx"]),
    _platform("NEC - PC Engine - TurboGrafx 16", ["pce", "zip"], ["PCE", "TG16", "PC Engine", "TurboGrafx 16"]),
    _platform("SNK - Neo Geo CD", ["chd", "cue", "m3u"], ["NEOCD", "NGCD", "Neo Geo CD"]),
    _platform(
        "SNK - Neo Geo Pocket Color",
        ["ngc", "zip"],
        ["NGPC", "Neo Geo Pocket Color"],
        ["SNK - Neo Geo Pocket"],
    ),
    _platform("SNK - Neo Geo Pocket", ["ngp", "zip"], ["NGP", "Neo Geo Pocket"]),
    _platform("SNK - Neo Geo", ["neogeo", "zip"], ["NEOGEO", "Neo Geo"]),
    _platform("Magnavox - Odyssey2", ["bin", "zip"], ["ODYSSEY"]),
    _platform("TIC-80", ["tic", "zip"], ["TIC"]),
    _platform("Sharp - X68000", ["hdf", "zip"], ["X68000"]),
    _platform("Watara - Supervision", ["sv", "zip"], ["SV", "Supervision"]),
    _platform("DOS", ["pc", "dos", "zip"], ["DOS"]),
    _platform("DOOM", ["wad", "zip"], ["WAD"]),
    _platform("ScummVM", ["scummvm", "zip"], ["SCUMM"]),
)


class PlatformCatalog:
    """
    Immutable registry of platform records, indexed by platform id.

    Lookups walk the records in declaration order and return the first
    platform whose extension and folder alias both match.
    """

    def __init__(self, platforms: Optional[Iterable[PlatformRecord]] = None):
        """
        Initialize and validate the catalog.

        Args:
            platforms: Platform records in lookup order (default: DEFAULT_PLATFORMS)

        Raises:
            ConfigurationException: If a record is inconsistent
        """
        records = tuple(DEFAULT_PLATFORMS if platforms is None else platforms)
        self._platforms: dict[str, PlatformRecord] = {}
        for record in records:
            if record.name in self._platforms:
                raise ConfigurationException(f"Duplicate platform: {record.name}")
            self._platforms[record.name] = record
        self._validate()

    def _validate(self) -> None:
        for record in self._platforms.values():
            if not record.aliases:
                raise ConfigurationException(f"Platform {record.name} has no aliases")
            for fallback in record.fallbacks:
                if fallback == record.name:
                    raise ConfigurationException(f"Platform {record.name} cannot fall back to itself")
                if fallback not in self._platforms:
                    raise ConfigurationException(f"Platform {record.name} falls back to unknown platform {fallback}")

    def __len__(self) -> int:
        return len(self._platforms)

    def __contains__(self, platform: str) -> bool:
        return platform in self._platforms

    @property
    def names(self) -> list[str]:
        """Platform ids in declaration order."""
        return list(self._platforms)

    def get(self, platform: str) -> PlatformRecord:
        """
        Get the record of a platform.

        Args:
            platform: Platform id

        Returns:
            PlatformRecord for the platform

        Raises:
            UnknownPlatformException: If the platform is not registered
        """
        try:
            return self._platforms[platform]
        except KeyError:
            raise UnknownPlatformException(platform) from None

    def fallbacks_for(self, platform: str) -> tuple[str, ...]:
        """Get the fallback chain of a platform."""
        return self.get(platform).fallbacks

    def lookup_platform(self, file_path: str, is_directory: bool = False) -> Optional[str]:
        """
        Detect the platform of a ROM file from its library-relative path.

        The first path segment is the folder the ROM sits under; the text
        after the last dot is the extension.

        Args:
            file_path: Library-relative path (e.g., "GBC/Tetris DX.gbc")
            is_directory: Skip the extension check (path is a folder)

        Returns:
            Platform id, or None if the path is not a recognised ROM
        """
        extension = file_path.split(".")[-1]
        first_segment = re.split(r"[\\/]", file_path)[0]
        for record in self._platforms.values():
            if (is_directory or record.accepts(extension)) and record.matches_folder(first_segment):
                return record.name
        return None

    def is_rom_folder(self, folder_name: str) -> bool:
        """Check whether a folder name designates a known platform."""
        return self.lookup_platform(folder_name, is_directory=True) is not None
