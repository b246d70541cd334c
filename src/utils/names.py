"""
ROM name normalization.

Sanitizes names for comparison against remote artwork listings and strips
annotation noise (region tags, revisions, subtitles) to build progressively
more permissive search terms.
"""

import re

_ILLEGAL_CHARS = re.compile(r'[&*/:`<>?|"]')
_ORDINAL_PREFIX = re.compile(r"^\d+\)\s*")
_ANNOTATIONS = re.compile(r"\(.*?\)|\[.*?\]")
_SUBTITLE_SEPARATOR = " - "


def sanitize_for_remote_path(name: str) -> str:
    """
    Replace characters the thumbnail server cannot store with underscores.

    Examples:
        >>> sanitize_for_remote_path("Ys I & II: Eternal")
        'Ys I _ II_ Eternal'
    """
    return _ILLEGAL_CHARS.sub("_", name)


def sanitize_local_name(name: str) -> str:
    """
    Sanitize a name for local display or output.

    Drops a leading "N) " ordinal prefix (as used by curated ROM sets)
    before replacing illegal characters.

    Examples:
        >>> sanitize_local_name("12) Kirby's Dream Land")
        "Kirby's Dream Land"
    """
    return sanitize_for_remote_path(_ORDINAL_PREFIX.sub("", name))


def strip_annotations(name: str) -> str:
    """
    Remove every (...) and [...] group and trim surrounding whitespace.

    Examples:
        >>> strip_annotations("Tetris (World) (Rev 1) [!]")
        'Tetris'
    """
    return _ANNOTATIONS.sub("", name).strip()


def strip_dx(name: str) -> str:
    """Remove the literal "DX" token (e.g., "Tetris DX" -> "Tetris")."""
    return name.replace("DX", "").strip()


def strip_subtitle(name: str) -> str:
    """Keep only the text before the first " - " separator."""
    return name.split(_SUBTITLE_SEPARATOR, 1)[0].strip()


def search_terms(file_name: str) -> list[str]:
    """
    Build the progressively shorter search terms for a ROM name.

    Args:
        file_name: ROM name without extension

    Returns:
        [annotations stripped, then without "DX", then without subtitle]
    """
    stripped = strip_annotations(file_name)
    without_dx = strip_dx(stripped)
    without_subtitle = strip_subtitle(without_dx)
    return [stripped, without_dx, without_subtitle]


def remove_extension(file_name: str) -> str:
    """
    Drop the extension of a file name.

    A leading dot (hidden file) is not treated as an extension separator.
    """
    last_dot = file_name.rfind(".")
    return file_name[:last_dot] if last_dot > 0 else file_name
