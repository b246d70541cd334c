"""
Command implementations for the romart CLI.
"""

from commands.resolve import resolve_library

__all__ = ["resolve_library"]
