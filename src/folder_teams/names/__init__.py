"""Name parsing and formatting of folder names into team names and member assertions."""

from folder_teams.names.base import DisplayNameFormatter, NameParser
from folder_teams.names.formatter import CanonicalDisplayNameFormatter
from folder_teams.names.kbfs import KBFSNameParser

__all__ = [
    "CanonicalDisplayNameFormatter",
    "DisplayNameFormatter",
    "KBFSNameParser",
    "NameParser",
]
