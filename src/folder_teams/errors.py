"""Error taxonomy.

Every resolution failure is a FolderTeamError subclass. Failures coming out of
a collaborator are wrapped in the kind of the step that failed, with the
original exception chained as ``__cause__``.
"""

from __future__ import annotations


class FolderTeamError(Exception):
    """Base class for classified resolution failures."""


class ConsistencyError(FolderTeamError):
    """Folder type and privacy bit disagree."""


class UnrecognizedKindError(FolderTeamError):
    def __init__(self, folder_type: object) -> None:
        super().__init__(f"unrecognized folder type: {folder_type!r}")
        self.folder_type = folder_type


class UnsupportedError(FolderTeamError):
    """The request is well-formed but not something this resolver serves."""


class NameParseError(FolderTeamError):
    pass


class FormatError(FolderTeamError):
    pass


class LookupCreateError(FolderTeamError):
    pass


class TeamLoadError(FolderTeamError):
    pass


class VisibilityMismatchError(FolderTeamError):
    """The loaded team's publicness disagrees with the requesting folder."""

    def __init__(self, *, folder_public: bool, team_public: bool) -> None:
        super().__init__(
            f"team publicity mismatch folder:{folder_public} != team:{team_public}"
        )
        self.folder_public = folder_public
        self.team_public = team_public


# ----- Collaborator-side errors -----


class InvalidNameError(ValueError):
    """A folder name does not match the expected grammar."""


class TeamNotFoundError(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"team not found: {name}")
        self.name = name


class TeamExistsError(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"team already exists: {name}")
        self.name = name
