"""Folder descriptors, team identities, and parsed team names."""

from folder_teams.models.folder import (
    Folder,
    FolderType,
    TeamIDWithVisibility,
    TLFVisibility,
)
from folder_teams.models.team import (
    ConflictInfo,
    ImplicitTeam,
    ImplicitTeamDisplayName,
    LoadedTeam,
    MemberAssertion,
    TeamName,
    new_team_id,
)

__all__ = [
    "ConflictInfo",
    "Folder",
    "FolderType",
    "ImplicitTeam",
    "ImplicitTeamDisplayName",
    "LoadedTeam",
    "MemberAssertion",
    "TLFVisibility",
    "TeamIDWithVisibility",
    "TeamName",
    "new_team_id",
]
