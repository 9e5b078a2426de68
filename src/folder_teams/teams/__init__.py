"""Team subsystem: explicit team loading and implicit team lookup-or-create."""

from folder_teams.teams.base import ImplicitTeamResolver, TeamLoader
from folder_teams.teams.local import LocalTeamStore

__all__ = [
    "ImplicitTeamResolver",
    "LocalTeamStore",
    "TeamLoader",
]
