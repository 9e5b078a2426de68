"""Pluggable team subsystem interfaces.

A local SQLite store implements both; a networked team service would too.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from folder_teams.context import ResolveContext
from folder_teams.models.team import ImplicitTeam, LoadedTeam, TeamName


class TeamLoader(ABC):
    """Loads the current state of an explicit team."""

    @abstractmethod
    async def load(
        self, team_name: TeamName, *, force_repoll: bool, ctx: ResolveContext
    ) -> LoadedTeam:
        """Load a team by name.

        With ``force_repoll`` false an implementation may answer from a cache.
        """


class ImplicitTeamResolver(ABC):
    """Maps a canonical member set to a team, creating the team on first use."""

    @abstractmethod
    async def lookup_or_create(
        self, display_name: str, *, is_public: bool, ctx: ResolveContext
    ) -> ImplicitTeam:
        """Return the team for (display_name, is_public).

        Must be idempotent: concurrent or repeated calls with the same key
        converge on one team, and at most one of them creates it.
        """
