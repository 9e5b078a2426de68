"""Pluggable name parsing and display-name formatting interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from folder_teams.context import ResolveContext
from folder_teams.models.team import ImplicitTeamDisplayName, TeamName


class NameParser(ABC):
    """Turns raw folder names into structured team names or member assertions."""

    @abstractmethod
    def parse_private_team_path(self, name: str) -> TeamName:
        """Parse the name of a team-backed folder. Raises InvalidNameError."""

    @abstractmethod
    def parse_implicit_team_name(self, name: str) -> ImplicitTeamDisplayName:
        """Parse the name of a private or public folder shared by a set of members.

        Raises InvalidNameError.
        """


class DisplayNameFormatter(ABC):
    @abstractmethod
    async def format(self, display_name: ImplicitTeamDisplayName, ctx: ResolveContext) -> str:
        """Render member assertions as the canonical lookup key of an implicit team."""
