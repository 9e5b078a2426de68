"""Local team store backed by SQLite storage.

This is the default team subsystem. It serves explicit teams created through
``create_team`` and creates implicit teams on first reference.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

import aiosqlite

from folder_teams.context import BACKGROUND, ResolveContext
from folder_teams.errors import TeamExistsError, TeamNotFoundError
from folder_teams.models.team import ImplicitTeam, LoadedTeam, TeamName, new_team_id
from folder_teams.storage.sqlite import StorageEngine
from folder_teams.teams.base import ImplicitTeamResolver, TeamLoader

logger = logging.getLogger(__name__)

IMPLICIT_TEAM_PREFIX = "__keybase_implicit_team__"


def _loaded_team(row: dict) -> LoadedTeam:
    return LoadedTeam(
        id=row["id"],
        name=row["name"],
        is_public=bool(row["is_public"]),
        implicit=bool(row["implicit"]),
    )


class LocalTeamStore(TeamLoader, ImplicitTeamResolver):
    """Resolves explicit and implicit teams from the local SQLite database."""

    def __init__(self, storage: StorageEngine) -> None:
        self._storage = storage
        self._cache: dict[str, LoadedTeam] = {}
        self._create_lock = asyncio.Lock()

    async def create_team(self, team_name: TeamName, *, is_public: bool = False) -> LoadedTeam:
        """Create an explicit team. A subteam's parent must already exist."""
        parent_id = None
        parent = team_name.parent()
        if parent is not None:
            parent_row = await self._storage.get_team_by_name(str(parent))
            if parent_row is None:
                raise TeamNotFoundError(str(parent))
            parent_id = parent_row["id"]

        team_id = new_team_id(is_public=is_public, is_subteam=parent is not None)
        try:
            await self._storage.insert_team(
                team_id=team_id,
                name=str(team_name),
                is_public=is_public,
                parent_id=parent_id,
            )
        except aiosqlite.IntegrityError as exc:
            raise TeamExistsError(str(team_name)) from exc
        logger.info("Created team %s (%s)", team_name, team_id)
        return LoadedTeam(id=team_id, name=str(team_name), is_public=is_public)

    async def load(
        self, team_name: TeamName, *, force_repoll: bool, ctx: ResolveContext = BACKGROUND
    ) -> LoadedTeam:
        name = str(team_name)
        if not force_repoll and name in self._cache:
            return self._cache[name]
        row = await self._storage.get_team_by_name(name)
        if row is None:
            self._cache.pop(name, None)
            raise TeamNotFoundError(name)
        team = _loaded_team(row)
        self._cache[name] = team
        return team

    async def lookup_or_create(
        self, display_name: str, *, is_public: bool, ctx: ResolveContext = BACKGROUND
    ) -> ImplicitTeam:
        async with self._create_lock:
            row = await self._storage.get_implicit_team(display_name, is_public)
            if row is not None:
                return ImplicitTeam(
                    id=row["team_id"], display_name=display_name, is_public=is_public
                )

            team_id = new_team_id(is_public=is_public)
            created = await self._storage.create_implicit_team(
                team_id=team_id,
                team_name=IMPLICIT_TEAM_PREFIX + uuid.uuid4().hex[:20],
                display_name=display_name,
                is_public=is_public,
            )
            if not created:
                # Another connection claimed the key between our read and write.
                row = await self._storage.get_implicit_team(display_name, is_public)
                if row is None:
                    raise RuntimeError(f"implicit team vanished: {display_name}")
                return ImplicitTeam(
                    id=row["team_id"], display_name=display_name, is_public=is_public
                )

        logger.info(
            "Created implicit team %s for %r (public=%s)", team_id, display_name, is_public
        )
        return ImplicitTeam(
            id=team_id, display_name=display_name, is_public=is_public, created=True
        )

    async def list_teams(self, *, implicit: bool | None = None) -> list[LoadedTeam]:
        rows = await self._storage.list_teams(implicit=implicit)
        return [_loaded_team(row) for row in rows]
