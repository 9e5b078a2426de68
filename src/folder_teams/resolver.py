"""Folder-to-team resolution.

Routes a folder descriptor to the right team subsystem and checks that what
comes back agrees with what the caller asked for:

    PRIVATE / PUBLIC folder  ->  implicit team keyed by its member set
    TEAM folder              ->  explicit, named team (private only)

The visibility in every result is taken from the folder's privacy bit, never
from the team subsystem, so a caller is never handed a team labelled with a
visibility it did not request.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

from folder_teams.context import BACKGROUND, ResolveContext
from folder_teams.errors import (
    ConsistencyError,
    FolderTeamError,
    FormatError,
    LookupCreateError,
    NameParseError,
    TeamLoadError,
    UnrecognizedKindError,
    UnsupportedError,
    VisibilityMismatchError,
)
from folder_teams.models.folder import Folder, FolderType, TeamIDWithVisibility, TLFVisibility
from folder_teams.names.base import DisplayNameFormatter, NameParser
from folder_teams.teams.base import ImplicitTeamResolver, TeamLoader

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _bounded(
    ctx: ResolveContext, error_cls: type[FolderTeamError], what: str, call: Awaitable[T]
) -> T:
    """Await a collaborator call under the context deadline, classifying failures."""
    try:
        async with ctx.bounded():
            return await call
    except Exception as exc:
        raise error_cls(f"{what}: {str(exc) or type(exc).__name__}") from exc


class FolderTeamResolver:
    """Resolves folders to team IDs. Stateless; safe to share across tasks."""

    def __init__(
        self,
        *,
        parser: NameParser,
        formatter: DisplayNameFormatter,
        team_loader: TeamLoader,
        implicit_teams: ImplicitTeamResolver,
    ) -> None:
        self._parser = parser
        self._formatter = formatter
        self._team_loader = team_loader
        self._implicit_teams = implicit_teams

    async def resolve(
        self, folder: Folder, ctx: ResolveContext | None = None
    ) -> TeamIDWithVisibility:
        """Look up (or create, for implicit teams) the team backing ``folder``.

        Raises a FolderTeamError subclass describing why resolution failed.
        """
        if ctx is None:
            ctx = BACKGROUND
        logger.debug(
            "resolve(%s, type:%s, private:%s)", folder.name, folder.folder_type, folder.private
        )
        try:
            result = await self._dispatch(folder, ctx)
        except FolderTeamError as exc:
            logger.debug("resolve(%s) failed: %s", folder.name, exc)
            raise
        logger.debug("resolve(%s) -> %s %s", folder.name, result.team_id, result.visibility)
        return result

    async def _dispatch(self, folder: Folder, ctx: ResolveContext) -> TeamIDWithVisibility:
        match folder.folder_type:
            case FolderType.PRIVATE:
                if not folder.private:
                    raise ConsistencyError("folder type PRIVATE but private bit is false")
                return await self._resolve_implicit_team(folder, ctx)
            case FolderType.PUBLIC:
                if folder.private:
                    raise ConsistencyError("folder type PUBLIC but private bit is true")
                return await self._resolve_implicit_team(folder, ctx)
            case FolderType.TEAM:
                return await self._resolve_team(folder, ctx)
            case _:
                raise UnrecognizedKindError(folder.folder_type)

    async def _resolve_team(self, folder: Folder, ctx: ResolveContext) -> TeamIDWithVisibility:
        if not folder.private:
            raise UnsupportedError("public team-backed folders are not supported")

        try:
            team_name = self._parser.parse_private_team_path(folder.name)
        except Exception as exc:
            raise NameParseError(f"parse team folder {folder.name!r}: {exc}") from exc

        # No forced repoll: a subteam renamed concurrently may load stale or
        # fail here. Accepted, rather than repolling on every resolution.
        team = await _bounded(
            ctx,
            TeamLoadError,
            f"load team {team_name}",
            self._team_loader.load(team_name, force_repoll=False, ctx=ctx),
        )

        if folder.private == team.is_public:
            raise VisibilityMismatchError(
                folder_public=not folder.private, team_public=team.is_public
            )
        return TeamIDWithVisibility(
            team_id=team.id, visibility=TLFVisibility.from_private_bit(folder.private)
        )

    async def _resolve_implicit_team(
        self, folder: Folder, ctx: ResolveContext
    ) -> TeamIDWithVisibility:
        visibility = TLFVisibility.from_private_bit(folder.private)

        try:
            assertions = self._parser.parse_implicit_team_name(folder.name)
        except Exception as exc:
            raise NameParseError(f"parse folder {folder.name!r}: {exc}") from exc

        lookup_name = await _bounded(
            ctx,
            FormatError,
            f"format display name for {folder.name!r}",
            self._formatter.format(assertions, ctx),
        )

        team = await _bounded(
            ctx,
            LookupCreateError,
            f"lookup or create implicit team {lookup_name!r}",
            self._implicit_teams.lookup_or_create(
                lookup_name, is_public=not folder.private, ctx=ctx
            ),
        )
        return TeamIDWithVisibility(team_id=team.id, visibility=visibility)
