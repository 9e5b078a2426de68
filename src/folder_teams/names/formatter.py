"""Canonical display names for implicit teams.

The canonical form is the stable lookup key of an implicit team: members in
sorted order, so ``bob,alice`` and ``alice,bob`` name the same team.
"""

from __future__ import annotations

from folder_teams.context import ResolveContext
from folder_teams.models.team import ImplicitTeamDisplayName, MemberAssertion
from folder_teams.names.base import DisplayNameFormatter


def _join(members: list[MemberAssertion]) -> str:
    return ",".join(sorted({str(m) for m in members}))


class CanonicalDisplayNameFormatter(DisplayNameFormatter):
    async def format(self, display_name: ImplicitTeamDisplayName, ctx: ResolveContext) -> str:
        if not display_name.writers:
            raise ValueError("cannot format an implicit team without writers")

        writers = list(display_name.writers)
        readers = [r for r in display_name.readers if r not in writers]

        name = _join(writers)
        if readers:
            name += "#" + _join(readers)
        if display_name.conflict is not None:
            name += f" {display_name.conflict}"
        return name
