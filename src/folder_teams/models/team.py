"""Team names, member assertions, and the collaborator-facing team views.

Team IDs are 32 hex characters. The last byte encodes the team class:

    24  private root team      25  public root team
    2e  private subteam        2f  public subteam
"""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict

_ROOT_SUFFIX = {False: "24", True: "25"}
_SUBTEAM_SUFFIX = {False: "2e", True: "2f"}


def new_team_id(*, is_public: bool, is_subteam: bool = False) -> str:
    suffix = (_SUBTEAM_SUFFIX if is_subteam else _ROOT_SUFFIX)[is_public]
    return uuid.uuid4().hex[:30] + suffix


class TeamName(BaseModel):
    """Dot-separated hierarchical team name, e.g. ``acme.eng.infra``."""

    model_config = ConfigDict(frozen=True)

    parts: tuple[str, ...]

    @property
    def is_root(self) -> bool:
        return len(self.parts) == 1

    def parent(self) -> TeamName | None:
        if self.is_root:
            return None
        return TeamName(parts=self.parts[:-1])

    def __str__(self) -> str:
        return ".".join(self.parts)


class MemberAssertion(BaseModel):
    """A claim about one member: a bare username or ``user@service``."""

    model_config = ConfigDict(frozen=True)

    user: str
    service: str | None = None

    def __str__(self) -> str:
        if self.service is None:
            return self.user
        return f"{self.user}@{self.service}"


class ConflictInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    copied_on: date
    number: int

    def __str__(self) -> str:
        return f"(conflicted copy {self.copied_on.isoformat()} #{self.number})"


class ImplicitTeamDisplayName(BaseModel):
    """Parsed member assertions of an implicit team folder."""

    model_config = ConfigDict(frozen=True)

    is_public: bool
    writers: tuple[MemberAssertion, ...]
    readers: tuple[MemberAssertion, ...] = ()
    conflict: ConflictInfo | None = None


class LoadedTeam(BaseModel):
    """What a team loader reports about an explicit team."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    is_public: bool
    implicit: bool = False


class ImplicitTeam(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    is_public: bool
    created: bool = False  # True only for the call that created the team
