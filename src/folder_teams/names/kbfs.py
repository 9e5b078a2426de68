"""Default parser for KBFS-style folder paths.

    /keybase/team/acme.eng                 -> TeamName(acme, eng)
    /keybase/private/alice,bob#carol       -> writers alice, bob; reader carol
    /keybase/public/alice,bob@twitter      -> public, writers alice, bob@twitter

Bare names without the ``/keybase/<type>/`` prefix are accepted too: a bare
team name for team folders, and a bare display name (taken as private) for
implicit-team folders.
"""

from __future__ import annotations

import re
from datetime import date

from folder_teams.errors import InvalidNameError
from folder_teams.models.team import (
    ConflictInfo,
    ImplicitTeamDisplayName,
    MemberAssertion,
    TeamName,
)
from folder_teams.names.base import NameParser

_TEAM_PART = re.compile(r"^[a-z0-9][a-z0-9_]{1,15}$")
_ASSERTION = re.compile(r"^(?P<user>\[[^\[\]\s]+\]|[a-z0-9_.\-]+)(?:@(?P<service>[a-z]+))?$")
_CONFLICT = re.compile(
    r"^(?P<members>.*?) \(conflicted copy (?P<date>\d{4}-\d{2}-\d{2}) #(?P<number>\d+)\)$"
)


def _split_path(name: str) -> tuple[str | None, str]:
    """Return (folder type segment, final component). Type is None for bare names."""
    name = name.strip().removesuffix("/")
    if not name.startswith("/"):
        return None, name
    components = name.split("/")
    # ["", "keybase", <type>, <name>]
    if len(components) != 4 or components[1] != "keybase":
        raise InvalidNameError(f"invalid folder path: {name!r}")
    return components[2], components[3]


def parse_team_name(raw: str) -> TeamName:
    parts = tuple(raw.lower().split("."))
    for part in parts:
        if not _TEAM_PART.match(part):
            raise InvalidNameError(f"invalid team name part {part!r} in {raw!r}")
    return TeamName(parts=parts)


def parse_assertion(raw: str) -> MemberAssertion:
    raw = raw.strip().lower()
    match = _ASSERTION.match(raw)
    if not match:
        raise InvalidNameError(f"invalid member assertion: {raw!r}")
    user, service = match["user"], match["service"]
    if user.startswith("[") and service is None:
        raise InvalidNameError(f"bracketed assertion needs a service: {raw!r}")
    if service == "keybase":
        service = None
    return MemberAssertion(user=user, service=service)


def _parse_members(raw: str) -> list[MemberAssertion]:
    members: list[MemberAssertion] = []
    for chunk in raw.split(","):
        assertion = parse_assertion(chunk)
        if assertion not in members:
            members.append(assertion)
    return members


def parse_display_name(raw: str, *, is_public: bool) -> ImplicitTeamDisplayName:
    conflict = None
    match = _CONFLICT.match(raw)
    if match:
        raw = match["members"]
        try:
            copied_on = date.fromisoformat(match["date"])
        except ValueError as exc:
            raise InvalidNameError(f"invalid conflict date in {raw!r}") from exc
        conflict = ConflictInfo(copied_on=copied_on, number=int(match["number"]))

    writers_raw, sep, readers_raw = raw.partition("#")
    if not writers_raw.strip():
        raise InvalidNameError("an implicit team needs at least one writer")
    writers = _parse_members(writers_raw)

    readers: list[MemberAssertion] = []
    if sep:
        if is_public:
            raise InvalidNameError("public folders cannot list readers")
        readers = [r for r in _parse_members(readers_raw) if r not in writers]

    return ImplicitTeamDisplayName(
        is_public=is_public,
        writers=tuple(writers),
        readers=tuple(readers),
        conflict=conflict,
    )


class KBFSNameParser(NameParser):
    def parse_private_team_path(self, name: str) -> TeamName:
        folder_type, raw = _split_path(name)
        if folder_type not in (None, "team"):
            raise InvalidNameError(f"not a team folder: {name!r}")
        return parse_team_name(raw)

    def parse_implicit_team_name(self, name: str) -> ImplicitTeamDisplayName:
        folder_type, raw = _split_path(name)
        if folder_type is None or folder_type == "private":
            return parse_display_name(raw, is_public=False)
        if folder_type == "public":
            return parse_display_name(raw, is_public=True)
        raise InvalidNameError(f"not a private or public folder: {name!r}")
