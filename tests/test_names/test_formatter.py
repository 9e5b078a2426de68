"""Tests for canonical implicit-team display names."""

from datetime import date

import pytest

from folder_teams.context import BACKGROUND
from folder_teams.models.team import ConflictInfo, ImplicitTeamDisplayName, MemberAssertion
from folder_teams.names.formatter import CanonicalDisplayNameFormatter
from folder_teams.names.kbfs import KBFSNameParser


def _members(*names: str) -> tuple[MemberAssertion, ...]:
    return tuple(MemberAssertion(user=n) for n in names)


@pytest.fixture
def formatter() -> CanonicalDisplayNameFormatter:
    return CanonicalDisplayNameFormatter()


@pytest.mark.asyncio
async def test_writers_sorted(formatter: CanonicalDisplayNameFormatter) -> None:
    name = ImplicitTeamDisplayName(is_public=False, writers=_members("carol", "alice"))
    assert await formatter.format(name, BACKGROUND) == "alice,carol"


@pytest.mark.asyncio
async def test_readers_after_hash(formatter: CanonicalDisplayNameFormatter) -> None:
    name = ImplicitTeamDisplayName(
        is_public=False,
        writers=_members("bob"),
        readers=_members("zed", "alice", "bob"),
    )
    assert await formatter.format(name, BACKGROUND) == "bob#alice,zed"


@pytest.mark.asyncio
async def test_conflict_suffix(formatter: CanonicalDisplayNameFormatter) -> None:
    name = ImplicitTeamDisplayName(
        is_public=False,
        writers=_members("alice"),
        conflict=ConflictInfo(copied_on=date(2017, 3, 4), number=2),
    )
    assert await formatter.format(name, BACKGROUND) == "alice (conflicted copy 2017-03-04 #2)"


@pytest.mark.asyncio
async def test_social_assertions(formatter: CanonicalDisplayNameFormatter) -> None:
    name = ImplicitTeamDisplayName(
        is_public=True,
        writers=(MemberAssertion(user="bob", service="twitter"), MemberAssertion(user="alice")),
    )
    assert await formatter.format(name, BACKGROUND) == "alice,bob@twitter"


@pytest.mark.asyncio
async def test_no_writers(formatter: CanonicalDisplayNameFormatter) -> None:
    name = ImplicitTeamDisplayName(is_public=False, writers=())
    with pytest.raises(ValueError, match="without writers"):
        await formatter.format(name, BACKGROUND)


@pytest.mark.asyncio
async def test_member_order_does_not_change_key(formatter: CanonicalDisplayNameFormatter) -> None:
    parser = KBFSNameParser()
    first = await formatter.format(parser.parse_implicit_team_name("bob,alice#dan,carol"), BACKGROUND)
    second = await formatter.format(parser.parse_implicit_team_name("alice,bob#carol,dan"), BACKGROUND)
    assert first == second == "alice,bob#carol,dan"
