"""Tests for the KBFS folder-name parser."""

from datetime import date

import pytest

from folder_teams.errors import InvalidNameError
from folder_teams.models.team import MemberAssertion, TeamName
from folder_teams.names.kbfs import KBFSNameParser, parse_assertion, parse_team_name


@pytest.fixture
def parser() -> KBFSNameParser:
    return KBFSNameParser()


class TestTeamPath:
    def test_full_path(self, parser: KBFSNameParser) -> None:
        assert parser.parse_private_team_path("/keybase/team/acme") == TeamName(parts=("acme",))

    def test_subteam_path_lowercased(self, parser: KBFSNameParser) -> None:
        name = parser.parse_private_team_path(" /keybase/team/Acme.Eng/ ")
        assert name.parts == ("acme", "eng")
        assert str(name) == "acme.eng"
        assert not name.is_root
        assert name.parent() == TeamName(parts=("acme",))

    def test_bare_name(self, parser: KBFSNameParser) -> None:
        assert str(parser.parse_private_team_path("team1")) == "team1"

    def test_private_path_rejected(self, parser: KBFSNameParser) -> None:
        with pytest.raises(InvalidNameError, match="not a team folder"):
            parser.parse_private_team_path("/keybase/private/alice")

    @pytest.mark.parametrize(
        "path",
        ["/keybase/team", "/kbfs/team/acme", "/keybase/team/acme/extra"],
    )
    def test_malformed_paths(self, parser: KBFSNameParser, path: str) -> None:
        with pytest.raises(InvalidNameError):
            parser.parse_private_team_path(path)

    @pytest.mark.parametrize("raw", ["a", "_acme", "acme..eng", "acme-eng", "x" * 17])
    def test_invalid_team_names(self, raw: str) -> None:
        with pytest.raises(InvalidNameError):
            parse_team_name(raw)


class TestAssertions:
    def test_plain_user(self) -> None:
        assert parse_assertion("Alice") == MemberAssertion(user="alice")

    def test_social_assertion(self) -> None:
        assert parse_assertion("bob@twitter") == MemberAssertion(user="bob", service="twitter")

    def test_keybase_service_is_implied(self) -> None:
        assert parse_assertion("alice@keybase") == MemberAssertion(user="alice")

    def test_email_assertion(self) -> None:
        assertion = parse_assertion("[carol@example.com]@email")
        assert assertion.user == "[carol@example.com]"
        assert str(assertion) == "[carol@example.com]@email"

    def test_bracket_without_service(self) -> None:
        with pytest.raises(InvalidNameError, match="needs a service"):
            parse_assertion("[carol@example.com]")

    @pytest.mark.parametrize("raw", ["", "alice bob", "alice@", "alice@twitter@x"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(InvalidNameError):
            parse_assertion(raw)


class TestImplicitName:
    def test_private_writers_and_readers(self, parser: KBFSNameParser) -> None:
        name = parser.parse_implicit_team_name("/keybase/private/alice,bob#carol")
        assert name.is_public is False
        assert [str(w) for w in name.writers] == ["alice", "bob"]
        assert [str(r) for r in name.readers] == ["carol"]
        assert name.conflict is None

    def test_public(self, parser: KBFSNameParser) -> None:
        name = parser.parse_implicit_team_name("/keybase/public/alice,bob@github")
        assert name.is_public is True
        assert name.writers[1] == MemberAssertion(user="bob", service="github")

    def test_bare_display_name_is_private(self, parser: KBFSNameParser) -> None:
        assert parser.parse_implicit_team_name("alice").is_public is False

    def test_duplicates_collapsed(self, parser: KBFSNameParser) -> None:
        name = parser.parse_implicit_team_name("alice,bob,alice#bob,carol,carol")
        assert [str(w) for w in name.writers] == ["alice", "bob"]
        assert [str(r) for r in name.readers] == ["carol"]

    def test_conflict_suffix(self, parser: KBFSNameParser) -> None:
        name = parser.parse_implicit_team_name(
            "/keybase/private/alice,bob (conflicted copy 2017-03-04 #2)"
        )
        assert name.conflict is not None
        assert name.conflict.copied_on == date(2017, 3, 4)
        assert name.conflict.number == 2
        assert [str(w) for w in name.writers] == ["alice", "bob"]

    def test_bad_conflict_date(self, parser: KBFSNameParser) -> None:
        with pytest.raises(InvalidNameError, match="conflict date"):
            parser.parse_implicit_team_name("alice (conflicted copy 2017-13-40 #1)")

    def test_public_readers_rejected(self, parser: KBFSNameParser) -> None:
        with pytest.raises(InvalidNameError, match="cannot list readers"):
            parser.parse_implicit_team_name("/keybase/public/alice#bob")

    def test_writers_required(self, parser: KBFSNameParser) -> None:
        with pytest.raises(InvalidNameError, match="at least one writer"):
            parser.parse_implicit_team_name("#bob")

    @pytest.mark.parametrize("name", ["alice,,bob", "alice#", "/keybase/team/acme"])
    def test_invalid(self, parser: KBFSNameParser, name: str) -> None:
        with pytest.raises(InvalidNameError):
            parser.parse_implicit_team_name(name)
