"""CLI entry point for folder-teams."""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from folder_teams.models.folder import FolderType

app = typer.Typer(
    name="folder-teams",
    help="Resolve folders to the teams that back them.",
    no_args_is_help=True,
)
console = Console()

DEFAULT_DB = Path.cwd() / ".folder-teams" / "teams.db"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


class PrivateBit(StrEnum):
    AUTO = "auto"
    TRUE = "true"
    FALSE = "false"


class TeamKind(StrEnum):
    ALL = "all"
    EXPLICIT = "explicit"
    IMPLICIT = "implicit"


def _ensure_db_dir(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _render(data, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.YAML:
        from folder_teams.export.yaml import render_yaml

        return render_yaml(data)
    from folder_teams.export.json import render_json

    return render_json(data)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution steps"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command()
def init(
    db: Path = typer.Option(DEFAULT_DB, envvar="FOLDER_TEAMS_DB", help="Path to SQLite database"),
) -> None:
    """Initialize a new team database."""
    from folder_teams.storage.sqlite import StorageEngine

    _ensure_db_dir(db)

    async def _init() -> None:
        engine = StorageEngine(db)
        await engine.initialize()
        await engine.close()

    asyncio.run(_init())
    console.print(f"[green]Initialized team database at {db}[/green]")


@app.command(name="create-team")
def create_team(
    name: str = typer.Argument(help="Team name, e.g. acme or acme.eng"),
    public: bool = typer.Option(False, "--public", help="Create a public team"),
    db: Path = typer.Option(DEFAULT_DB, envvar="FOLDER_TEAMS_DB", help="Path to SQLite database"),
) -> None:
    """Create an explicit team. Subteams need their parent to exist."""
    from folder_teams.errors import InvalidNameError, TeamExistsError, TeamNotFoundError
    from folder_teams.names.kbfs import parse_team_name
    from folder_teams.storage.sqlite import StorageEngine
    from folder_teams.teams.local import LocalTeamStore

    try:
        team_name = parse_team_name(name)
    except InvalidNameError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    _ensure_db_dir(db)

    async def _create() -> None:
        storage = StorageEngine(db)
        await storage.initialize()
        try:
            store = LocalTeamStore(storage)
            team = await store.create_team(team_name, is_public=public)
            visibility = "public" if team.is_public else "private"
            console.print(f"[green]Created {visibility} team {team.name}: {team.id}[/green]")
        except (TeamExistsError, TeamNotFoundError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        finally:
            await storage.close()

    asyncio.run(_create())


@app.command()
def resolve(
    name: str = typer.Argument(help="Folder name, e.g. /keybase/private/alice,bob"),
    folder_type: FolderType = typer.Option(FolderType.PRIVATE, "--type", help="Folder type"),
    private_bit: PrivateBit = typer.Option(
        PrivateBit.AUTO,
        "--private-bit",
        help="Privacy bit sent with the folder (auto: implied by --type)",
    ),
    timeout: float | None = typer.Option(None, help="Deadline for the whole resolution, in seconds"),
    fmt: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Output format"),
    db: Path = typer.Option(DEFAULT_DB, envvar="FOLDER_TEAMS_DB", help="Path to SQLite database"),
) -> None:
    """Resolve a folder to its team, creating implicit teams as needed."""
    from folder_teams.context import BACKGROUND, ResolveContext
    from folder_teams.errors import FolderTeamError
    from folder_teams.models.folder import Folder
    from folder_teams.names.formatter import CanonicalDisplayNameFormatter
    from folder_teams.names.kbfs import KBFSNameParser
    from folder_teams.resolver import FolderTeamResolver
    from folder_teams.storage.sqlite import StorageEngine
    from folder_teams.teams.local import LocalTeamStore

    if private_bit == PrivateBit.AUTO:
        private = folder_type != FolderType.PUBLIC
    else:
        private = private_bit == PrivateBit.TRUE
    folder = Folder(name=name, folder_type=folder_type, private=private)

    _ensure_db_dir(db)

    async def _resolve() -> None:
        storage = StorageEngine(db)
        await storage.initialize()
        try:
            store = LocalTeamStore(storage)
            resolver = FolderTeamResolver(
                parser=KBFSNameParser(),
                formatter=CanonicalDisplayNameFormatter(),
                team_loader=store,
                implicit_teams=store,
            )
            ctx = ResolveContext.with_timeout(timeout) if timeout is not None else BACKGROUND
            try:
                result = await resolver.resolve(folder, ctx)
            except FolderTeamError as e:
                console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
                raise typer.Exit(1)

            if fmt == OutputFormat.TEXT:
                console.print(f"[green]{result.team_id}[/green] ({result.visibility})")
            else:
                typer.echo(_render(result, fmt))
        finally:
            await storage.close()

    asyncio.run(_resolve())


@app.command()
def teams(
    kind: TeamKind = typer.Option(TeamKind.ALL, "--kind", help="Which teams to list"),
    fmt: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Output format"),
    db: Path = typer.Option(DEFAULT_DB, envvar="FOLDER_TEAMS_DB", help="Path to SQLite database"),
) -> None:
    """List explicit and implicit teams."""
    from folder_teams.storage.sqlite import StorageEngine
    from folder_teams.teams.local import LocalTeamStore

    _ensure_db_dir(db)

    async def _teams() -> None:
        storage = StorageEngine(db)
        await storage.initialize()
        try:
            implicit = None if kind == TeamKind.ALL else kind == TeamKind.IMPLICIT
            all_teams = await LocalTeamStore(storage).list_teams(implicit=implicit)
        finally:
            await storage.close()

        if fmt != OutputFormat.TEXT:
            typer.echo(_render(all_teams, fmt))
            return
        if not all_teams:
            console.print("[dim]No teams found.[/dim]")
            return
        for team in all_teams:
            label = "implicit" if team.implicit else "team"
            visibility = "public" if team.is_public else "private"
            console.print(f"  {escape(team.name)}  [dim]{label}, {visibility}[/dim]  {team.id}")

    asyncio.run(_teams())


if __name__ == "__main__":
    app()
