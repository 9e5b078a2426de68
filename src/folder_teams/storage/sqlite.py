"""SQLite persistence for explicit teams and the implicit-team index."""

from __future__ import annotations

from pathlib import Path

import aiosqlite

_SCHEMA = """
-- Teams (explicit and implicit share one ID space)
CREATE TABLE IF NOT EXISTS teams (
    id TEXT PRIMARY KEY,
    name TEXT UNIQUE NOT NULL,
    parent_id TEXT REFERENCES teams(id),
    is_public INTEGER NOT NULL DEFAULT 0,
    implicit INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Implicit teams keyed by canonical display name and publicness
CREATE TABLE IF NOT EXISTS implicit_teams (
    display_name TEXT NOT NULL,
    is_public INTEGER NOT NULL,
    team_id TEXT NOT NULL REFERENCES teams(id),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (display_name, is_public)
);
"""


class StorageEngine:
    """Async SQLite storage for teams."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open connection and create schema."""
        self._db = await aiosqlite.connect(str(self.db_path))
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(_SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("StorageEngine not initialized, call initialize() first")
        return self._db

    # ----- Teams -----

    async def insert_team(
        self,
        *,
        team_id: str,
        name: str,
        is_public: bool,
        implicit: bool = False,
        parent_id: str | None = None,
    ) -> None:
        """Insert a team. Raises aiosqlite.IntegrityError if the name is taken."""
        await self.db.execute(
            """INSERT INTO teams (id, name, parent_id, is_public, implicit)
               VALUES (?, ?, ?, ?, ?)""",
            (team_id, name, parent_id, int(is_public), int(implicit)),
        )
        await self.db.commit()

    async def get_team_by_name(self, name: str) -> dict | None:
        cursor = await self.db.execute("SELECT * FROM teams WHERE name = ?", (name,))
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def list_teams(self, *, implicit: bool | None = None) -> list[dict]:
        query = "SELECT * FROM teams WHERE 1=1"
        params: list = []
        if implicit is not None:
            query += " AND implicit = ?"
            params.append(int(implicit))
        query += " ORDER BY name"
        cursor = await self.db.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    # ----- Implicit teams -----

    async def get_implicit_team(self, display_name: str, is_public: bool) -> dict | None:
        cursor = await self.db.execute(
            """SELECT i.display_name, i.is_public, i.team_id, t.name AS team_name
               FROM implicit_teams i JOIN teams t ON t.id = i.team_id
               WHERE i.display_name = ? AND i.is_public = ?""",
            (display_name, int(is_public)),
        )
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def create_implicit_team(
        self, *, team_id: str, team_name: str, display_name: str, is_public: bool
    ) -> bool:
        """Claim (display_name, is_public) for a new team.

        Returns False without writing anything if another team already holds
        the key. Both rows are written in one transaction; any failure,
        cancellation included, rolls the claim back.
        """
        try:
            cursor = await self.db.execute(
                """INSERT INTO implicit_teams (display_name, is_public, team_id)
                   VALUES (?, ?, ?)
                   ON CONFLICT(display_name, is_public) DO NOTHING""",
                (display_name, int(is_public), team_id),
            )
            if cursor.rowcount != 1:
                await self.db.rollback()
                return False
            await self.db.execute(
                "INSERT INTO teams (id, name, is_public, implicit) VALUES (?, ?, ?, 1)",
                (team_id, team_name, int(is_public)),
            )
            await self.db.commit()
        except BaseException:
            await self.db.rollback()
            raise
        return True
