"""Folder descriptors and the team identity they resolve to."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class FolderType(StrEnum):
    """Declared category of a folder.

    UNKNOWN is the zero value a deserialized descriptor can carry; it is never
    resolvable."""

    UNKNOWN = "unknown"
    PRIVATE = "private"
    PUBLIC = "public"
    TEAM = "team"


class TLFVisibility(StrEnum):
    PRIVATE = "private"
    PUBLIC = "public"

    @classmethod
    def from_private_bit(cls, private: bool) -> TLFVisibility:
        return cls.PRIVATE if private else cls.PUBLIC


class Folder(BaseModel):
    """A folder as named by the caller. The privacy bit is supplied independently
    of the folder type and is checked against it, never corrected."""

    model_config = ConfigDict(frozen=True)

    name: str
    folder_type: FolderType
    private: bool


class TeamIDWithVisibility(BaseModel):
    """Resolution result. Visibility always mirrors the requesting folder's bit."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    visibility: TLFVisibility
