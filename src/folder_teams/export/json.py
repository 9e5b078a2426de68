"""JSON rendering of resolution results and team listings."""

from __future__ import annotations

import json

from pydantic import BaseModel


def render_json(data: BaseModel | list[BaseModel]) -> str:
    """Render one model or a list of models as indented JSON."""
    if isinstance(data, BaseModel):
        return data.model_dump_json(indent=2)
    return json.dumps([item.model_dump(mode="json") for item in data], indent=2)
