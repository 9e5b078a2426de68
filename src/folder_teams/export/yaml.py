"""YAML rendering of resolution results and team listings."""

from __future__ import annotations

import yaml
from pydantic import BaseModel


def render_yaml(data: BaseModel | list[BaseModel]) -> str:
    if isinstance(data, BaseModel):
        payload = data.model_dump(mode="json")
    else:
        payload = [item.model_dump(mode="json") for item in data]
    return yaml.dump(payload, default_flow_style=False, sort_keys=False)
