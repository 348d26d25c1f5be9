"""JSON report exporter."""

from __future__ import annotations

import json

from pydantic import BaseModel


def render_json(result: BaseModel) -> str:
    """Render a snapshot or a blocked run as JSON string."""
    data = result.model_dump(mode="json")
    if "missing" in data:
        # Identifiers are what data-entry screens key on
        data["missing_identifiers"] = [f"{m['group']}.{m['path']}" for m in data["missing"]]
    return json.dumps(data, indent=2, ensure_ascii=False)
