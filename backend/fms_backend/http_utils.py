from __future__ import annotations

from typing import Any

from flask import request


def json_body() -> dict[str, Any]:
    """Return the request's JSON object, or an empty dict for anything else."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return {}
