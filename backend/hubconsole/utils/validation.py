"""Request body helpers giving consistent 400 semantics for JSON input."""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional
from flask import abort, request


def json_object() -> Dict[str, Any]:
    """Request body as a dict. A missing or unparsable body reads as {}; arrays and scalars abort with 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description='request body must be a JSON object')
    return data


def optional_str(data: Mapping[str, Any], name: str) -> Optional[str]:
    """``data[name]`` when it is a non-empty string, None when absent/null, else 400."""
    val = data.get(name)
    if val is None:
        return None
    if not isinstance(val, str) or not val:
        abort(400, description=f'{name} must be a non-empty string')
    return val

__all__ = ['json_object', 'optional_str']
