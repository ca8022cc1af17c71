"""
Request helpers shared by the API route modules
"""

from flask import request
from flask_login import current_user
from werkzeug.exceptions import BadRequest
from asset_registry.build import get_components


def caller() -> str:
    """Principal performing the current request"""
    return current_user.username


def components():
    return get_components()


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    return data


def require_string(data: dict, key: str, allow_empty: bool = True) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise BadRequest(f"'{key}' must be a string")
    if not allow_empty and not value.strip():
        raise BadRequest(f"'{key}' must not be empty")
    return value


def require_bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise BadRequest(f"'{key}' must be a boolean")
    return value
