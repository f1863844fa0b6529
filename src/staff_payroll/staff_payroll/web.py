"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Type, TypeVar

from flask import g, jsonify, request, session

from .common.datetime_utils import parse_iso_date
from .core.exceptions import AuthenticationError, ValidationError
from .container import Container

E = TypeVar("E", bound=Enum)


def to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
        role = getattr(type(value), "role", None)
        if isinstance(role, Enum):
            data["role"] = role.value
        return data
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [to_json(v) for v in value]
        return sorted(items) if isinstance(value, (set, frozenset)) else items
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    return value


def json_response(value: Any, status: int = 200):
    return jsonify(to_json(value)), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_date_field(value: Any, field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    return parse_iso_date(str(value))


def login_required(container: Container):
    """Resolve ``session['user_id']`` (set by the auth layer) into ``g.actor``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = session.get("user_id")
            actor = container.users_repo.get_by_id(int(user_id)) if user_id is not None else None
            if actor is None:
                raise AuthenticationError("Please log in to continue")
            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    return decorator
