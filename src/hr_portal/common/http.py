from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    """JSON success envelope used by every route."""
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    return jsonify(payload), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def to_date(value: Any, field: str) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid date for {field}: {value}")


def date_arg(name: str, default: Optional[date] = None) -> Optional[date]:
    return to_date(request.args.get(name), name) or default


def require_date(value: Any, field: str) -> date:
    parsed = to_date(value, field)
    if parsed is None:
        raise ValidationError(f"{field} is required")
    return parsed
