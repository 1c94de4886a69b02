from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, DomainError, NotFoundError, RepositoryError, ValidationError
from .datetime_utils import parse_iso_date


def status_for(exc: DomainError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, RepositoryError):
        return 503
    return 500


def error_response(exc: DomainError, status: Optional[int] = None):
    return jsonify({"success": False, "message": str(exc)}), status or status_for(exc)


def parse_day_arg(value: Optional[str], default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def request_payload() -> Mapping:
    """JSON object body, or the submitted form when the body is not JSON."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object body")
    return data
