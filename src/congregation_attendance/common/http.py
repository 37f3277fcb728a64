from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..auth.identity import Identity
from ..auth.tokens import TokenDecoder
from ..core.enums import Cohort
from ..core.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .logging import get_logger

logger = get_logger(__name__)

_STATUS = (
    (UnauthorizedError, 401, "unauthorized"),
    (ForbiddenError, 403, "forbidden"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
    (ValidationError, 400, "validation_error"),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status, kind in _STATUS:
            if isinstance(e, exc_type):
                payload: dict[str, Any] = {"error": kind, "message": str(e)}
                if isinstance(e, ForbiddenError):
                    payload["role"] = e.role
                return jsonify(payload), status
        return jsonify({"error": "domain_error", "message": str(e)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Routing errors (404, 405, ...) keep their own status.
        if isinstance(e, HTTPException):
            return jsonify({"error": "http_error", "message": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "internal_error", "message": "Internal server error"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_cohort(value: str) -> Cohort:
    try:
        return Cohort(value)
    except ValueError:
        raise NotFoundError(f"Unknown cohort: {value}")


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None or value == "":
        return None
    v = value.strip().lower()
    if v in {"1", "true", "yes"}:
        return True
    if v in {"0", "false", "no"}:
        return False
    raise ValidationError(f"Invalid boolean: {value}")


def parse_int(value: Optional[str], field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer")


def current_caller(decoder: TokenDecoder) -> Optional[Identity]:
    """Identity from the request's bearer token, or None."""
    return decoder.from_header(request.headers.get("Authorization"))
