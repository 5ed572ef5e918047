from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Optional, Type, TypeVar

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFound,
    StorageUnavailable,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (ValidationError, 400),
)


def status_for(error: DomainError) -> int:
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return status
    return 409


def date_arg(name: str, default: Optional[date] = None) -> date:
    value = request.args.get(name)
    if not value:
        if default is None:
            raise ValidationError(f"Missing query parameter {name!r}")
        return default
    return parse_iso_date(value)


def enum_value(enum_cls: Type[E], value: Optional[str], default: Optional[E] = None) -> E:
    if not value:
        if default is None:
            raise ValidationError(f"Missing {enum_cls.__name__}")
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid value {value!r}, expected one of: {allowed}")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"success": False, "error": e.code, "message": str(e)}), status_for(e)

    @app.errorhandler(StorageUnavailable)
    def handle_storage_unavailable(e: StorageUnavailable):
        logger.error("storage unavailable on %s %s", request.method, request.path, exc_info=e)
        return jsonify({"success": False, "error": e.code, "message": str(e)}), 503

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "error").lower().replace(" ", "_")
        return jsonify({"success": False, "error": code, "message": e.description}), e.code
