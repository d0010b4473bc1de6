from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request

from ..core.exceptions import (
    AuthenticationFailed,
    AuthorizationError,
    DomainError,
    InvalidKioskTransition,
    MarkInProgress,
    NotFound,
    NotPending,
    PersistenceUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

ADMIN_SECRET_HEADER = "X-Admin-Secret"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (InvalidKioskTransition, 400),
    (AuthenticationFailed, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (NotPending, 409),
    (MarkInProgress, 409),
    (PersistenceUnavailable, 503),
)


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        status = status_for(exc)
        payload = {"success": False, "message": str(exc)}
        if isinstance(exc, PersistenceUnavailable):
            payload["retry"] = True
        return jsonify(payload), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Se esperaba un cuerpo JSON")
    return data


def admin_required(container):
    """Authenticate the ``X-Admin-Secret`` header; the role lands in ``g.current_role``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_role = container.admin_auth.authenticate(request.headers.get(ADMIN_SECRET_HEADER, ""))
            return view(*args, **kwargs)

        return wrapper

    return decorator
