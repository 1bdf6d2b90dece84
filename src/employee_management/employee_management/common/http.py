"""JSON envelope helpers and the app-wide error handlers."""
from __future__ import annotations

import logging
import traceback
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def request_data() -> dict[str, Any]:
    """Body fields from a JSON request or a (multipart) form."""
    if request.is_json:
        data = request.get_json(silent=True)
        return dict(data) if isinstance(data, dict) else {}
    return request.form.to_dict()


def ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        body: dict[str, Any] = {"success": False, "error": "Internal Server Error"}
        if app.config.get("DEBUG"):
            body["message"] = str(e)
            body["trace"] = traceback.format_exc()
        return jsonify(body), 500
