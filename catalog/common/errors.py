import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import ValidationError
from quart import Quart, jsonify
from werkzeug.exceptions import HTTPException

from .result import ErrorKind, OperationResult

log = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred"


class CatalogError(Exception):
    status_code = 500


class InvalidOperationError(CatalogError):
    """Bad input or an operation that is not allowed in the current state."""

    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class UnauthorizedError(CatalogError):
    status_code = 401


_KIND_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.BUSINESS_RULE: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNEXPECTED: 500,
}


def status_for_exception(exc: BaseException) -> int:
    if isinstance(exc, CatalogError):
        return exc.status_code
    if isinstance(exc, HTTPException):
        return exc.code or 500
    if isinstance(exc, (ValueError, ValidationError)):
        return 400
    if isinstance(exc, KeyError):
        return 404
    if isinstance(exc, PermissionError):
        return 401
    return 500


def status_for_kind(kind: Optional[ErrorKind]) -> int:
    return _KIND_STATUS.get(kind, 500)


def error_envelope(message: str, status_code: int, errors: Optional[Iterable[str]] = None) -> dict:
    body = {
        "error": message,
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if errors is not None:
        body["errors"] = list(errors)
    return body


def result_error_response(result: OperationResult):
    """Translate a failed service result into a JSON response tuple."""
    status = status_for_kind(result.kind)
    messages = result.messages
    return jsonify(error_envelope("; ".join(messages), status, messages)), status


def register_error_handlers(app: Quart) -> None:
    @app.errorhandler(HTTPException)
    async def handle_http_exception(exc: HTTPException):
        status = exc.code or 500
        return jsonify(error_envelope(exc.description or exc.name, status)), status

    @app.errorhandler(ValidationError)
    async def handle_schema_error(exc: ValidationError):
        messages = [f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}" for e in exc.errors()]
        return jsonify(error_envelope("; ".join(messages), 400, messages)), 400

    @app.errorhandler(Exception)
    async def handle_exception(exc: Exception):
        status = status_for_exception(exc)
        if status >= 500:
            log.exception("An unhandled exception occurred")
            message = GENERIC_ERROR
        else:
            log.warning("Request failed with %s: %s", status, exc)
            message = str(exc.args[0]) if exc.args else exc.__class__.__name__
        return jsonify(error_envelope(message, status)), status
