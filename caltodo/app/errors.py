from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    """Error raised by request handlers; rendered as JSON with its status."""

    def __init__(self, message: str, status: int, expose: bool = True):
        super().__init__(message)
        self.message = message
        self.status = status
        self.expose = expose


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized."):
        super().__init__(message, 403)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 409)


class BuildDirectoryNotFound(RuntimeError):
    """The compiled client bundle is missing; raised at startup, never caught."""

    def __init__(self, path: str):
        super().__init__(f"Could not find the build directory: {path}, make sure to build the client first")
        self.path = path


def get_error_status(error: BaseException) -> int:
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 500


def get_error_message(error: BaseException) -> str:
    if isinstance(error, AppError):
        message = error.message if error.expose else ""
    elif isinstance(error, HTTPException):
        message = error.description or ""
    else:
        message = ""
    if message.strip():
        return message
    return "Internal Server Error"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        status = get_error_status(error)
        if status >= 500:
            app.logger.exception("Request failed: %s %s", request.method, request.path)
        return jsonify({"message": get_error_message(error)}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        # HTML pages (client routes) keep werkzeug's default rendering
        if not request.path.startswith("/api"):
            return error
        return jsonify({"message": get_error_message(error)}), get_error_status(error)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal Server Error"}), 500
