"""Serve the compiled single-page client in production."""
from __future__ import annotations

import os

from flask import Flask, abort, jsonify, request, send_from_directory
from werkzeug.exceptions import NotFound

from .errors import BuildDirectoryNotFound, get_error_message

ENTRY_DOCUMENT = "index.html"
# every method falls through to the client, as an unmatched route would; OPTIONS stays automatic
CLIENT_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_build_dir(app: Flask) -> str:
    return os.path.abspath(app.config.get("CLIENT_BUILD_DIR") or os.path.join(os.getcwd(), "dist", "public"))


def _is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


def serve_static(app: Flask) -> None:
    """Mount the client build on `app`.

    Two layers are added, in this order:

    1. catch-all file routes answering any request that names a real file in the
       build directory. Werkzeug matches converter rules after static ones, so
       routes registered earlier keep precedence over build files;
    2. a 404 handler returning the entry document for everything still unmatched,
       so client-side routes resolve. `/api` paths keep a JSON 404.

    Both run inside Flask, so `after_request` hooks (security headers, request log)
    apply to client responses too.

    Raises `BuildDirectoryNotFound` without touching `app` when the build is missing.
    """
    build_dir = get_build_dir(app)
    if not os.path.isdir(build_dir):
        raise BuildDirectoryNotFound(build_dir)

    def client_static(path: str):
        if not path or request.method not in ("GET", "HEAD"):
            abort(404)
        # raises NotFound for missing files and paths escaping build_dir
        return send_from_directory(build_dir, path)

    def client_fallback(error: NotFound):
        if _is_api_path(request.path):
            return jsonify({"message": get_error_message(error)}), 404
        return send_from_directory(build_dir, ENTRY_DOCUMENT)

    app.add_url_rule("/", endpoint="client_static", view_func=client_static, defaults={"path": ""}, methods=CLIENT_METHODS)
    app.add_url_rule("/<path:path>", endpoint="client_static", view_func=client_static, methods=CLIENT_METHODS)
    app.register_error_handler(404, client_fallback)
    app.logger.info("Serving client build from %s", build_dir)
