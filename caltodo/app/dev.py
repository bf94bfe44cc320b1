from __future__ import annotations

from flask import Flask, abort, redirect, request

from .server import HttpServer


def setup_dev_client(http_server: HttpServer, app: Flask) -> None:
    """Development replacement for `serve_static`: hand client routes to the bundler's dev server."""
    dev_url = (app.config.get("CLIENT_DEV_SERVER_URL") or "").rstrip("/")
    if not dev_url:
        app.logger.warning("CLIENT_DEV_SERVER_URL is not set; only API routes are served")
        return

    def dev_client(path: str):
        if path == "api" or path.startswith("api/"):
            abort(404)
        target = f"{dev_url}/{path}"
        if request.query_string:
            target = f"{target}?{request.query_string.decode()}"
        return redirect(target, code=307)

    app.add_url_rule("/", endpoint="dev_client", view_func=dev_client, defaults={"path": ""})
    app.add_url_rule("/<path:path>", endpoint="dev_client", view_func=dev_client)
    app.logger.info("Redirecting client routes to %s", dev_url)
