from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from flask import Flask, g, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from .config import Config, check_production_secrets, is_production_env
from .database import MIGRATIONS_DIR
from .server import HttpServer

db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

# Shared by every /api route, per client address
api_limit = limiter.shared_limit("120 per minute", scope="api")
# Sign-in entry points
auth_limit = limiter.limit("25 per 15 minutes")

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


@dataclass(frozen=True)
class AppContext:
    app: Flask
    http_server: HttpServer
    is_production: bool


def _configure_logging(app: Flask) -> None:
    app.logger.setLevel(logging.INFO)
    # every Flask instance built from this package shares one logger
    for existing in app.logger.handlers:
        formatter = existing.formatter
        if isinstance(existing, logging.StreamHandler) and formatter is not None and formatter._fmt == LOG_FORMAT:
            return
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app.logger.addHandler(handler)


def _ensure_sqlite_dir(app: Flask) -> None:
    # sqlite:////absolute/path or sqlite:///relative/path
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not (db_uri.startswith("sqlite:") and "///" in db_uri):
        return
    path_part = db_uri.split("///", 1)[1]
    if not path_part or path_part == ":memory:":
        return
    parent = Path(path_part).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        app.logger.warning("Could not create SQLite directory %s", parent)


def _apply_common_middleware(app: Flask, is_production: bool) -> None:
    script_src = ["'self'"]
    if not is_production:
        script_src.append("'unsafe-eval'")
    csp = "; ".join(
        [
            "default-src 'self'",
            "base-uri 'self'",
            "form-action 'self'",
            "frame-ancestors 'none'",
            "object-src 'none'",
            "img-src 'self' data: blob:",
            "font-src 'self' data:",
            "style-src 'self' 'unsafe-inline'",
            f"script-src {' '.join(script_src)}",
            "connect-src 'self' ws: wss:",
        ]
    )

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def set_security_headers(response):
        response.headers.setdefault("Content-Security-Policy", csp)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        if is_production:
            response.headers.setdefault("Strict-Transport-Security", "max-age=15552000; includeSubDomains")
        return response

    @app.after_request
    def log_api_request(response):
        if request.path.startswith("/api"):
            started = g.get("request_started")
            duration = int((time.perf_counter() - started) * 1000) if started is not None else 0
            app.logger.info("%s %s %s in %dms", request.method, request.path, response.status_code, duration)
        return response


def create_app(config=None) -> AppContext:
    """Build the Flask app and its (not yet listening) server.

    The production flag is read from the environment here, once, and carried on the
    returned context for the rest of the bootstrap.
    """
    is_production = is_production_env()
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config or Config)

    _configure_logging(app)
    if is_production and not app.config.get("TESTING"):
        check_production_secrets(app.config)
    _ensure_sqlite_dir(app)

    db.init_app(app)
    migrate.init_app(app, db, directory=app.config.get("MIGRATIONS_DIR") or MIGRATIONS_DIR)
    limiter.init_app(app)
    _apply_common_middleware(app, is_production)

    from .cli import caltodo_cli

    app.cli.add_command(caltodo_cli)

    return AppContext(app=app, http_server=HttpServer(app), is_production=is_production)


def configure_app(
    context: AppContext,
    *,
    run_migrations: Optional[Callable[[], None]] = None,
    register_routes: Optional[Callable[[HttpServer, Flask], object]] = None,
    serve_static: Optional[Callable[[Flask], None]] = None,
    setup_dev_client: Optional[Callable[[HttpServer, Flask], None]] = None,
) -> None:
    """Run the startup sequence: migrations, routes, error handlers, then client assets.

    Each stage finishes before the next one starts; an exception from any stage
    propagates and the remaining stages are skipped. Collaborators default to this
    package's implementations and can be swapped for test doubles.
    """
    from . import database
    from . import dev, routes, static
    from .errors import register_error_handlers

    app = context.app
    if run_migrations is None:
        run_migrations = lambda: database.run_migrations(app)  # noqa: E731
    register_routes = register_routes or routes.register_routes
    serve_static = serve_static or static.serve_static
    setup_dev_client = setup_dev_client or dev.setup_dev_client

    run_migrations()
    register_routes(context.http_server, app)
    register_error_handlers(app)

    if context.is_production:
        serve_static(app)
    else:
        setup_dev_client(context.http_server, app)


def start_server(config=None) -> HttpServer:
    context = create_app(config)
    configure_app(context)

    port = int(os.getenv("PORT") or "5000")
    context.http_server.listen(host="0.0.0.0", port=port)
    context.app.logger.info("serving on port %d", context.http_server.port)
    return context.http_server
