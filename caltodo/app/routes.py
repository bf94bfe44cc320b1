from __future__ import annotations

from flask import Blueprint, Flask, jsonify

from . import api_limit
from .server import HttpServer

health_bp = Blueprint("health", __name__)


# Kubernetes readiness/liveness check
@health_bp.route("/health", methods=["GET"])
def health_check():
    return ("OK", 200)


@health_bp.route("/api/health", methods=["GET"])
@api_limit
def api_health():
    return jsonify({"status": "ok"})


def register_routes(http_server: HttpServer, app: Flask) -> HttpServer:
    """Attach every HTTP handler to `app`. Must run before the client catch-all is mounted."""
    from .auth.routes import auth_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.logger.info("Registered %d routes", len(list(app.url_map.iter_rules())))
    return http_server
