from __future__ import annotations
from urllib.parse import urlencode

from flask import Blueprint, current_app, jsonify, redirect, request, session

from .. import api_limit, auth_limit

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_SCOPES = (
    "profile",
    "email",
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
)


def _redirect_uri() -> str:
    configured = current_app.config.get("GOOGLE_REDIRECT_URI")
    if configured:
        return configured
    return f"{request.url_root.rstrip('/')}/api/auth/google/callback"


def build_google_auth_url(client_id: str, redirect_uri: str) -> str:
    params = {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": " ".join(GOOGLE_SCOPES),
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


@auth_bp.route("/google", methods=["GET"])
@api_limit
@auth_limit
def google_sign_in():
    client_id = current_app.config.get("GOOGLE_CLIENT_ID")
    if not client_id:
        current_app.logger.error("Google OAuth client id not configured (GOOGLE_CLIENT_ID missing)")
        return jsonify({"error": "Google OAuth not configured on server"}), 500
    return redirect(build_google_auth_url(client_id, _redirect_uri()))


@auth_bp.route("/user", methods=["GET"])
@api_limit
def current_user():
    user_id = session.get("user_id")
    if user_id is None:
        return jsonify({"error": "Not authenticated"}), 401
    return jsonify({"id": user_id})


@auth_bp.route("/logout", methods=["POST"])
@api_limit
def logout():
    session.clear()
    return jsonify({"success": True})
