import os
from typing import Final, Optional


def is_production_env() -> bool:
    return os.getenv("FLASK_ENV") == "production"


class Config:
    SECRET_KEY: Final[str] = os.getenv("SESSION_SECRET", "change-me-in-production")
    try:
        SQLALCHEMY_DATABASE_URI: Final[str] = os.environ["DATABASE_URL"]
    except KeyError:
        raise RuntimeError("DATABASE_URL environment variable is required (no sqlite fallback)")
    SQLALCHEMY_TRACK_MODIFICATIONS: Final[bool] = False
    SESSION_COOKIE_HTTPONLY: Final[bool] = True
    SESSION_COOKIE_SECURE: Final[bool] = os.getenv("FLASK_ENV") == "production"
    SESSION_COOKIE_SAMESITE: Final[str] = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    # Reject JSON / form bodies above 100 kB
    MAX_CONTENT_LENGTH: Final[int] = int(os.getenv("MAX_CONTENT_LENGTH", str(100 * 1024)))
    # Google sign-in (calendar scope). The redirect URI defaults to <host>/api/auth/google/callback.
    GOOGLE_CLIENT_ID: Final[str] = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_REDIRECT_URI: Final[str] = os.getenv("GOOGLE_REDIRECT_URI", "")
    # Compiled client bundle. Empty means <cwd>/dist/public.
    CLIENT_BUILD_DIR: Final[str] = os.getenv("CLIENT_BUILD_DIR", "")
    # Outside production the client is served by its own dev server (e.g. http://localhost:5173)
    CLIENT_DEV_SERVER_URL: Final[str] = os.getenv("CLIENT_DEV_SERVER_URL", "")
    MIGRATIONS_DIR: Final[str] = os.getenv("MIGRATIONS_DIR", "")
    # Flask-Limiter counters; use a shared store (e.g. redis://) when running several workers
    RATELIMIT_STORAGE_URI: Final[str] = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED: Final[bool] = True


def require_secret(value: Optional[str], name: str, min_length: int = 32) -> str:
    if not value:
        raise RuntimeError(f"{name} must be set and should be a strong, random secret")
    if len(value) < min_length:
        raise RuntimeError(f"{name} must be at least {min_length} characters long")
    return value


def check_production_secrets(config) -> None:
    """Fail fast when a production deployment runs with a weak session secret."""
    require_secret(config.get("SECRET_KEY"), "SESSION_SECRET")
