from __future__ import annotations

# Top-level WSGI entry so `gunicorn wsgi:app` works when repository root is PYTHONPATH.
# Startup (migrations, routes, client assets) runs here, before the first request.
from caltodo.wsgi import app  # noqa: F401
