from __future__ import annotations

# WSGI entry point for gunicorn: `gunicorn caltodo.wsgi:app`.
# A failing startup stage (migrations, missing client build) raises here and the
# worker never boots.
from caltodo.app import configure_app, create_app


context = create_app()
configure_app(context)
app = context.app
