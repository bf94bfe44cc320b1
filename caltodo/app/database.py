from __future__ import annotations

import os

from flask import Flask
from flask_migrate import upgrade

# caltodo/migrations, next to this package
MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")


def run_migrations(app: Flask) -> None:
    """Apply every pending Alembic revision to the configured database.

    Errors are logged and re-raised so startup aborts before any route is registered.
    """
    directory = app.config.get("MIGRATIONS_DIR") or MIGRATIONS_DIR
    app.logger.info("Running database migrations...")
    try:
        with app.app_context():
            upgrade(directory=directory)
    except (Exception, SystemExit):
        # Flask-Migrate reports alembic command errors as SystemExit
        app.logger.exception("Migration error")
        raise
    app.logger.info("Database migrations completed successfully")
