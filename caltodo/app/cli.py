from __future__ import annotations

import click


@click.group("caltodo")
def caltodo_cli():
    """CalTodo server commands."""
    pass


@caltodo_cli.command("migrate")
def migrate_command():
    """Apply pending database migrations and exit. Exit status 1 on failure."""
    # Import lazily: this module is itself imported while the app package initialises
    from . import create_app
    from .database import run_migrations

    context = create_app()
    try:
        run_migrations(context.app)
    except (Exception, SystemExit) as exc:
        click.echo(f"Migration failed: {exc}", err=True)
        raise SystemExit(1)
    click.echo("Migrations finished.")


@caltodo_cli.command("serve")
def serve_command():
    """Configure the application and serve it on $PORT (default 5000)."""
    from . import start_server

    server = start_server()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
