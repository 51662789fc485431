"""Developer CLI commands registered on the Flask app."""

import click
from flask import Flask

from task_tracker.extensions import db


def register_commands(app: Flask) -> None:
    """Attach ``flask issue-token`` and ``flask init-db`` to the app.

    Args:
        app: Flask application instance.
    """

    @app.cli.command("issue-token")
    @click.argument("owner")
    def issue_token(owner: str) -> None:
        """Print a bearer token for OWNER, valid with AUTH_PROVIDER=jwt."""
        from task_tracker.services.identity import generate_token

        click.echo(generate_token(owner))

    @app.cli.command("init-db")
    def init_db() -> None:
        """Create the tasks table if it does not exist."""
        db.create_all()
        click.echo("Database initialized.")
