"""
Flask CLI commands for local development.
"""
import click
from flask import current_app

from .models import db


def register_commands(app):
    """Attach the maintenance commands to the Flask CLI."""

    @app.cli.command('init-db')
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command('clear-entries')
    @click.confirmation_option(prompt='Delete every journal entry?')
    def clear_entries():
        """Delete every journal entry (development reset)."""
        removed = current_app.entry_service.store.clear()
        click.echo(f"Deleted {removed} entries.")
