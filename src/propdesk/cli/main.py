"""
Top-level CLI commands: login, logout, whoami, health, contact.
"""

import os
from typing import Optional

import typer

from propdesk.auth import AuthService
from propdesk.cli._view import call, payload, view
from propdesk.exceptions import PropdeskError
from propdesk.navigation import HOME_PATH, LOGIN_PATH

CONTACT_PATH = "/contact"


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from propdesk.logger import setup_logging

    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING")
    setup_logging(level=log_level, log_file=os.getenv("LOG_FILE"))


def register_commands(app: typer.Typer):
    """Register top-level commands onto the app."""

    @app.command()
    def login(
        email: str = typer.Option(..., "--email", "-e", prompt=True),
        password: str = typer.Option(
            ..., "--password", "-p", prompt=True, hide_input=True
        ),
    ):
        """Sign in and remember the session."""
        with view(LOGIN_PATH) as ctx:
            try:
                destination = AuthService(ctx).login(email, password)
            except PropdeskError as e:
                typer.echo(f"❌ {e}")
                raise typer.Exit(code=1)

            user = ctx.session.user
            typer.echo(f"✅ Login successful! Signed in as {user.email or user.id}")
            typer.echo(f"   Role: {user.user_type}")
            typer.echo(f"   Dashboard: {destination}")

    @app.command()
    def logout():
        """Sign out and forget the stored session."""
        with view(HOME_PATH) as ctx:
            was_signed_in = ctx.session.is_authenticated
            AuthService(ctx).logout()

        if was_signed_in:
            typer.echo("👋 Signed out.")
        else:
            typer.echo("Not signed in.")

    @app.command()
    def whoami():
        """Show the signed-in user."""
        with view(HOME_PATH) as ctx:
            if not ctx.session.is_authenticated:
                typer.echo("Not signed in.")
                raise typer.Exit(code=1)

            user = ctx.session.user
            typer.echo(f"👤 {user.email or user.mobile or user.id}")
            typer.echo(f"   ID: {user.id}")
            typer.echo(f"   Role: {user.user_type}")
            if user.mobile:
                typer.echo(f"   Mobile: {user.mobile}")

    @app.command()
    def health():
        """Check the API server's health endpoint."""
        with view("/health") as ctx:
            data = payload(call(ctx.health_api.check))

        if not isinstance(data, dict):
            # A proxy or plain-text health page answered instead of the API.
            typer.echo(f"🟡 Server answered: {str(data).strip()[:200] or '(empty)'}")
            return

        status = data.get("status", "unknown")
        icon = "🟢" if status in ("ok", "healthy") else "🔴"
        typer.echo(f"{icon} Server: {status}")
        typer.echo(f"   Database: {data.get('database', 'unknown')}")
        if data.get("environment"):
            typer.echo(f"   Environment: {data['environment']}")
        storage = data.get("storage") or {}
        if storage:
            writable = "writable" if storage.get("writable") else "read-only"
            typer.echo(f"   Storage: {storage.get('uploadDir', '?')} ({writable})")

    @app.command()
    def contact(
        name: str = typer.Option(..., "--name", prompt=True),
        email: str = typer.Option(..., "--email", "-e", prompt=True),
        subject: str = typer.Option(..., "--subject", "-s", prompt=True),
        message: str = typer.Option(..., "--message", "-m", prompt=True),
        phone: Optional[str] = typer.Option(None, "--phone"),
    ):
        """Send a message to the platform team."""
        body = {"name": name, "email": email, "subject": subject, "message": message}
        if phone:
            body["phone"] = phone
        with view(CONTACT_PATH) as ctx:
            call(ctx.contact_api.submit, body)
        typer.echo("✅ Thank you for your message! We will get back to you soon.")
