"""
propdesk CLI: the property-management platform from the terminal.

This package splits CLI commands into focused modules:
- main:    login, logout, whoami, health, contact
- account: register tenant|owner, forgot-password, reset-password
- properties: list, show, favorite, apply, book-viewing
- profile: show, update, change-password
- tenant:  dashboard, applications, maintenance, move permits, viewings
- owner:   dashboard, properties, tenants, applications, payments, move permits
- admin:   dashboard, owners, tenants, properties
- chat:    start, rooms, messages, send, unread
"""

import typer

from propdesk.cli.account import register_account_commands, register_app
from propdesk.cli.admin import admin_app
from propdesk.cli.chat import chat_app
from propdesk.cli.main import configure_logging, register_commands
from propdesk.cli.owner import owner_app
from propdesk.cli.profile import profile_app
from propdesk.cli.properties import properties_app
from propdesk.cli.tenant import tenant_app

app = typer.Typer(help="propdesk - property management from the command line")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    propdesk - property management from the command line.
    """
    configure_logging(verbose)


register_commands(app)
register_account_commands(app)

app.add_typer(register_app, name="register")
app.add_typer(properties_app, name="properties")
app.add_typer(profile_app, name="profile")
app.add_typer(tenant_app, name="tenant")
app.add_typer(owner_app, name="owner")
app.add_typer(admin_app, name="admin")
app.add_typer(chat_app, name="chat")

if __name__ == "__main__":
    app()
