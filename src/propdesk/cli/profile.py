"""
CLI subcommands for the signed-in user's profile.

Usage:
    propdesk profile show
    propdesk profile update key=value [key=value ...]
    propdesk profile change-password
"""

import typer

from propdesk.auth import AuthService
from propdesk.cli._view import call, parse_pairs, view

profile_app = typer.Typer(help="View and edit your profile")

PROFILE_PATH = "/profile"


@profile_app.command("show")
def profile_show():
    """Fetch the current profile from the server."""
    with view(PROFILE_PATH) as ctx:
        user = call(AuthService(ctx).refresh_profile)

    typer.echo(f"👤 {user.email or user.id}")
    for key, value in user.to_dict().items():
        typer.echo(f"   {key}: {value}")


@profile_app.command("update")
def profile_update(
    fields: list[str] = typer.Argument(help="Fields to change, as key=value"),
):
    """
    Update profile fields.

    Examples:
        propdesk profile update mobile=+971500000000
        propdesk profile update fullName="Jane Doe" nationality=AE
    """
    changes = parse_pairs(fields)
    if not changes:
        typer.echo("❌ Nothing to update")
        raise typer.Exit(code=1)

    with view(PROFILE_PATH) as ctx:
        call(AuthService(ctx).update_profile, changes)

    typer.echo(f"✅ Profile updated ({', '.join(sorted(changes))})")


@profile_app.command("change-password")
def profile_change_password(
    current_password: str = typer.Option(
        ..., "--current-password", prompt="Current password", hide_input=True
    ),
    new_password: str = typer.Option(
        ..., "--new-password", prompt="New password", hide_input=True
    ),
    confirm_password: str = typer.Option(
        ..., "--confirm-password", prompt="Confirm new password", hide_input=True
    ),
):
    """Change your password."""
    with view(PROFILE_PATH) as ctx:
        call(AuthService(ctx).change_password, current_password, new_password, confirm_password)
    typer.echo("✅ Password changed successfully!")
