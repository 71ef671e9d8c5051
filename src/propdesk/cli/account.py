"""
CLI commands for creating accounts and recovering passwords.

Usage:
    propdesk register tenant --email E --mobile M --full-name N
    propdesk register owner --email E --mobile M --first-name F --last-name L
    propdesk forgot-password --email E
    propdesk reset-password <token>
"""

from typing import Optional

import typer

from propdesk.auth import AuthService
from propdesk.cli._view import call, view
from propdesk.navigation import (
    FORGOT_PASSWORD_PATH,
    LOGIN_PATH,
    REGISTER_PATH,
    RESET_PASSWORD_PATH,
)

register_app = typer.Typer(help="Create a tenant or owner account")


def _password_option():
    return typer.Option(..., "--password", "-p", prompt=True, hide_input=True)


def _confirm_option():
    return typer.Option(
        ..., "--confirm-password", prompt="Confirm password", hide_input=True
    )


@register_app.command("tenant")
def register_tenant(
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    mobile: str = typer.Option(..., "--mobile", "-m", prompt=True),
    full_name: str = typer.Option(..., "--full-name", prompt="Full name"),
    password: str = _password_option(),
    confirm_password: str = _confirm_option(),
    nationality: Optional[str] = typer.Option(None, "--nationality"),
    employment_status: Optional[str] = typer.Option(None, "--employment-status"),
    emirates_id: Optional[str] = typer.Option(None, "--emirates-id"),
    passport_number: Optional[str] = typer.Option(None, "--passport-number"),
):
    """Create a tenant account. The rest of the profile can be filled in later."""
    data = {
        "email": email,
        "mobile": mobile,
        "password": password,
        "fullName": full_name,
        "nationality": nationality,
        "employmentStatus": employment_status,
        "emiratesId": emirates_id,
        "passportNumber": passport_number,
    }
    with view(f"{REGISTER_PATH}/tenant") as ctx:
        destination = call(AuthService(ctx).register_tenant, data, confirm_password)

    if destination == LOGIN_PATH:
        typer.echo("✅ Registration successful! Please login: propdesk login")
    else:
        typer.echo("✅ Account created successfully! You are now signed in.")
        typer.echo("   Complete your profile: propdesk profile update key=value")


@register_app.command("owner")
def register_owner(
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    mobile: str = typer.Option(..., "--mobile", "-m", prompt=True),
    first_name: str = typer.Option(..., "--first-name", prompt="First name"),
    last_name: str = typer.Option(..., "--last-name", prompt="Last name"),
    password: str = _password_option(),
    confirm_password: str = _confirm_option(),
    owner_type: str = typer.Option("management_company", "--owner-type"),
    company_name: Optional[str] = typer.Option(None, "--company-name"),
):
    """Apply for an owner account. An admin has to approve it before login."""
    data = {
        "email": email,
        "mobile": mobile,
        "password": password,
        "firstName": first_name,
        "lastName": last_name,
        "ownerType": owner_type,
        "companyName": company_name,
    }
    with view(f"{REGISTER_PATH}/owner") as ctx:
        call(AuthService(ctx).register_owner, data, confirm_password)

    typer.echo("✅ Registration submitted! Please wait for admin approval.")


def register_account_commands(app: typer.Typer):
    """Register password-recovery commands onto the app."""

    @app.command("forgot-password")
    def forgot_password(
        email: str = typer.Option(..., "--email", "-e", prompt=True),
    ):
        """Email yourself a password reset link."""
        with view(FORGOT_PASSWORD_PATH) as ctx:
            call(AuthService(ctx).forgot_password, email)
        typer.echo("📧 If an account exists for this email, a reset link has been sent.")

    @app.command("reset-password")
    def reset_password(
        token: str = typer.Argument(help="Token from the reset link"),
        password: str = _password_option(),
        confirm_password: str = _confirm_option(),
    ):
        """Choose a new password using a reset token."""
        with view(RESET_PASSWORD_PATH) as ctx:
            call(AuthService(ctx).reset_password, token, password, confirm_password)
        typer.echo("✅ Password reset successfully! You can now sign in with your new password.")
