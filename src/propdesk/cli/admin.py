"""
CLI subcommands for administrators.

Usage:
    propdesk admin dashboard
    propdesk admin owners [--pending]
    propdesk admin approve <owner-id>
    propdesk admin reject <owner-id> [--reason TEXT]
    propdesk admin tenants [--owner-id ID]
    propdesk admin properties [--status STATUS]
    propdesk admin applications [--status STATUS]
    propdesk admin contact-messages [--status STATUS]
    propdesk admin property-status <id> <status>
    propdesk admin contact-status <id> <status>
"""

from typing import Optional

import typer

from propdesk.cli._view import call, echo_json, items, payload, view

admin_app = typer.Typer(help="Admin views: owners, tenants, properties")


@admin_app.command("dashboard")
def admin_dashboard():
    """Show platform-wide statistics."""
    with view("/admin/dashboard") as ctx:
        stats = payload(call(ctx.admin_api.get_dashboard))
    echo_json(stats)


@admin_app.command("owners")
def admin_owners(
    pending: bool = typer.Option(False, "--pending", help="Only owners awaiting approval"),
):
    """List property owners."""
    path = "/admin/owners/pending" if pending else "/admin/owners"
    with view(path) as ctx:
        if pending:
            owners = items(call(ctx.admin_api.get_pending_owners), "owners")
        else:
            owners = items(call(ctx.admin_api.get_owners), "owners")

    if not owners:
        typer.echo("No pending owners." if pending else "No owners.")
        return

    label = "Pending owners" if pending else "Owners"
    typer.echo(f"🏢 {label} ({len(owners)}):\n")
    for owner in owners:
        name = owner.get("fullName") or owner.get("companyName") or owner.get("email")
        typer.echo(
            f"  • {name} [{owner.get('status', 'unknown')}]\n"
            f"     ID: {owner.get('id')}\n"
        )


@admin_app.command("approve")
def admin_approve(
    owner_id: str = typer.Argument(help="Owner ID"),
):
    """Approve a pending owner."""
    with view("/admin/owners/pending") as ctx:
        call(ctx.admin_api.approve_owner, owner_id)
    typer.echo(f"✅ Owner {owner_id} approved")


@admin_app.command("reject")
def admin_reject(
    owner_id: str = typer.Argument(help="Owner ID"),
    reason: Optional[str] = typer.Option(None, "--reason", help="Reason for rejection"),
):
    """Reject a pending owner."""
    with view("/admin/owners/pending") as ctx:
        call(ctx.admin_api.reject_owner, owner_id, reason)
    typer.echo(f"✅ Owner {owner_id} rejected")


@admin_app.command("tenants")
def admin_tenants(
    owner_id: Optional[str] = typer.Option(None, "--owner-id", help="Only this owner's tenants"),
):
    """List tenants across the platform."""
    with view("/admin/tenants") as ctx:
        tenants = items(
            call(ctx.admin_api.get_all_tenants, {"ownerId": owner_id}), "tenants"
        )

    if not tenants:
        typer.echo("No tenants found.")
        return

    typer.echo(f"👥 Tenants ({len(tenants)}):\n")
    for tenant in tenants:
        name = tenant.get("fullName") or tenant.get("email") or tenant.get("id")
        typer.echo(f"  • {name}  ID: {tenant.get('id')}")


@admin_app.command("properties")
def admin_properties(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List every property listing."""
    with view("/admin/properties") as ctx:
        data = payload(call(ctx.admin_api.get_all_properties, {"status": status}))
    echo_json(data)


@admin_app.command("applications")
def admin_applications(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List every rental application."""
    with view("/admin/applications") as ctx:
        data = payload(call(ctx.admin_api.get_all_applications, {"status": status}))
    echo_json(data)


@admin_app.command("contact-messages")
def admin_contact_messages(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List messages sent through the contact form."""
    with view("/admin/contact-messages") as ctx:
        data = payload(call(ctx.contact_api.get_all_messages, {"status": status}))
    echo_json(data)


@admin_app.command("property-status")
def admin_property_status(
    property_id: str = typer.Argument(help="Property ID"),
    status: str = typer.Argument(help="New status (e.g. active, inactive)"),
):
    """Change a listing's status."""
    with view("/admin/properties") as ctx:
        call(ctx.admin_api.update_property_status, property_id, status)
    typer.echo(f"✅ Property {property_id} set to {status}")


@admin_app.command("contact-status")
def admin_contact_status(
    message_id: str = typer.Argument(help="Contact message ID"),
    status: str = typer.Argument(help="New status (e.g. read, replied, archived)"),
):
    """Mark a contact-form message."""
    with view("/admin/contact-messages") as ctx:
        call(ctx.contact_api.update_status, message_id, status)
    typer.echo(f"✅ Message {message_id} set to {status}")
