"""
CLI subcommands for property owners.

Usage:
    propdesk owner dashboard
    propdesk owner properties [--status STATUS]
    propdesk owner tenants
    propdesk owner applications [--status STATUS]
    propdesk owner leases
    propdesk owner maintenance [--status STATUS]
    propdesk owner move-permits [--status STATUS]
    propdesk owner permit-status <id> <status> [--reason TEXT]
    propdesk owner application-status <id> <status>
    propdesk owner maintenance-status <id> <status> [--assign-to NAME]
    propdesk owner financials [--period P]
    propdesk owner payments --lease-id ID
"""

from typing import Optional

import typer

from propdesk.cli._view import call, echo_json, items, payload, view
from propdesk.media import get_image_url

owner_app = typer.Typer(help="Owner views: properties, tenants, requests")


@owner_app.command("dashboard")
def owner_dashboard():
    """Show the owner dashboard summary."""
    with view("/owner/dashboard") as ctx:
        data = payload(call(ctx.owner_api.get_dashboard))
    echo_json(data)


@owner_app.command("properties")
def owner_properties(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List your properties."""
    with view("/owner/properties") as ctx:
        properties = items(
            call(ctx.owner_api.get_properties, {"status": status}), "properties"
        )

    if not properties:
        typer.echo("No properties listed.")
        return

    typer.echo(f"🏠 Properties ({len(properties)}):\n")
    for prop in properties:
        typer.echo(
            f"  • {prop.get('title', 'Untitled')} [{prop.get('status', 'unknown')}]\n"
            f"     ID: {prop.get('id')}"
        )
        images = prop.get("images") or []
        if images:
            first = images[0].get("url") if isinstance(images[0], dict) else images[0]
            typer.echo(f"     Image: {get_image_url(first, ctx.config)}")
        typer.echo("")


@owner_app.command("tenants")
def owner_tenants():
    """List tenants in your properties."""
    with view("/owner/tenants") as ctx:
        tenants = items(call(ctx.owner_api.get_tenants), "tenants")

    if not tenants:
        typer.echo("No tenants.")
        return

    typer.echo(f"👥 Tenants ({len(tenants)}):\n")
    for tenant in tenants:
        name = tenant.get("fullName") or tenant.get("email") or tenant.get("id")
        typer.echo(f"  • {name}  ID: {tenant.get('id')}")


@owner_app.command("applications")
def owner_applications(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List applications for your properties."""
    with view("/owner/applications") as ctx:
        data = payload(call(ctx.owner_api.get_applications, {"status": status}))
    echo_json(data)


@owner_app.command("leases")
def owner_leases():
    """List leases on your properties."""
    with view("/owner/leases") as ctx:
        data = payload(call(ctx.owner_api.get_leases))
    echo_json(data)


@owner_app.command("maintenance")
def owner_maintenance(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List maintenance requests on your properties."""
    with view("/owner/maintenance") as ctx:
        data = payload(
            call(ctx.owner_api.get_maintenance_requests, {"status": status})
        )
    echo_json(data)


@owner_app.command("move-permits")
def owner_move_permits(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List move permits awaiting your review."""
    with view("/owner/move-permits") as ctx:
        data = payload(call(ctx.owner_api.get_move_permits, {"status": status}))
    echo_json(data)


@owner_app.command("permit-status")
def owner_permit_status(
    permit_id: str = typer.Argument(help="Move permit ID"),
    status: str = typer.Argument(help="New status (e.g. approved, rejected)"),
    reason: Optional[str] = typer.Option(None, "--reason", help="Reason shown to the tenant"),
):
    """Approve or reject a move permit."""
    with view("/owner/move-permits") as ctx:
        call(ctx.owner_api.update_move_permit_status, permit_id, status, reason)
    typer.echo(f"✅ Move permit {permit_id} set to {status}")


@owner_app.command("application-status")
def owner_application_status(
    application_id: str = typer.Argument(help="Application ID"),
    status: str = typer.Argument(help="New status (e.g. approved, rejected)"),
):
    """Approve or reject a rental application."""
    with view("/owner/applications") as ctx:
        call(ctx.applications_api.update_status, application_id, status)
    typer.echo(f"✅ Application {application_id} set to {status}")


@owner_app.command("maintenance-status")
def owner_maintenance_status(
    request_id: str = typer.Argument(help="Maintenance request ID"),
    status: str = typer.Argument(help="New status (e.g. in_progress, completed)"),
    assign_to: Optional[str] = typer.Option(None, "--assign-to", help="Who will do the work"),
):
    """Update a maintenance request."""
    with view("/owner/maintenance") as ctx:
        call(ctx.owner_api.update_maintenance_request, request_id, status, assign_to)
    typer.echo(f"✅ Maintenance request {request_id} set to {status}")


@owner_app.command("financials")
def owner_financials(
    period: Optional[str] = typer.Option(None, "--period", help="Reporting period"),
):
    """Show rent income and outstanding balances."""
    with view("/owner/financials") as ctx:
        data = payload(call(ctx.owner_api.get_financials, {"period": period}))
    echo_json(data)


@owner_app.command("payments")
def owner_payments(
    lease_id: str = typer.Option(..., "--lease-id", help="Lease ID"),
    limit: int = typer.Option(120, "--limit"),
):
    """List the rent payment schedule for a lease."""
    with view("/owner/properties") as ctx:
        payments = items(
            call(ctx.rent_payments_api.get_payments, {"leaseId": lease_id, "limit": limit}),
            "payments",
        )

    if not payments:
        typer.echo("No rent payments.")
        return

    typer.echo(f"💰 Rent payments ({len(payments)}):\n")
    for payment in payments:
        typer.echo(
            f"  • {payment.get('due_date', '?')}  AED {payment.get('amount', '?')}"
            f" [{payment.get('status', 'unknown')}]  ID: {payment.get('id')}"
        )
