"""
CLI subcommands for tenants.

Usage:
    propdesk tenant dashboard
    propdesk tenant applications
    propdesk tenant leases [--status STATUS]
    propdesk tenant maintenance
    propdesk tenant request-maintenance --title T --description D [--priority P]
    propdesk tenant move-permits
    propdesk tenant cancel-permit <id>
    propdesk tenant favorites
    propdesk tenant viewings
    propdesk tenant cancel-viewing <id>
"""

from typing import Optional

import typer

from propdesk.cli._view import call, echo_json, items, payload, view

tenant_app = typer.Typer(help="Tenant views: dashboard, applications, permits")


@tenant_app.command("dashboard")
def tenant_dashboard():
    """Show the tenant dashboard summary."""
    with view("/tenant/dashboard") as ctx:
        data = payload(call(ctx.tenant_api.get_dashboard))
    echo_json(data)


@tenant_app.command("applications")
def tenant_applications():
    """List your rental applications."""
    with view("/tenant/applications") as ctx:
        applications = items(call(ctx.tenant_api.get_applications), "applications")

    if not applications:
        typer.echo("No applications yet.")
        return

    typer.echo(f"📄 Applications ({len(applications)}):\n")
    for app in applications:
        title = app.get("propertyTitle") or app.get("propertyId", "?")
        typer.echo(f"  • {title} [{app.get('status', 'unknown')}]  ID: {app.get('id')}")


@tenant_app.command("leases")
def tenant_leases(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List your leases."""
    with view("/tenant/leases") as ctx:
        data = payload(call(ctx.tenant_api.get_leases, {"status": status}))
    echo_json(data)


@tenant_app.command("maintenance")
def tenant_maintenance():
    """List your maintenance requests."""
    with view("/tenant/maintenance") as ctx:
        requests = items(call(ctx.tenant_api.get_maintenance_requests), "requests")

    if not requests:
        typer.echo("No maintenance requests.")
        return

    typer.echo(f"🔧 Maintenance requests ({len(requests)}):\n")
    for req in requests:
        typer.echo(
            f"  • {req.get('title', 'Untitled')} [{req.get('status', 'unknown')}]"
            f"  ID: {req.get('id')}"
        )


@tenant_app.command("request-maintenance")
def tenant_request_maintenance(
    title: str = typer.Option(..., "--title", "-t"),
    description: str = typer.Option(..., "--description", "-d"),
    priority: str = typer.Option("medium", "--priority"),
    property_id: Optional[str] = typer.Option(None, "--property-id"),
):
    """Open a new maintenance request."""
    body = {"title": title, "description": description, "priority": priority}
    if property_id:
        body["propertyId"] = property_id

    with view("/tenant/maintenance") as ctx:
        data = payload(call(ctx.tenant_api.create_maintenance_request, body))

    request_id = data.get("id") if isinstance(data, dict) else None
    suffix = f" (ID: {request_id})" if request_id else ""
    typer.echo(f"✅ Maintenance request submitted{suffix}")


@tenant_app.command("move-permits")
def tenant_move_permits(
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status"),
):
    """List your move-in/move-out permits."""
    with view("/tenant/move-permits") as ctx:
        permits = items(
            call(ctx.tenant_api.get_move_permits, {"status": status}), "permits"
        )

    if not permits:
        typer.echo("No move permits.")
        return

    typer.echo(f"🚚 Move permits ({len(permits)}):\n")
    for permit in permits:
        typer.echo(
            f"  • {permit.get('permitType', 'permit')} on {permit.get('moveDate', '?')}"
            f" [{permit.get('status', 'unknown')}]  ID: {permit.get('id')}"
        )


@tenant_app.command("cancel-permit")
def tenant_cancel_permit(
    permit_id: str = typer.Argument(help="Move permit ID"),
):
    """Cancel one of your move permits."""
    with view("/tenant/move-permits") as ctx:
        call(ctx.tenant_api.cancel_move_permit, permit_id)
    typer.echo(f"✅ Move permit {permit_id} cancelled")


@tenant_app.command("favorites")
def tenant_favorites():
    """List your saved properties."""
    with view("/tenant/favorites") as ctx:
        favorites = items(call(ctx.properties_api.get_favorites), "properties")

    if not favorites:
        typer.echo("No favorites saved.")
        return

    typer.echo(f"⭐ Favorites ({len(favorites)}):\n")
    for prop in favorites:
        title = prop.get("property_name") or prop.get("title") or "Untitled"
        typer.echo(f"  • {title}  ID: {prop.get('id')}")


@tenant_app.command("viewings")
def tenant_viewings():
    """List your booked property viewings."""
    with view("/tenant/viewings") as ctx:
        viewings = items(call(ctx.viewings_api.get_all), "viewings")

    if not viewings:
        typer.echo("No viewings booked.")
        return

    typer.echo(f"📅 Viewings ({len(viewings)}):\n")
    for viewing in viewings:
        title = viewing.get("property_name") or viewing.get("propertyId", "?")
        typer.echo(
            f"  • {title} on {viewing.get('viewingDate', '?')} {viewing.get('viewingTime', '')}"
            f" [{viewing.get('status', 'unknown')}]  ID: {viewing.get('id')}"
        )


@tenant_app.command("cancel-viewing")
def tenant_cancel_viewing(
    viewing_id: str = typer.Argument(help="Viewing ID"),
):
    """Cancel a booked viewing."""
    with view("/tenant/viewings") as ctx:
        call(ctx.viewings_api.cancel, viewing_id)
    typer.echo(f"✅ Viewing {viewing_id} cancelled")
