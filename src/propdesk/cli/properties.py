"""
CLI subcommands for property listings.

Browsing needs no session; the actions on a listing are for tenants.

Usage:
    propdesk properties list [--status S] [--type T] [--category C] [--search Q]
    propdesk properties show <id>
    propdesk properties favorite <id> [--remove]
    propdesk properties apply <id> [--offer AMOUNT]
    propdesk properties book-viewing <id> --date YYYY-MM-DD --time HH:MM
"""

from typing import Optional

import typer

from propdesk.cli._view import call, items, payload, view
from propdesk.media import get_image_url

properties_app = typer.Typer(help="Browse listings, apply, book viewings")

PROPERTIES_PATH = "/properties"


def _title(prop: dict) -> str:
    return prop.get("property_name") or prop.get("title") or "Untitled"


def _primary_image(images: list) -> Optional[str]:
    if not images:
        return None
    primary = next(
        (img for img in images if isinstance(img, dict) and img.get("is_primary")),
        images[0],
    )
    if isinstance(primary, dict):
        return primary.get("image_url") or primary.get("url")
    return primary


@properties_app.command("list")
def properties_list(
    status: Optional[str] = typer.Option(None, "--status"),
    property_type: Optional[str] = typer.Option(None, "--type"),
    category: Optional[str] = typer.Option(None, "--category"),
    listing_type: Optional[str] = typer.Option(None, "--listing-type"),
    search: Optional[str] = typer.Option(None, "--search", "-q"),
    page: Optional[int] = typer.Option(None, "--page"),
    limit: Optional[int] = typer.Option(None, "--limit"),
):
    """List published properties."""
    params = {
        "status": status,
        "type": property_type,
        "category": category,
        "listingType": listing_type,
        "q": search,
        "page": page,
        "limit": limit,
    }
    with view(PROPERTIES_PATH) as ctx:
        properties = items(call(ctx.properties_api.get_all, params), "properties")

    if not properties:
        typer.echo("No properties found.")
        return

    typer.echo(f"🏠 Properties ({len(properties)}):\n")
    for prop in properties:
        price = prop.get("price")
        price_text = f"  AED {price}" if price is not None else ""
        typer.echo(
            f"  • {_title(prop)} [{prop.get('status', 'unknown')}]{price_text}\n"
            f"     ID: {prop.get('id')}\n"
        )


@properties_app.command("show")
def properties_show(
    property_id: str = typer.Argument(help="Property ID"),
):
    """Show one listing."""
    with view(f"{PROPERTIES_PATH}/{property_id}") as ctx:
        data = payload(call(ctx.properties_api.get_by_id, property_id))
        config = ctx.config

    if not isinstance(data, dict) or not isinstance(data.get("property"), dict):
        typer.echo("❌ Invalid response format")
        raise typer.Exit(code=1)

    prop = data["property"]
    typer.echo(f"🏠 {_title(prop)}")
    for label, key in (
        ("Status", "status"),
        ("Type", "property_type"),
        ("Category", "category"),
        ("Listing", "listing_type"),
        ("Price", "price"),
        ("Address", "address"),
    ):
        if prop.get(key) is not None:
            typer.echo(f"   {label}: {prop[key]}")

    image = _primary_image(data.get("images") or [])
    if image:
        typer.echo(f"   Image: {get_image_url(image, config)}")

    application = data.get("userApplication")
    if isinstance(application, dict):
        typer.echo(f"   Your application: {application.get('status', 'unknown')}")

    if prop.get("description"):
        typer.echo(f"\n{prop['description']}")


@properties_app.command("favorite")
def properties_favorite(
    property_id: str = typer.Argument(help="Property ID"),
    remove: bool = typer.Option(False, "--remove", help="Remove from favorites instead"),
):
    """Save a listing to your favorites."""
    with view("/tenant/favorites") as ctx:
        if remove:
            call(ctx.properties_api.remove_from_favorites, property_id)
        else:
            call(ctx.properties_api.add_to_favorites, property_id)

    typer.echo("✅ Removed from favorites" if remove else "✅ Added to favorites")


@properties_app.command("apply")
def properties_apply(
    property_id: str = typer.Argument(help="Property ID"),
    offer: Optional[float] = typer.Option(None, "--offer", help="Offer amount"),
):
    """Apply to rent a listing."""
    with view("/tenant/applications") as ctx:
        user = ctx.session.user
        body = {
            "propertyId": property_id,
            "applicantInfo": {"name": user.email or "Tenant"},
            "offerAmount": offer,
        }
        call(ctx.applications_api.create, body)

    typer.echo("✅ Application submitted successfully!")


@properties_app.command("book-viewing")
def properties_book_viewing(
    property_id: str = typer.Argument(help="Property ID"),
    date: str = typer.Option(..., "--date", help="Viewing date (YYYY-MM-DD)"),
    time: str = typer.Option(..., "--time", help="Viewing time (HH:MM)"),
    notes: str = typer.Option("", "--notes"),
):
    """Request a viewing of a listing."""
    body = {
        "propertyId": property_id,
        "viewingDate": date,
        "viewingTime": time,
        "notes": notes,
    }
    with view("/tenant/viewings") as ctx:
        call(ctx.viewings_api.create, body)

    typer.echo(f"✅ Viewing requested for {date} at {time}")
