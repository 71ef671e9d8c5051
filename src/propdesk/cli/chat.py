"""
CLI subcommands for chat.

Usage:
    propdesk chat rooms
    propdesk chat start <recipient-id> [--recipient-type owner|tenant]
    propdesk chat messages <room-id>
    propdesk chat send <room-id> <message>
    propdesk chat unread
"""

import typer

from propdesk.cli._view import call, items, payload, view

chat_app = typer.Typer(help="Chat between tenants and owners")

CHAT_PATH = "/chat"


@chat_app.command("rooms")
def chat_rooms():
    """List your chat rooms."""
    with view(CHAT_PATH) as ctx:
        rooms = items(call(ctx.chat_api.get_rooms), "rooms")

    if not rooms:
        typer.echo("No conversations yet.")
        return

    typer.echo(f"💬 Rooms ({len(rooms)}):\n")
    for room in rooms:
        unread = room.get("unreadCount") or 0
        badge = f" ({unread} unread)" if unread else ""
        name = room.get("recipientName") or room.get("roomType", "room")
        typer.echo(f"  • {name}{badge}  ID: {room.get('id')}")


@chat_app.command("messages")
def chat_messages(
    room_id: str = typer.Argument(help="Chat room ID"),
):
    """Show messages in a room and mark them read."""
    with view(CHAT_PATH) as ctx:
        messages = items(call(ctx.chat_api.get_messages, room_id), "messages")
        if messages:
            call(ctx.chat_api.mark_as_read, room_id)

    if not messages:
        typer.echo("No messages.")
        return

    for msg in messages:
        sender = msg.get("senderName") or msg.get("senderType", "?")
        typer.echo(f"[{msg.get('createdAt', '')}] {sender}: {msg.get('message', '')}")


@chat_app.command("send")
def chat_send(
    room_id: str = typer.Argument(help="Chat room ID"),
    message: str = typer.Argument(help="Message text"),
):
    """Send a message to a room."""
    with view(CHAT_PATH) as ctx:
        call(ctx.chat_api.send_message, room_id, message)
    typer.echo("✅ Message sent")


@chat_app.command("unread")
def chat_unread():
    """Show the number of unread messages."""
    with view(CHAT_PATH) as ctx:
        data = payload(call(ctx.chat_api.get_unread_count))

    count = data.get("count", data.get("unreadCount", 0)) if isinstance(data, dict) else data
    typer.echo(f"📬 {count} unread")


@chat_app.command("start")
def chat_start(
    recipient_id: str = typer.Argument(help="User ID of the owner or tenant"),
    recipient_type: str = typer.Option("owner", "--recipient-type", help="owner or tenant"),
):
    """Open (or reuse) a conversation with another user."""
    with view(CHAT_PATH) as ctx:
        data = payload(
            call(ctx.chat_api.get_or_create_room, recipient_id, recipient_type, "owner_tenant")
        )

    room_id = data.get("roomId") if isinstance(data, dict) else None
    if not room_id:
        typer.echo("❌ Could not open a chat room")
        raise typer.Exit(code=1)
    typer.echo(f"💬 Room {room_id}: propdesk chat send {room_id} <message>")
