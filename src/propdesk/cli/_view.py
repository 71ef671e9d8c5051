"""
Shared helpers for CLI commands.

Every command runs inside a "view": a context is built for the view's path,
the persisted session is hydrated, and the route guard decides whether the
command may go ahead.
"""

import asyncio
import json
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import typer

from propdesk.context import AppContext, build_context
from propdesk.exceptions import AuthenticationError, PropdeskError
from propdesk.navigation import is_public_route
from propdesk.session.guard import GuardDecision, guard_for_path


def _open(path: str) -> AppContext:
    ctx = build_context(current_path=path)
    asyncio.run(ctx.hydration.hydrate())
    return ctx


@contextmanager
def view(path: str) -> Iterator[AppContext]:
    """Open a context for ``path``, enforcing the route guard on protected views."""
    ctx = _open(path)
    try:
        if not is_public_route(path):
            result = guard_for_path(ctx.session, path).apply(ctx.navigator)
            if result.decision is GuardDecision.REDIRECT_LOGIN:
                typer.echo("🔒 Please log in first: propdesk login")
                raise typer.Exit(code=1)
            if result.decision is GuardDecision.REDIRECT_UNAUTHORIZED:
                role = ctx.session.user.user_type
                typer.echo(f"⛔ Not authorized for {path} (signed in as {role})")
                raise typer.Exit(code=1)
        yield ctx
    finally:
        ctx.close()


def call(fn: Callable[..., Any], *args, **kwargs) -> Any:
    """Run an API call, turning client errors into a message and exit code 1."""
    try:
        return fn(*args, **kwargs)
    except AuthenticationError as e:
        typer.echo(f"❌ {e}")
        typer.echo("   Your session has ended. Run 'propdesk login' to sign in again.")
        raise typer.Exit(code=1)
    except PropdeskError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)


def payload(response: Any) -> Any:
    """Strip the API's ``{"success", "data"}`` envelope."""
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


def items(response: Any, key: str) -> list:
    """Pull a named list out of an enveloped response."""
    data = payload(response)
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get(key) or []
    return []


def echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def parse_pairs(pairs: list[str]) -> dict[str, str]:
    """Turn ``key=value`` arguments into a dict."""
    parsed = {}
    for pair in pairs or []:
        if "=" not in pair:
            typer.echo(f"❌ Expected key=value, got '{pair}'")
            raise typer.Exit(code=1)
        key, value = pair.split("=", 1)
        parsed[key.strip()] = value
    return parsed
