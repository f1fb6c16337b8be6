"""Session commands: open, ping, check and close a player's game session."""

import typer

from gamejolt_api.api.requests import (
    SessionsCheckRequest,
    SessionsCloseRequest,
    SessionsOpenRequest,
    SessionsPingRequest,
    SessionStatus,
)
from gamejolt_api.api.values import SessionsCheckValue, SessionsCloseValue, SessionsOpenValue, SessionsPingValue
from gamejolt_api.app_context import use_context


def session_open(ctx: typer.Context, username: str, token: str) -> None:
    """Open a game session."""
    app = use_context(ctx)
    app.call(app.build(SessionsOpenRequest, username=username, user_token=token), SessionsOpenValue)
    app.out.print_session("opened", username)


def session_ping(
    ctx: typer.Context,
    username: str,
    token: str,
    *,
    idle: bool = typer.Option(default=False, help="Report the player as idle instead of active"),
) -> None:
    """Keep a game session open."""
    app = use_context(ctx)
    status = SessionStatus.IDLE if idle else SessionStatus.ACTIVE
    request = app.build(SessionsPingRequest, username=username, user_token=token, status=status)
    app.call(request, SessionsPingValue)
    app.out.print_session(f"pinged ({status})", username)


def session_check(ctx: typer.Context, username: str, token: str) -> None:
    """Check whether a game session is open (exit code 1 when it is not)."""
    app = use_context(ctx)
    request = app.build(SessionsCheckRequest, username=username, user_token=token)
    value = app.call(request, SessionsCheckValue, reject=False)
    if not value.success:
        app.out.print_error_and_exit("no_session", f"No open session for {username}.")
    app.out.print_session("open", username)


def session_close(ctx: typer.Context, username: str, token: str) -> None:
    """Close a game session."""
    app = use_context(ctx)
    app.call(app.build(SessionsCloseRequest, username=username, user_token=token), SessionsCloseValue)
    app.out.print_session("closed", username)
