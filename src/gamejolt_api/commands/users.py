"""User commands: profile lookup, avatar download, friends list, login check."""

import asyncio
from pathlib import Path

import typer

from gamejolt_api.api.errors import TransportError
from gamejolt_api.api.requests import FriendsFetchRequest, SessionsOpenRequest, UsersAuthRequest, UsersFetchRequest
from gamejolt_api.api.transport import HttpxTransport
from gamejolt_api.api.values import FriendsFetchValue, UsersFetchValue
from gamejolt_api.app_context import use_context
from gamejolt_api.credentials import read_credentials


def user(
    ctx: typer.Context,
    username: str,
    *,
    avatar: Path | None = typer.Option(default=None, help="Save the user's avatar image to this file"),
) -> None:
    """Show a user's profile."""
    app = use_context(ctx)
    value = app.call(app.build(UsersFetchRequest, username=username), UsersFetchValue)
    app.out.print_users(value.users)
    if avatar is None or not value.users:
        return

    async def download(url: str) -> bytes | None:
        async with HttpxTransport(timeout=app.cfg.timeout) as transport:
            return await transport.fetch_avatar(url)

    try:
        image = asyncio.run(download(value.users[0].avatar_url))
    except TransportError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if image is None:
        app.out.print_error_and_exit("not_found", f"User '{username}' has no avatar.")
    avatar.write_bytes(image)
    app.out.print_avatar_saved(str(avatar), len(image))


def friends(ctx: typer.Context, username: str, token: str) -> None:
    """List the user IDs of a user's friends."""
    app = use_context(ctx)
    value = app.call(app.build(FriendsFetchRequest, username=username, user_token=token), FriendsFetchValue)
    app.out.print_friends(value.friends)


def login(
    ctx: typer.Context,
    username: str | None = typer.Argument(default=None, help="Username (default: from .gj-credentials)"),
    token: str | None = typer.Argument(default=None, help="Game token (default: from .gj-credentials)"),
) -> None:
    """Verify a player's token, open a session and show the profile, in one batch call."""
    app = use_context(ctx)
    if username is None or token is None:
        creds = read_credentials(Path.cwd())
        if creds is None:
            app.out.print_error_and_exit("missing_credentials", "No username/token given and no .gj-credentials file found.")
        username, token = creds.username, creds.token

    values = app.call_batch(
        [
            app.build(UsersAuthRequest, username=username, user_token=token),
            app.build(SessionsOpenRequest, username=username, user_token=token),
            app.build(UsersFetchRequest, username=username),
        ],
        break_on_error=True,
    )
    profile = values[2]
    if not isinstance(profile, UsersFetchValue):
        app.out.print_error_and_exit("decode", "Unexpected batch response.")
    app.out.print_users(profile.users)
