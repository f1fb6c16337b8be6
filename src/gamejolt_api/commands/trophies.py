"""Trophy commands."""

import typer

from gamejolt_api.api.requests import TrophiesAddAchievedRequest, TrophiesFetchRequest, TrophiesRemoveAchievedRequest
from gamejolt_api.api.values import TrophiesAddAchievedValue, TrophiesFetchValue, TrophiesRemoveAchievedValue
from gamejolt_api.app_context import use_context


def trophies(
    ctx: typer.Context,
    username: str,
    token: str,
    *,
    achieved: bool | None = typer.Option(None, "--achieved/--unachieved", help="Only achieved or only unachieved trophies"),
) -> None:
    """List trophies and whether the user has achieved them."""
    app = use_context(ctx)
    request = app.build(TrophiesFetchRequest, username=username, user_token=token, achieved=achieved)
    value = app.call(request, TrophiesFetchValue)
    app.out.print_trophies(value.trophies)


def achieve(
    ctx: typer.Context,
    username: str,
    token: str,
    trophy_id: int,
    *,
    revoke: bool = typer.Option(default=False, help="Remove the trophy instead of awarding it"),
) -> None:
    """Award a trophy to a user (or revoke it)."""
    app = use_context(ctx)
    if revoke:
        app.call(
            app.build(TrophiesRemoveAchievedRequest, username=username, user_token=token, trophy_id=trophy_id),
            TrophiesRemoveAchievedValue,
        )
    else:
        app.call(
            app.build(TrophiesAddAchievedRequest, username=username, user_token=token, trophy_id=trophy_id),
            TrophiesAddAchievedValue,
        )
    app.out.print_trophy_updated(trophy_id, achieved=not revoke)
