"""Show server time."""

import typer

from gamejolt_api.api.requests import TimeFetchRequest
from gamejolt_api.api.values import TimeFetchValue
from gamejolt_api.app_context import use_context


def time_(ctx: typer.Context) -> None:
    """Show the Game Jolt server time."""
    app = use_context(ctx)
    value = app.call(app.build(TimeFetchRequest), TimeFetchValue)
    app.out.print_time(value)
