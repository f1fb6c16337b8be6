"""Score table commands: list tables, list scores, add a guest score, get a rank."""

import typer

from gamejolt_api.api.requests import ScoresAddRequest, ScoresFetchRequest, ScoresGetRankRequest, ScoresTablesRequest
from gamejolt_api.api.values import ScoresAddValue, ScoresFetchValue, ScoresGetRankValue, ScoresTablesValue
from gamejolt_api.app_context import use_context


def tables(ctx: typer.Context) -> None:
    """List the game's score tables."""
    app = use_context(ctx)
    value = app.call(app.build(ScoresTablesRequest), ScoresTablesValue)
    app.out.print_tables(value.tables)


def scores(
    ctx: typer.Context,
    *,
    table: int | None = typer.Option(default=None, help="Score table ID (default: primary table)"),
    limit: int | None = typer.Option(default=None, min=1, max=100, help="Number of scores to return"),
    guest: str | None = typer.Option(default=None, help="Only scores of this guest"),
) -> None:
    """List the scores of a table, best first."""
    app = use_context(ctx)
    request = app.build(ScoresFetchRequest, limit=limit, table_id=table, guest=guest)
    value = app.call(request, ScoresFetchValue)
    app.out.print_scores(value.scores)


def add_score(
    ctx: typer.Context,
    guest: str,
    sort: int,
    *,
    score: str | None = typer.Option(default=None, help="Display score (default: the sort value)"),
    extra_data: str | None = typer.Option(default=None, help="Extra data stored with the score"),
    table: int | None = typer.Option(default=None, help="Score table ID (default: primary table)"),
) -> None:
    """Add a guest score."""
    app = use_context(ctx)
    display = score if score is not None else str(sort)
    request = app.build(ScoresAddRequest, guest=guest, score=display, sort=sort, extra_data=extra_data, table_id=table)
    app.call(request, ScoresAddValue)
    app.out.print_score_added(guest, display)


def rank(
    ctx: typer.Context,
    sort: int,
    *,
    table: int | None = typer.Option(default=None, help="Score table ID (default: primary table)"),
) -> None:
    """Show the rank a sort value would have on a table."""
    app = use_context(ctx)
    value = app.call(app.build(ScoresGetRankRequest, sort=sort, table_id=table), ScoresGetRankValue)
    app.out.print_rank(sort, value.rank)
