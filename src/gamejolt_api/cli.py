"""CLI entry point for gamejolt-api."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from gamejolt_api.app_context import AppContext
from gamejolt_api.commands.data import data_get, data_keys, data_remove, data_set, data_update
from gamejolt_api.commands.scores import add_score, rank, scores, tables
from gamejolt_api.commands.session import session_check, session_close, session_open, session_ping
from gamejolt_api.commands.time import time_
from gamejolt_api.commands.trophies import achieve, trophies
from gamejolt_api.commands.users import friends, login, user
from gamejolt_api.config import Config
from gamejolt_api.log import setup_logging
from gamejolt_api.output import Output

app = TyperPlus(package_name="gamejolt-api")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    game_id: Annotated[str | None, typer.Option("--game-id", help="Game ID (overrides config.toml).")] = None,
    private_key: Annotated[str | None, typer.Option("--key", help="Game private key (overrides config.toml).")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log request details.")] = False,
) -> None:
    """Talk to the Game Jolt game API from the terminal."""
    cfg = Config.build(data_dir, game_id=game_id, private_key=private_key)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, debug=debug)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


# Server
app.command("time")(time_)

# Scores
app.command()(tables)
app.command(aliases=["s"])(scores)
app.command("add-score")(add_score)
app.command()(rank)

# Users
app.command(aliases=["u"])(user)
app.command()(friends)
app.command()(login)

# Trophies
app.command(aliases=["t"])(trophies)
app.command()(achieve)

# Data store
app.command("data-get")(data_get)
app.command("data-set")(data_set)
app.command("data-update")(data_update)
app.command("data-remove")(data_remove)
app.command("data-keys")(data_keys)

# Sessions
app.command("session-open")(session_open)
app.command("session-ping")(session_ping)
app.command("session-check")(session_check)
app.command("session-close")(session_close)
