"""Cloud data-store commands. Keys are global unless a username and token are given."""

import typer

from gamejolt_api.api.requests import (
    DataStoreFetchRequest,
    DataStoreGetKeysRequest,
    DataStoreRemoveRequest,
    DataStoreSetRequest,
    DataStoreUpdateRequest,
    OperationType,
)
from gamejolt_api.api.values import (
    DataStoreFetchValue,
    DataStoreGetKeysValue,
    DataStoreRemoveValue,
    DataStoreSetValue,
    DataStoreUpdateValue,
)
from gamejolt_api.app_context import use_context

_USERNAME = typer.Option(None, "--username", "-u", help="Use the user's data store instead of the global one")
_TOKEN = typer.Option(None, "--token", "-t", help="The user's game token")


def data_get(ctx: typer.Context, key: str, *, username: str | None = _USERNAME, token: str | None = _TOKEN) -> None:
    """Print the data stored under a key."""
    app = use_context(ctx)
    request = app.build(DataStoreFetchRequest, key=key, username=username, user_token=token)
    value = app.call(request, DataStoreFetchValue)
    app.out.print_data(key, value.data)


def data_set(
    ctx: typer.Context, key: str, data: str, *, username: str | None = _USERNAME, token: str | None = _TOKEN
) -> None:
    """Store data under a key."""
    app = use_context(ctx)
    request = app.build(DataStoreSetRequest, key=key, data=data, username=username, user_token=token)
    app.call(request, DataStoreSetValue)
    app.out.print_data_saved(key)


def data_update(
    ctx: typer.Context,
    key: str,
    operation: OperationType,
    value: str,
    *,
    username: str | None = _USERNAME,
    token: str | None = _TOKEN,
) -> None:
    """Apply an operation (add, subtract, multiply, divide, append, prepend) to stored data."""
    app = use_context(ctx)
    request = app.build(
        DataStoreUpdateRequest,
        key=key,
        operation=operation,
        value=value,
        username=username,
        user_token=token,
    )
    result = app.call(request, DataStoreUpdateValue)
    app.out.print_data(key, result.data)


def data_remove(ctx: typer.Context, key: str, *, username: str | None = _USERNAME, token: str | None = _TOKEN) -> None:
    """Remove a key."""
    app = use_context(ctx)
    request = app.build(DataStoreRemoveRequest, key=key, username=username, user_token=token)
    app.call(request, DataStoreRemoveValue)
    app.out.print_data_removed(key)


def data_keys(
    ctx: typer.Context,
    *,
    pattern: str | None = typer.Option(default=None, help="Filter keys; '*' is a wildcard"),
    username: str | None = _USERNAME,
    token: str | None = _TOKEN,
) -> None:
    """List data-store keys."""
    app = use_context(ctx)
    request = app.build(DataStoreGetKeysRequest, pattern=pattern, username=username, user_token=token)
    value = app.call(request, DataStoreGetKeysValue)
    app.out.print_keys(value.keys)
