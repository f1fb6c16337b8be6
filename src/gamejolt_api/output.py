"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201 — this module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import sys
from typing import NoReturn

import typer

from gamejolt_api.api.values import Score, ScoreTable, TimeFetchValue, Trophy, User


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    # --- Time ---

    def print_time(self, value: TimeFetchValue) -> None:
        """Print server time."""
        self._success({"timestamp": value.timestamp, "timezone": value.timezone}, f"{value} ({value.timezone})")

    # --- Scores ---

    def print_tables(self, tables: tuple[ScoreTable, ...]) -> None:
        """Print score tables, marking the primary one."""
        if self._json_mode:
            data = [{"id": t.id, "name": t.name, "description": t.description, "primary": t.primary} for t in tables]
            print(json.dumps({"ok": True, "data": {"tables": data}}))
        else:
            for t in tables:
                print(f"{t.id}\t{t.name}{' (primary)' if t.primary else ''}")

    def print_scores(self, scores: tuple[Score, ...]) -> None:
        """Print scores in table order."""
        if self._json_mode:
            data = [{"name": s.name, "score": s.score, "sort": s.sort, "guest": s.is_guest, "stored": s.stored} for s in scores]
            print(json.dumps({"ok": True, "data": {"scores": data}}))
        else:
            for position, s in enumerate(scores, start=1):
                print(f"{position}. {s.name}: {s.score}")

    def print_score_added(self, name: str, score: str) -> None:
        """Print score submission confirmation."""
        self._success({"name": name, "score": score}, f"Score '{score}' added for {name}.")

    def print_rank(self, sort: int, rank: int) -> None:
        """Print the rank of a sort value."""
        self._success({"sort": sort, "rank": rank}, f"Rank of {sort}: {rank}")

    # --- Users ---

    def print_users(self, users: tuple[User, ...]) -> None:
        """Print user profiles."""
        if self._json_mode:
            data = [
                {"id": u.id, "username": u.username, "type": u.type.value, "status": u.status.value, "avatar_url": u.avatar_url}
                for u in users
            ]
            print(json.dumps({"ok": True, "data": {"users": data}}))
        else:
            for u in users:
                print(f"{u.id}\t{u.username} ({u.type}, {u.status}) last seen {u.last_logged_in or 'never'}")

    def print_avatar_saved(self, path: str, size: int) -> None:
        """Print avatar download confirmation."""
        self._success({"path": path, "size": size}, f"Avatar saved to {path} ({size} bytes).")

    def print_friends(self, friends: tuple[int, ...]) -> None:
        """Print friend user IDs."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"friends": list(friends)}}))
        else:
            for friend_id in friends:
                print(friend_id)

    # --- Trophies ---

    def print_trophies(self, trophies: tuple[Trophy, ...]) -> None:
        """Print trophies with their achievement state."""
        if self._json_mode:
            data = [
                {"id": t.id, "title": t.title, "difficulty": t.difficulty.value, "achieved": t.is_achieved} for t in trophies
            ]
            print(json.dumps({"ok": True, "data": {"trophies": data}}))
        else:
            for t in trophies:
                mark = "x" if t.is_achieved else " "
                print(f"[{mark}] {t.id}\t{t.title} ({t.difficulty})")

    def print_trophy_updated(self, trophy_id: int, *, achieved: bool) -> None:
        """Print trophy award or removal confirmation."""
        action = "awarded" if achieved else "removed"
        self._success({"trophy_id": trophy_id, "achieved": achieved}, f"Trophy {trophy_id} {action}.")

    # --- Data store ---

    def print_data(self, key: str, data: str | None) -> None:
        """Print stored data."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"key": key, "data": data}}))
        else:
            print(data if data is not None else "")

    def print_data_saved(self, key: str) -> None:
        """Print data store confirmation."""
        self._success({"key": key}, f"Data stored under '{key}'.")

    def print_data_removed(self, key: str) -> None:
        """Print data removal confirmation."""
        self._success({"key": key}, f"Key '{key}' removed.")

    def print_keys(self, keys: tuple[str, ...]) -> None:
        """Print data-store keys."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"keys": list(keys)}}))
        else:
            for key in keys:
                print(key)

    # --- Sessions ---

    def print_session(self, action: str, username: str) -> None:
        """Print session action confirmation."""
        self._success({"action": action, "username": username}, f"Session {action} for {username}.")
