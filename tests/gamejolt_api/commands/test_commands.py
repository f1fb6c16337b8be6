"""Tests for CLI commands against an in-memory server."""

import json
from types import SimpleNamespace
from typing import Any

import pytest
import typer

from gamejolt_api.api.client import API_URL, API_VERSION
from gamejolt_api.api.requests import TimeFetchRequest
from gamejolt_api.api.values import TimeFetchValue
from gamejolt_api.app_context import AppContext
from gamejolt_api.commands.data import data_get, data_set
from gamejolt_api.commands.session import session_check
from gamejolt_api.commands.users import login
from gamejolt_api.config import Config
from gamejolt_api.credentials import CREDENTIALS_FILENAME
from gamejolt_api.output import Output

ROOT = API_URL + API_VERSION
USER = {"id": "7", "type": "User", "username": "bob", "avatar_url": "https://a.test/7.png", "status": "Active"}


class FakeServer:
    """Answers every request with one canned body and records the URLs sent."""

    def __init__(self) -> None:
        self.body: dict[str, Any] = {"success": "true"}
        self.urls: list[str] = []

    def transport(self, *, timeout: float) -> "FakeTransport":
        return FakeTransport(self)


class FakeTransport:
    def __init__(self, server: FakeServer) -> None:
        self.server = server

    async def __aenter__(self) -> "FakeTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def send(self, url: str) -> str:
        self.server.urls.append(url)
        return json.dumps({"response": self.server.body})


@pytest.fixture
def server(monkeypatch):
    """In-memory server replacing the HTTP transport."""
    fake = FakeServer()
    monkeypatch.setattr("gamejolt_api.app_context.HttpxTransport", fake.transport)
    return fake


@pytest.fixture
def ctx(tmp_path):
    """Typer-like context carrying an AppContext in JSON mode."""
    cfg = Config(data_dir=tmp_path, game_id="1", private_key="secret")
    return SimpleNamespace(obj=AppContext(out=Output(json_mode=True), cfg=cfg))


def read_output(capsys) -> dict[str, Any]:
    return json.loads(capsys.readouterr().out)


class TestAppContextCall:
    """Server rejections map to exit codes."""

    def test_rejected(self, ctx, server, capsys):
        """success: false exits with the rejected code by default."""
        server.body = {"success": "false", "message": "Bad game."}
        with pytest.raises(typer.Exit):
            ctx.obj.call(TimeFetchRequest(game_id="1"), TimeFetchValue)
        assert read_output(capsys) == {"ok": False, "error": "rejected", "message": "Bad game."}

    def test_reject_disabled(self, ctx, server):
        """With reject=False a failed value is returned to the caller."""
        server.body = {"success": "false"}
        value = ctx.obj.call(TimeFetchRequest(game_id="1"), TimeFetchValue, reject=False)
        assert value.success is False


class TestSessionCheck:
    """session-check sends one single request."""

    def test_open(self, ctx, server, capsys):
        """An open session is reported from a single sessions/check call."""
        session_check(ctx, "bob", "tok")
        (url,) = server.urls
        assert url.startswith(f"{ROOT}/sessions/check/?game_id=1&username=bob&user_token=tok&signature=")
        assert read_output(capsys)["data"] == {"action": "open", "username": "bob"}

    def test_no_session(self, ctx, server, capsys):
        """success: false exits with no_session."""
        server.body = {"success": "false"}
        with pytest.raises(typer.Exit) as exc_info:
            session_check(ctx, "bob", "tok")
        assert exc_info.value.exit_code == 1
        assert read_output(capsys)["error"] == "no_session"
        assert "/batch/" not in server.urls[0]


class TestInvalidRequest:
    """Invalid parameters exit with invalid_request before anything is sent."""

    def test_empty_key(self, ctx, server, capsys):
        """An empty data-store key is rejected."""
        with pytest.raises(typer.Exit):
            data_get(ctx, "", username=None, token=None)
        assert read_output(capsys)["error"] == "invalid_request"
        assert server.urls == []

    def test_empty_login_username(self, ctx, server, capsys):
        """An empty username is rejected."""
        with pytest.raises(typer.Exit):
            login(ctx, "", "tok")
        assert read_output(capsys)["error"] == "invalid_request"
        assert server.urls == []

    def test_empty_data_is_sent(self, ctx, server, capsys):
        """Empty data is stored as an empty value."""
        data_set(ctx, "k", "", username=None, token=None)
        assert server.urls[0].startswith(f"{ROOT}/data-store/set/?game_id=1&key=k&data=&signature=")
        assert read_output(capsys)["ok"] is True


class TestLogin:
    """login runs auth, session open and profile fetch in one batch."""

    def test_batch(self, ctx, server, capsys):
        """The batch stops on error and the profile is printed."""
        server.body = {
            "success": "true",
            "responses": [{"success": "true"}, {"success": "true"}, {"success": "true", "users": [USER]}],
        }
        login(ctx, "bob", "tok")
        (url,) = server.urls
        assert url.startswith(f"{ROOT}/batch/?game_id=1&break_on_error=true&requests[]=%2Fusers%2Fauth%2F")
        assert read_output(capsys)["data"]["users"][0]["username"] == "bob"

    def test_credentials_file(self, ctx, server, tmp_path, monkeypatch, capsys):
        """Without arguments the app-provided credentials file is used."""
        (tmp_path / CREDENTIALS_FILENAME).write_text("0.2.1\nbob\ntok\n")
        monkeypatch.chdir(tmp_path)
        server.body = {
            "success": "true",
            "responses": [{"success": "true"}, {"success": "true"}, {"success": "true", "users": [USER]}],
        }
        login(ctx, None, None)
        assert "username%3Dbob%26user_token%3Dtok" in server.urls[0]
        assert read_output(capsys)["ok"] is True

    def test_failed_auth(self, ctx, server, capsys):
        """A batch stopped by a failed sub-request exits as cancelled."""
        server.body = {"success": "false", "responses": [{"success": "false", "message": "Bad token."}]}
        with pytest.raises(typer.Exit):
            login(ctx, "bob", "bad")
        assert read_output(capsys)["error"] == "cancelled"
