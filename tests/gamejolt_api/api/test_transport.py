"""Tests for the httpx transport."""

import asyncio

import httpx
import pytest

from gamejolt_api.api.errors import TransportError
from gamejolt_api.api.transport import HttpxTransport


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def send(transport: HttpxTransport, url: str) -> str:
    async with transport:
        return await transport.send(url)


async def fetch_avatar(transport: HttpxTransport, url: str) -> bytes | None:
    async with transport:
        return await transport.fetch_avatar(url)


class TestSend:
    """API requests."""

    def test_returns_body(self):
        """Body text is returned for a 200 response."""
        transport = make_transport(lambda request: httpx.Response(200, text='{"response": {}}'))
        assert asyncio.run(send(transport, "https://api.test/time/?game_id=1")) == '{"response": {}}'

    def test_sends_url_unchanged(self):
        """The signed URL is sent as a GET without re-encoding."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, text="{}")

        asyncio.run(send(make_transport(handler), "https://api.test/time/?game_id=1&signature=abc"))
        assert seen == [("GET", "https://api.test/time/?game_id=1&signature=abc")]

    def test_status_error(self):
        """Non-2xx status raises TransportError."""
        transport = make_transport(lambda request: httpx.Response(500))
        with pytest.raises(TransportError, match="500"):
            asyncio.run(send(transport, "https://api.test/time/"))

    def test_network_error(self):
        """Connection failures raise TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError):
            asyncio.run(send(make_transport(handler), "https://api.test/time/"))


class TestFetchAvatar:
    """Avatar downloads."""

    def test_webp_rewritten_to_png(self):
        """WEBP avatar URLs are fetched as PNG."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, content=b"\x89PNG")

        image = asyncio.run(fetch_avatar(make_transport(handler), "https://m.gjcdn.net/user-avatar/60/7.WEBP"))
        assert image == b"\x89PNG"
        assert seen == ["https://m.gjcdn.net/user-avatar/60/7.png"]

    def test_not_found(self):
        """A missing avatar returns None."""
        transport = make_transport(lambda request: httpx.Response(404))
        assert asyncio.run(fetch_avatar(transport, "https://m.gjcdn.net/user-avatar/60/7.png")) is None

    def test_server_error(self):
        """Other error statuses raise TransportError."""
        transport = make_transport(lambda request: httpx.Response(503))
        with pytest.raises(TransportError):
            asyncio.run(fetch_avatar(transport, "https://m.gjcdn.net/user-avatar/60/7.png"))
