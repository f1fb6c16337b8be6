"""Application context shared across CLI commands."""

import asyncio
from dataclasses import dataclass
from typing import Any, TypeVar, cast

import typer

from gamejolt_api.api.client import GameJoltClient
from gamejolt_api.api.errors import ConstructionError, DecodeError, RequestCancelledError, TransportError
from gamejolt_api.api.requests import Request
from gamejolt_api.api.transport import HttpxTransport
from gamejolt_api.api.values import Value
from gamejolt_api.config import Config
from gamejolt_api.output import Output

R = TypeVar("R", bound=Request)
V = TypeVar("V", bound=Value)


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    cfg: Config

    @property
    def game_id(self) -> str:
        """Configured game ID; exits with an error when missing."""
        if not self.cfg.game_id:
            self.out.print_error_and_exit("missing_credentials", "Game ID is not configured (use --game-id or config.toml).")
        return self.cfg.game_id

    @property
    def private_key(self) -> str:
        """Configured private key; exits with an error when missing."""
        if not self.cfg.private_key:
            self.out.print_error_and_exit("missing_credentials", "Private key is not configured (use --key or config.toml).")
        return self.cfg.private_key

    def build(self, request_type: type[R], **params: Any) -> R:
        """Construct a request; print an error and exit when its parameters are invalid."""
        try:
            return request_type(game_id=self.game_id, **params)
        except ConstructionError as e:
            self.out.print_error_and_exit(e.code, str(e))

    def call(self, request: Request, value_type: type[V], *, reject: bool = True) -> V:
        """Send one request and return its value; print an error and exit on any failure.

        Args:
            request: The request to send.
            value_type: Expected value type of the request's endpoint.
            reject: Exit with "rejected" when the server answers success: false.

        """
        key = self.private_key

        async def run() -> Value:
            async with HttpxTransport(timeout=self.cfg.timeout) as transport:
                client = GameJoltClient(transport, base_url=self.cfg.base_url, version=self.cfg.api_version)
                return await client.call(request, key)

        try:
            value = asyncio.run(run())
        except (TransportError, RequestCancelledError, DecodeError) as e:
            self.out.print_error_and_exit(e.code, str(e))
        if reject and not value.success:
            self.out.print_error_and_exit("rejected", value.message or "Request rejected by server.")
        return cast(V, value)

    def call_batch(self, requests: list[Request], *, break_on_error: bool = False) -> list[Value]:
        """Send a batch and return its values in submission order; print an error and exit on failure."""
        game_id, key = self.game_id, self.private_key

        async def run() -> list[Value]:
            async with HttpxTransport(timeout=self.cfg.timeout) as transport:
                client = GameJoltClient(transport, base_url=self.cfg.base_url, version=self.cfg.api_version)
                return await client.call_batch(requests, game_id, key, break_on_error=break_on_error)

        try:
            return asyncio.run(run())
        except (ConstructionError, TransportError, RequestCancelledError) as e:
            self.out.print_error_and_exit(e.code, str(e))


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
