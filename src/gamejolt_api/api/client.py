"""Asynchronous Game Jolt API client: single and batch dispatch."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, cast

from gamejolt_api.api.errors import (
    ConstructionError,
    DecodeError,
    GameJoltError,
    RequestCancelledError,
    TransportCancelledError,
    TransportError,
)
from gamejolt_api.api.json_reader import JsonObject, parse_body
from gamejolt_api.api.listener import CollectingListener, Listener
from gamejolt_api.api.requests import Request, ScoresAddRequest, ScoresFetchRequest, encode_request, url_encode
from gamejolt_api.api.signing import signed_url
from gamejolt_api.api.transport import Transport
from gamejolt_api.api.values import Score, ScoresAddValue, ScoresFetchValue, Value, decode_value

logger = logging.getLogger(__name__)

API_URL = "https://api.gamejolt.com/api/game/"
API_VERSION = "v1_2"

# Server-side limit on sub-requests per batch call
MAX_BATCH_SIZE = 50


class GameJoltClient:
    """Builds signed URLs, sends them through a transport and delivers decoded values to listeners.

    The client holds no per-call state; concurrent calls are safe.
    """

    def __init__(self, transport: Transport, *, base_url: str = API_URL, version: str = API_VERSION) -> None:
        """Initialize the client.

        Args:
            transport: Sends signed URLs and returns response bodies.
            base_url: API root, ending with a slash.
            version: Protocol version path segment.

        """
        self._transport = transport
        self._root = base_url + version

    def request_url(self, request: Request, key: str) -> str:
        """Build the fully qualified, signed URL of a single request."""
        return signed_url(self._root + encode_request(request), key)

    def batch_url(
        self, requests: Sequence[Request], game_id: str, key: str, *, parallel: bool = False, break_on_error: bool = False
    ) -> str:
        """Build the fully qualified, signed URL of a batch call.

        Each sub-request is signed on its own relative URL, then embedded as one
        ``requests[]`` value; the assembled outer URL is signed last.

        Raises:
            ConstructionError: Empty or oversized batch, or both parallel and break_on_error set.

        """
        if not requests:
            raise ConstructionError("A batch needs at least one sub-request.")
        if len(requests) > MAX_BATCH_SIZE:
            raise ConstructionError(f"A batch holds at most {MAX_BATCH_SIZE} sub-requests, got {len(requests)}.")
        if parallel and break_on_error:
            raise ConstructionError("'parallel' and 'break_on_error' cannot be used together.")
        if not game_id:
            raise ConstructionError("Batch: 'game_id' is required.")

        parts = [f"{self._root}/batch/?game_id={game_id}"]
        if parallel:
            parts.append("&parallel=true")
        elif break_on_error:
            parts.append("&break_on_error=true")
        for request in requests:
            parts.append("&requests[]=" + url_encode(signed_url(encode_request(request), key)))
        return signed_url("".join(parts), key)

    async def send(self, request: Request, key: str, listener: Listener) -> None:
        """Send one request and deliver its outcome to the listener.

        Args:
            request: The request to send.
            key: The game's private key.
            listener: Receives exactly one of response, failed or cancelled.

        Raises:
            DecodeError: The response body does not match the endpoint's contract.

        """
        url = self.request_url(request, key)
        logger.debug("Sending %s", request.endpoint)
        body = await self._exchange(url, (listener,))
        if body is None:
            return
        value = decode_value(request, parse_body(body))
        listener.response(request, value)

    async def send_batch(
        self,
        requests: Sequence[Request],
        game_id: str,
        key: str,
        *listeners: Listener,
        parallel: bool = False,
        break_on_error: bool = False,
    ) -> None:
        """Send sub-requests in one batch call and deliver each decoded value in submission order.

        Every listener gets ``response(request, value)`` for each sub-request, or a
        single ``failed``/``cancelled``. The batch is cancelled as a whole when the
        server reports failure (also after a ``break_on_error`` short-circuit), when the
        number of sub-responses differs from the number of sub-requests, or when a
        sub-response cannot be decoded.

        Args:
            requests: Sub-requests, 1 to 50.
            game_id: The game's ID, sent on the outer call.
            key: The game's private key, used for every signature.
            listeners: Notified of the outcome.
            parallel: Let the server process sub-requests concurrently.
            break_on_error: Stop processing at the first failing sub-request.

        """
        requests = list(requests)
        url = self.batch_url(requests, game_id, key, parallel=parallel, break_on_error=break_on_error)
        logger.debug("Sending batch of %d: %s", len(requests), ", ".join(r.endpoint for r in requests))
        body = await self._exchange(url, listeners)
        if body is None:
            return
        values = self._correlate(requests, body)
        if values is None:
            for listener in listeners:
                listener.cancelled()
            return
        for request, value in zip(requests, values, strict=True):
            for listener in listeners:
                listener.response(request, value)

    async def _exchange(self, url: str, listeners: Sequence[Listener]) -> str | None:
        """Run the transport; on failure or cancellation notify listeners and return None."""
        try:
            return await self._transport.send(url)
        except TransportCancelledError:
            logger.info("Request cancelled by transport")
            for listener in listeners:
                listener.cancelled()
        except TransportError as e:
            logger.warning("Transport failure: %s", e)
            for listener in listeners:
                listener.failed(e)
        except asyncio.CancelledError:
            for listener in listeners:
                listener.cancelled()
            raise
        return None

    @staticmethod
    def _correlate(requests: list[Request], body: str) -> list[Value] | None:
        """Decode a batch body positionally against the sub-requests; None when it cannot be correlated."""
        try:
            envelope = JsonObject(parse_body(body))
            responses: Any = envelope.data.get("responses")
            if not envelope.get_bool("success", False):
                last_message = ""
                if isinstance(responses, list) and responses and isinstance(responses[-1], dict):
                    last_message = JsonObject(responses[-1]).get_str("message", "")
                logger.warning(
                    "Batch request failed: %s %r", envelope.get_str("message", "No error returned from server."), last_message
                )
                return None
            if not isinstance(responses, list) or len(responses) != len(requests):
                count = len(responses) if isinstance(responses, list) else None
                logger.warning("Batch response count mismatch: sent %d, received %s", len(requests), count)
                return None
            values = []
            for request, item in zip(requests, responses, strict=True):
                if not isinstance(item, dict):
                    raise DecodeError(f"Batch sub-response is not an object: {item!r}")
                values.append(decode_value(request, item))
        except DecodeError:
            logger.warning("Batch response could not be decoded", exc_info=True)
            return None
        return values

    # --- Return-value API ---

    async def call(self, request: Request, key: str) -> Value:
        """Send one request and return its value.

        Raises:
            TransportError: The exchange failed.
            RequestCancelledError: The exchange was cancelled.
            DecodeError: The response does not match the endpoint's contract.

        """
        collector = CollectingListener()
        await self.send(request, key, collector)
        return _collected(collector)[0]

    async def call_batch(
        self,
        requests: Sequence[Request],
        game_id: str,
        key: str,
        *,
        parallel: bool = False,
        break_on_error: bool = False,
    ) -> list[Value]:
        """Send a batch and return the values in submission order.

        Raises:
            TransportError: The exchange failed.
            RequestCancelledError: The batch was cancelled or could not be correlated.

        """
        collector = CollectingListener()
        await self.send_batch(requests, game_id, key, collector, parallel=parallel, break_on_error=break_on_error)
        return _collected(collector)

    # --- Convenience methods ---

    async def add_guest_score(
        self, game_id: str, key: str, guest: str, sort: int, *, score: str | None = None, table_id: int | None = None
    ) -> ScoresAddValue:
        """Add a guest score; the display score defaults to the sort value's text."""
        request = ScoresAddRequest(
            game_id=game_id, guest=guest, score=score if score is not None else str(sort), sort=sort, table_id=table_id
        )
        return cast(ScoresAddValue, await self.call(request, key))

    async def download_scores(
        self, game_id: str, key: str, *, limit: int | None = None, table_id: int | None = None
    ) -> tuple[Score, ...]:
        """Fetch the scores of a table.

        Raises:
            GameJoltError: The server rejected the request (code "rejected").

        """
        request = ScoresFetchRequest(game_id=game_id, limit=limit, table_id=table_id)
        value = cast(ScoresFetchValue, await self.call(request, key))
        if not value.success:
            raise GameJoltError(value.message or "Score fetch rejected by server.", code="rejected")
        return value.scores


def _collected(collector: CollectingListener) -> list[Value]:
    """Turn a collector's recorded outcome into values or an exception."""
    if collector.error is not None:
        raise collector.error
    if collector.was_cancelled:
        raise RequestCancelledError("Request was cancelled.")
    return collector.values
