"""Listener contract: how the outcome of a sent request reaches the caller.

A call ends in exactly one of three ways per listener: ``response`` with a decoded value
(once per sub-request for batches), ``failed`` with the transport error, or
``cancelled``.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from gamejolt_api.api.errors import UnhandledValueError
from gamejolt_api.api.requests import Endpoint, Request
from gamejolt_api.api.values import Value

logger = logging.getLogger(__name__)


class Listener:
    """Receives call outcomes. All hooks are no-ops; override the ones you need."""

    def response(self, request: Request, value: Value) -> None:
        """Called with the decoded value of a request."""

    def failed(self, error: BaseException) -> None:
        """Called when the transport could not complete the exchange."""

    def cancelled(self) -> None:
        """Called when the exchange was cancelled or a batch response could not be correlated."""


class HandlerListener(Listener):
    """Routes values to per-endpoint callbacks.

    Values for endpoints without a handler are ignored (logged at debug level), or
    rejected with UnhandledValueError when ``strict`` is set.
    """

    def __init__(
        self,
        handlers: Mapping[Endpoint, Callable[[Any], None]],
        *,
        on_failed: Callable[[BaseException], None] | None = None,
        on_cancelled: Callable[[], None] | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize with an endpoint-to-callback map.

        Args:
            handlers: Callback per endpoint, called with the decoded value.
            on_failed: Callback for transport failures.
            on_cancelled: Callback for cancellation.
            strict: Raise on values no handler is registered for, instead of ignoring them.

        """
        self._handlers = dict(handlers)
        self._on_failed = on_failed
        self._on_cancelled = on_cancelled
        self._strict = strict

    def response(self, request: Request, value: Value) -> None:
        """Dispatch the value to the handler registered for its endpoint."""
        handler = self._handlers.get(value.endpoint)
        if handler is None:
            if self._strict:
                raise UnhandledValueError(f"No handler for endpoint '{value.endpoint}'.")
            logger.debug("No handler for endpoint %s, value ignored", value.endpoint)
            return
        handler(value)

    def failed(self, error: BaseException) -> None:
        """Forward a transport failure."""
        if self._on_failed is not None:
            self._on_failed(error)

    def cancelled(self) -> None:
        """Forward a cancellation."""
        if self._on_cancelled is not None:
            self._on_cancelled()


class CollectingListener(Listener):
    """Records every outcome; used to turn callback delivery into return values."""

    def __init__(self) -> None:
        """Initialize with no recorded outcome."""
        self.values: list[Value] = []
        self.error: BaseException | None = None
        self.was_cancelled = False

    def response(self, request: Request, value: Value) -> None:
        """Record a value."""
        self.values.append(value)

    def failed(self, error: BaseException) -> None:
        """Record a transport failure."""
        self.error = error

    def cancelled(self) -> None:
        """Record a cancellation."""
        self.was_cancelled = True
