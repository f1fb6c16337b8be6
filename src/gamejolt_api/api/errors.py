"""Exception hierarchy for the Game Jolt API client."""


class GameJoltError(Exception):
    """Base error raised by the Game Jolt API client."""

    code = "error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        """Initialize with a human-readable message and an optional machine-readable code.

        Args:
            message: Human-readable error description.
            code: Machine-readable error code. Defaults to the class-level code.

        """
        super().__init__(message)
        if code is not None:
            self.code = code


class ConstructionError(GameJoltError):
    """A request or batch was built with missing or conflicting parameters."""

    code = "invalid_request"


class DecodeError(GameJoltError):
    """A server response does not match the shape the decoder expects."""

    code = "decode"


class TransportError(GameJoltError):
    """The HTTP exchange could not be completed (DNS, timeout, reset, bad status)."""

    code = "transport"


class TransportCancelledError(GameJoltError):
    """The transport reports that the exchange was cancelled."""

    code = "cancelled"


class RequestCancelledError(GameJoltError):
    """A call ended on the cancellation path (cancelled transfer or batch correlation failure)."""

    code = "cancelled"


class UnhandledValueError(GameJoltError):
    """A strict listener received a value for an endpoint it has no handler for."""

    code = "unhandled_value"
