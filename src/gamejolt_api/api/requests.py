"""Typed Game Jolt API requests and their canonical URL encoding.

Every request is an immutable value object tagged with its endpoint. The canonical form is
the relative path plus query string, without the base URL and without the signature:

    /scores/add/?game_id=869827&guest=Alice&score=100%20cookies&sort=100

Parameters are emitted in a fixed per-endpoint order; the server verifies the signature
over the URL exactly as sent, so the order is part of the wire format.
"""

from collections.abc import Sequence
from dataclasses import MISSING, dataclass, fields
from enum import Enum, StrEnum
from typing import ClassVar, TypeAlias
from urllib.parse import quote

from gamejolt_api.api.errors import ConstructionError

ParamValue: TypeAlias = str | int | bool | Enum | tuple[int, ...] | None

# Server-side limit on scores returned by one fetch
MAX_SCORES_LIMIT = 100


class Endpoint(StrEnum):
    """API endpoint tag; the value is the endpoint's path below the version segment."""

    SCORES_ADD = "scores/add"
    SCORES_FETCH = "scores"
    SCORES_GET_RANK = "scores/get-rank"
    SCORES_TABLES = "scores/tables"
    SESSIONS_OPEN = "sessions/open"
    SESSIONS_PING = "sessions/ping"
    SESSIONS_CHECK = "sessions/check"
    SESSIONS_CLOSE = "sessions/close"
    USERS_AUTH = "users/auth"
    USERS_FETCH = "users"
    DATA_STORE_FETCH = "data-store"
    DATA_STORE_SET = "data-store/set"
    DATA_STORE_UPDATE = "data-store/update"
    DATA_STORE_REMOVE = "data-store/remove"
    DATA_STORE_GET_KEYS = "data-store/get-keys"
    TROPHIES_FETCH = "trophies"
    TROPHIES_ADD_ACHIEVED = "trophies/add-achieved"
    TROPHIES_REMOVE_ACHIEVED = "trophies/remove-achieved"
    FRIENDS_FETCH = "friends"
    TIME_FETCH = "time"


class SessionStatus(StrEnum):
    """Player activity reported with a session ping."""

    ACTIVE = "active"
    IDLE = "idle"


class OperationType(StrEnum):
    """Server-side mutation applied by a data-store update."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    APPEND = "append"
    PREPEND = "prepend"


def url_encode(value: str) -> str:
    """Percent-encode a query value (form encoding, but with spaces as %20)."""
    return quote(value, safe="*").replace("~", "%7E")


def _format_param(value: str | int | bool | Enum | tuple[int, ...]) -> str:
    """Render one parameter value in its wire form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Enum):
        return url_encode(str(value.value))
    if isinstance(value, tuple):
        return ",".join(str(item) for item in value)
    return url_encode(value)


class Request:
    """Base for all endpoint requests.

    Subclasses are frozen, keyword-only dataclasses compared by identity, so two
    structurally identical sub-requests of one batch remain distinguishable.
    Fields without a default are mandatory: omitting one raises TypeError, passing
    None raises ConstructionError. Identifier fields listed in ``non_empty`` also
    reject an empty string; other text (score, data, values) may be empty.
    """

    endpoint: ClassVar[Endpoint]
    non_empty: ClassVar[tuple[str, ...]] = ("game_id",)
    game_id: str

    def __post_init__(self) -> None:
        """Reject mandatory fields that are None and identifiers that are empty."""
        for f in fields(self):  # type: ignore[arg-type]
            if f.default is not MISSING or f.default_factory is not MISSING:
                continue
            if getattr(self, f.name) is None:
                raise ConstructionError(f"{type(self).__name__}: '{f.name}' is required.")
        for name in self.non_empty:
            if getattr(self, name) == "":
                raise ConstructionError(f"{type(self).__name__}: '{name}' must not be empty.")

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return ()


def encode_request(request: Request) -> str:
    """Build the canonical relative URL of a request (no base URL, no signature)."""
    parts = [f"/{request.endpoint}/?game_id={request.game_id}"]
    for name, value in request.params():
        if value is None or value == ():
            continue
        parts.append(f"&{name}={_format_param(value)}")
    return "".join(parts)


def _ids(values: Sequence[int]) -> tuple[int, ...]:
    return tuple(int(v) for v in values)


# --- Scores ---


@dataclass(frozen=True, eq=False, kw_only=True)
class ScoresAddRequest(Request):
    """Add a score for a user or guest.

    ``score`` is the display string shown on the table; ``sort`` is the numeric value
    all ordering is based on.
    """

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_ADD

    game_id: str
    score: str
    sort: int
    username: str | None = None
    user_token: str | None = None
    guest: str | None = None
    extra_data: str | None = None
    table_id: int | None = None

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (
            ("username", self.username),
            ("user_token", self.user_token),
            ("guest", self.guest),
            ("score", self.score),
            ("sort", self.sort),
            ("extra_data", self.extra_data),
            ("table_id", self.table_id),
        )


@dataclass(frozen=True, eq=False, kw_only=True)
class ScoresFetchRequest(Request):
    """Fetch scores from a table, optionally only a user's or guest's, or around a sort value."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_FETCH

    game_id: str
    limit: int | None = None
    table_id: int | None = None
    username: str | None = None
    user_token: str | None = None
    guest: str | None = None
    better_than: int | None = None
    worse_than: int | None = None

    def __post_init__(self) -> None:
        """Validate the limit range."""
        super().__post_init__()
        if self.limit is not None and not 1 <= self.limit <= MAX_SCORES_LIMIT:
            raise ConstructionError(f"ScoresFetchRequest: 'limit' must be between 1 and {MAX_SCORES_LIMIT}.")

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (
            ("limit", self.limit),
            ("table_id", self.table_id),
            ("username", self.username),
            ("user_token", self.user_token),
            ("guest", self.guest),
            ("better_than", self.better_than),
            ("worse_than", self.worse_than),
        )


@dataclass(frozen=True, eq=False, kw_only=True)
class ScoresGetRankRequest(Request):
    """Get the rank a sort value would have on a table."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_GET_RANK

    game_id: str
    sort: int
    table_id: int | None = None

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (("sort", self.sort), ("table_id", self.table_id))


@dataclass(frozen=True, eq=False, kw_only=True)
class ScoresTablesRequest(Request):
    """List the game's score tables."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_TABLES

    game_id: str


# --- Sessions ---


@dataclass(frozen=True, eq=False, kw_only=True)
class _UserRequest(Request):
    """Request authenticated by a mandatory username/token pair."""

    non_empty: ClassVar[tuple[str, ...]] = ("game_id", "username", "user_token")

    game_id: str
    username: str
    user_token: str

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (("username", self.username), ("user_token", self.user_token))


@dataclass(frozen=True, eq=False, kw_only=True)
class SessionsOpenRequest(_UserRequest):
    """Open a game session for a user. Only one session per user can be open."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_OPEN


@dataclass(frozen=True, eq=False, kw_only=True)
class SessionsPingRequest(_UserRequest):
    """Keep a session alive; sessions close after 120 seconds without a ping."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_PING

    status: SessionStatus | None = None

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (*super().params(), ("status", self.status))


@dataclass(frozen=True, eq=False, kw_only=True)
class SessionsCheckRequest(_UserRequest):
    """Check whether a user has an open session; the answer is the response's success flag."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_CHECK


@dataclass(frozen=True, eq=False, kw_only=True)
class SessionsCloseRequest(_UserRequest):
    """Close a user's open session."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_CLOSE


# --- Users ---


@dataclass(frozen=True, eq=False, kw_only=True)
class UsersAuthRequest(_UserRequest):
    """Verify a username/token pair."""

    endpoint: ClassVar[Endpoint] = Endpoint.USERS_AUTH


@dataclass(frozen=True, eq=False, kw_only=True)
class UsersFetchRequest(Request):
    """Fetch users by username or by a list of user IDs. The username wins when both are given."""

    endpoint: ClassVar[Endpoint] = Endpoint.USERS_FETCH

    game_id: str
    username: str | None = None
    user_ids: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Normalize user IDs and require a lookup criterion."""
        super().__post_init__()
        object.__setattr__(self, "user_ids", _ids(self.user_ids))
        if not self.username and not self.user_ids:
            raise ConstructionError("UsersFetchRequest: 'username' or 'user_ids' is required.")

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        if self.username is not None:
            return (("username", self.username),)
        return (("user_id", self.user_ids),)


# --- Data store ---


@dataclass(frozen=True, eq=False, kw_only=True)
class _DataStoreKeyRequest(Request):
    """Data-store request addressing one key, global or (with credentials) per user."""

    non_empty: ClassVar[tuple[str, ...]] = ("game_id", "key")

    game_id: str
    key: str
    username: str | None = None
    user_token: str | None = None

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (("key", self.key), ("username", self.username), ("user_token", self.user_token))


@dataclass(frozen=True, eq=False, kw_only=True)
class DataStoreFetchRequest(_DataStoreKeyRequest):
    """Fetch the data stored under a key."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_FETCH


@dataclass(frozen=True, eq=False, kw_only=True)
class DataStoreSetRequest(_DataStoreKeyRequest):
    """Store data under a key, replacing any previous value."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_SET

    data: str

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (
            ("key", self.key),
            ("data", self.data),
            ("username", self.username),
            ("user_token", self.user_token),
        )


@dataclass(frozen=True, eq=False, kw_only=True)
class DataStoreUpdateRequest(_DataStoreKeyRequest):
    """Apply an arithmetic or string operation to the data stored under a key."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_UPDATE

    operation: OperationType
    value: str | int

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (*super().params(), ("operation", self.operation), ("value", self.value))


@dataclass(frozen=True, eq=False, kw_only=True)
class DataStoreRemoveRequest(_DataStoreKeyRequest):
    """Remove a key and its data."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_REMOVE


@dataclass(frozen=True, eq=False, kw_only=True)
class DataStoreGetKeysRequest(Request):
    """List data-store keys, optionally filtered by a pattern (``*`` is a wildcard)."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_GET_KEYS

    game_id: str
    pattern: str | None = None
    username: str | None = None
    user_token: str | None = None

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (("pattern", self.pattern), ("username", self.username), ("user_token", self.user_token))


# --- Trophies ---


@dataclass(frozen=True, eq=False, kw_only=True)
class TrophiesFetchRequest(_UserRequest):
    """Fetch trophies, optionally only achieved/unachieved ones or specific IDs."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_FETCH

    achieved: bool | None = None
    trophy_ids: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Normalize trophy IDs."""
        super().__post_init__()
        object.__setattr__(self, "trophy_ids", _ids(self.trophy_ids))

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (*super().params(), ("achieved", self.achieved), ("trophy_id", self.trophy_ids))


@dataclass(frozen=True, eq=False, kw_only=True)
class TrophiesAddAchievedRequest(_UserRequest):
    """Mark a trophy as achieved by a user."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_ADD_ACHIEVED

    trophy_id: int

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (*super().params(), ("trophy_id", self.trophy_id))


@dataclass(frozen=True, eq=False, kw_only=True)
class TrophiesRemoveAchievedRequest(_UserRequest):
    """Remove a previously achieved trophy from a user."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_REMOVE_ACHIEVED

    trophy_id: int

    def params(self) -> tuple[tuple[str, ParamValue], ...]:
        """Return the parameters following game_id, in wire order."""
        return (*super().params(), ("trophy_id", self.trophy_id))


# --- Friends / Time ---


@dataclass(frozen=True, eq=False, kw_only=True)
class FriendsFetchRequest(_UserRequest):
    """Fetch the IDs of a user's friends."""

    endpoint: ClassVar[Endpoint] = Endpoint.FRIENDS_FETCH


@dataclass(frozen=True, eq=False, kw_only=True)
class TimeFetchRequest(Request):
    """Fetch the server's current time."""

    endpoint: ClassVar[Endpoint] = Endpoint.TIME_FETCH

    game_id: str
