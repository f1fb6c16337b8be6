"""Typed results decoded from Game Jolt API responses.

Every value carries the mandatory ``success`` flag, the optional ``message`` the server
sends on failure, a back-reference to the request that produced it, and the
endpoint-specific payload. A ``success: false`` response is a normal value with a
message, not an error; its payload fields keep their defaults.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, ClassVar

from gamejolt_api.api.json_reader import JsonObject
from gamejolt_api.api.requests import Endpoint, Request


class TrophyDifficulty(StrEnum):
    """Trophy tier."""

    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class UserType(StrEnum):
    """Account type of a Game Jolt user."""

    USER = "User"
    DEVELOPER = "Developer"
    MODERATOR = "Moderator"
    ADMINISTRATOR = "Administrator"


class UserStatus(StrEnum):
    """Account status of a Game Jolt user."""

    ACTIVE = "Active"
    BANNED = "Banned"


def _optional_int(obj: JsonObject, name: str) -> int | None:
    """Read an integer that the server sends as an empty string when unset."""
    if obj.get_str(name, "") == "":
        return None
    return obj.get_int(name)


# --- Records ---


@dataclass(frozen=True)
class Score:
    """One entry of a score table."""

    score: str
    sort: int
    extra_data: str
    user: str
    user_id: int | None
    guest: str
    stored: str
    stored_timestamp: int

    @property
    def is_guest(self) -> bool:
        """Check if the score was submitted by a guest."""
        return self.user_id is None

    @property
    def name(self) -> str:
        """Display name of whoever submitted the score."""
        return self.guest if self.is_guest else self.user

    @staticmethod
    def from_json(obj: JsonObject) -> "Score":
        """Decode a score entry."""
        return Score(
            score=obj.get_str("score"),
            sort=obj.get_int("sort"),
            extra_data=obj.get_str("extra_data", ""),
            user=obj.get_str("user", ""),
            user_id=_optional_int(obj, "user_id"),
            guest=obj.get_str("guest", ""),
            stored=obj.get_str("stored"),
            stored_timestamp=obj.get_int("stored_timestamp", 0),
        )


@dataclass(frozen=True)
class ScoreTable:
    """A score table of the game."""

    id: int
    name: str
    description: str
    primary: bool

    @staticmethod
    def from_json(obj: JsonObject) -> "ScoreTable":
        """Decode a score table entry."""
        return ScoreTable(
            id=obj.get_int("id"),
            name=obj.get_str("name"),
            description=obj.get_str("description", ""),
            primary=obj.get_bool("primary", False),
        )


@dataclass(frozen=True)
class Trophy:
    """A trophy and whether the user has achieved it.

    ``achieved`` is the server's text: "false", or how long ago it was achieved.
    """

    id: int
    title: str
    description: str
    difficulty: TrophyDifficulty
    image_url: str
    achieved: str

    @property
    def is_achieved(self) -> bool:
        """Check if the user has achieved the trophy."""
        return self.achieved.lower() != "false"

    @staticmethod
    def from_json(obj: JsonObject) -> "Trophy":
        """Decode a trophy entry."""
        return Trophy(
            id=obj.get_int("id"),
            title=obj.get_str("title"),
            description=obj.get_str("description", ""),
            difficulty=obj.get_enum("difficulty", TrophyDifficulty),
            image_url=obj.get_str("image_url", ""),
            achieved=obj.get_str("achieved", "false"),
        )


@dataclass(frozen=True)
class User:
    """A Game Jolt user profile."""

    id: int
    type: UserType
    username: str
    avatar_url: str
    signed_up: str
    signed_up_timestamp: int
    last_logged_in: str
    last_logged_in_timestamp: int
    status: UserStatus
    developer_name: str
    developer_website: str
    developer_description: str

    @staticmethod
    def from_json(obj: JsonObject) -> "User":
        """Decode a user entry."""
        return User(
            id=obj.get_int("id"),
            type=obj.get_enum("type", UserType),
            username=obj.get_str("username"),
            avatar_url=obj.get_str("avatar_url"),
            signed_up=obj.get_str("signed_up", ""),
            signed_up_timestamp=obj.get_int("signed_up_timestamp", 0),
            last_logged_in=obj.get_str("last_logged_in", ""),
            last_logged_in_timestamp=obj.get_int("last_logged_in_timestamp", 0),
            status=obj.get_enum("status", UserStatus),
            developer_name=obj.get_str("developer_name", ""),
            developer_website=obj.get_str("developer_website", ""),
            developer_description=obj.get_str("developer_description", ""),
        )


# --- Values ---


@dataclass(frozen=True, kw_only=True)
class Value:
    """Base for all decoded endpoint results."""

    endpoint: ClassVar[Endpoint]

    request: Request
    success: bool
    message: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:  # noqa: ARG003
        """Extract the endpoint-specific fields of a successful response."""
        return {}


@dataclass(frozen=True, kw_only=True)
class ScoresAddValue(Value):
    """Result of adding a score."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_ADD


@dataclass(frozen=True, kw_only=True)
class ScoresFetchValue(Value):
    """Scores of a table, best first."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_FETCH

    scores: tuple[Score, ...] = ()

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the score list."""
        return {"scores": tuple(Score.from_json(child) for child in obj.children("scores"))}


@dataclass(frozen=True, kw_only=True)
class ScoresGetRankValue(Value):
    """Rank of a sort value on a table."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_GET_RANK

    rank: int = 0

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the rank."""
        return {"rank": obj.get_int("rank", 0)}


@dataclass(frozen=True, kw_only=True)
class ScoresTablesValue(Value):
    """The game's score tables."""

    endpoint: ClassVar[Endpoint] = Endpoint.SCORES_TABLES

    tables: tuple[ScoreTable, ...] = ()

    @property
    def primary_table(self) -> ScoreTable | None:
        """The table scores go to when no table ID is given."""
        return next((t for t in self.tables if t.primary), None)

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the table list."""
        return {"tables": tuple(ScoreTable.from_json(child) for child in obj.children("tables"))}


@dataclass(frozen=True, kw_only=True)
class SessionsOpenValue(Value):
    """Result of opening a session."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_OPEN


@dataclass(frozen=True, kw_only=True)
class SessionsPingValue(Value):
    """Result of pinging a session."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_PING


@dataclass(frozen=True, kw_only=True)
class SessionsCheckValue(Value):
    """Result of checking a session; ``success`` is true when a session is open."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_CHECK


@dataclass(frozen=True, kw_only=True)
class SessionsCloseValue(Value):
    """Result of closing a session."""

    endpoint: ClassVar[Endpoint] = Endpoint.SESSIONS_CLOSE


@dataclass(frozen=True, kw_only=True)
class UsersAuthValue(Value):
    """Result of verifying a username/token pair."""

    endpoint: ClassVar[Endpoint] = Endpoint.USERS_AUTH


@dataclass(frozen=True, kw_only=True)
class UsersFetchValue(Value):
    """Fetched user profiles."""

    endpoint: ClassVar[Endpoint] = Endpoint.USERS_FETCH

    users: tuple[User, ...] = ()

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the user list."""
        return {"users": tuple(User.from_json(child) for child in obj.children("users"))}


@dataclass(frozen=True, kw_only=True)
class DataStoreFetchValue(Value):
    """Data stored under a key."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_FETCH

    data: str | None = None

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the stored data."""
        return {"data": obj.get_str("data")}


@dataclass(frozen=True, kw_only=True)
class DataStoreSetValue(Value):
    """Result of storing data."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_SET


@dataclass(frozen=True, kw_only=True)
class DataStoreUpdateValue(Value):
    """Result of updating data; ``data`` is the new value when the server returns it."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_UPDATE

    data: str | None = None

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the updated data, if present."""
        return {"data": obj.get_str("data", None)}


@dataclass(frozen=True, kw_only=True)
class DataStoreRemoveValue(Value):
    """Result of removing a key."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_REMOVE


@dataclass(frozen=True, kw_only=True)
class DataStoreGetKeysValue(Value):
    """Data-store keys."""

    endpoint: ClassVar[Endpoint] = Endpoint.DATA_STORE_GET_KEYS

    keys: tuple[str, ...] = ()

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the key list."""
        return {"keys": tuple(child.get_str("key") for child in obj.children("keys"))}


@dataclass(frozen=True, kw_only=True)
class TrophiesFetchValue(Value):
    """Fetched trophies."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_FETCH

    trophies: tuple[Trophy, ...] = ()

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the trophy list."""
        return {"trophies": tuple(Trophy.from_json(child) for child in obj.children("trophies"))}


@dataclass(frozen=True, kw_only=True)
class TrophiesAddAchievedValue(Value):
    """Result of awarding a trophy."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_ADD_ACHIEVED


@dataclass(frozen=True, kw_only=True)
class TrophiesRemoveAchievedValue(Value):
    """Result of revoking a trophy."""

    endpoint: ClassVar[Endpoint] = Endpoint.TROPHIES_REMOVE_ACHIEVED


@dataclass(frozen=True, kw_only=True)
class FriendsFetchValue(Value):
    """User IDs of a user's friends."""

    endpoint: ClassVar[Endpoint] = Endpoint.FRIENDS_FETCH

    friends: tuple[int, ...] = ()

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the friend IDs."""
        return {"friends": tuple(child.get_int("friend_id") for child in obj.children("friends"))}


@dataclass(frozen=True, kw_only=True)
class TimeFetchValue(Value):
    """Server time, as a UNIX timestamp and as calendar fields in the server's timezone."""

    endpoint: ClassVar[Endpoint] = Endpoint.TIME_FETCH

    timestamp: int = 0
    timezone: str = ""
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    def as_datetime(self) -> datetime:
        """Return the server timestamp as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, UTC)

    def __str__(self) -> str:
        """Format as ``M/D/YYYY h:mm:ss AM``."""
        hour = 12 if self.hour % 12 == 0 else self.hour % 12
        suffix = "AM" if self.hour < 12 else "PM"
        return f"{self.month}/{self.day}/{self.year} {hour}:{self.minute:02d}:{self.second:02d} {suffix}"

    @classmethod
    def payload(cls, obj: JsonObject) -> dict[str, Any]:
        """Extract the time fields."""
        return {
            "timestamp": obj.get_int("timestamp", 0),
            "timezone": obj.get_str("timezone"),
            "year": obj.get_int("year"),
            "month": obj.get_int("month"),
            "day": obj.get_int("day"),
            "hour": obj.get_int("hour"),
            "minute": obj.get_int("minute"),
            "second": obj.get_int("second"),
        }


VALUE_TYPES: dict[Endpoint, type[Value]] = {
    value_type.endpoint: value_type
    for value_type in (
        ScoresAddValue,
        ScoresFetchValue,
        ScoresGetRankValue,
        ScoresTablesValue,
        SessionsOpenValue,
        SessionsPingValue,
        SessionsCheckValue,
        SessionsCloseValue,
        UsersAuthValue,
        UsersFetchValue,
        DataStoreFetchValue,
        DataStoreSetValue,
        DataStoreUpdateValue,
        DataStoreRemoveValue,
        DataStoreGetKeysValue,
        TrophiesFetchValue,
        TrophiesAddAchievedValue,
        TrophiesRemoveAchievedValue,
        FriendsFetchValue,
        TimeFetchValue,
    )
}


def decode_value(request: Request, data: dict[str, Any]) -> Value:
    """Decode one endpoint response into the value type of the request's endpoint.

    Args:
        request: The request the response answers; kept as the value's back-reference.
        data: The response object (already unwrapped from the ``response`` envelope).

    Raises:
        DecodeError: ``success`` or a mandatory payload field is missing or malformed.

    """
    value_type = VALUE_TYPES[request.endpoint]
    obj = JsonObject(data)
    success = obj.get_bool("success")
    message = obj.get_str("message", None)
    payload = value_type.payload(obj) if success else {}
    return value_type(request=request, success=success, message=message, raw=data, **payload)
