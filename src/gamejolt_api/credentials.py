"""Player credentials passed by the Game Jolt desktop app.

Games launched from the Game Jolt app find a ``.gj-credentials`` file next to their
executable: a version line, then the username, then the game token.
"""

from dataclasses import dataclass
from pathlib import Path

CREDENTIALS_FILENAME = ".gj-credentials"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Username and game token of the player."""

    username: str
    token: str


def read_credentials(directory: Path) -> Credentials | None:
    """Read the app-provided credentials file, returning None if missing or malformed."""
    path = directory / CREDENTIALS_FILENAME
    if not path.is_file():
        return None
    try:
        lines = path.read_text().splitlines()
    except OSError:
        return None
    if len(lines) < 3 or not lines[1].strip() or not lines[2].strip():
        return None
    return Credentials(username=lines[1].strip(), token=lines[2].strip())
