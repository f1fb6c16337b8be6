"""Centralized CLI configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from gamejolt_api.api.client import API_URL, API_VERSION
from gamejolt_api.api.transport import DEFAULT_TIMEOUT

DEFAULT_DATA_DIR = Path.home() / ".local" / "gamejolt-api"


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for configuration and logs")
    game_id: str | None = Field(default=None, description="Game ID from the game's API settings")
    private_key: str | None = Field(default=None, repr=False, description="Game private key used to sign requests")
    base_url: str = Field(default=API_URL, description="API root URL, ending with a slash")
    api_version: str = Field(default=API_VERSION, description="Protocol version path segment")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "gamejolt.log"

    @staticmethod
    def build(data_dir: Path | None = None, *, game_id: str | None = None, private_key: str | None = None) -> "Config":
        """Build a Config from defaults, optional config.toml and explicit overrides."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            for name in ("game_id", "private_key", "base_url", "api_version"):
                if isinstance(toml_data.get(name), str):
                    kwargs[name] = toml_data[name]
            if isinstance(toml_data.get("game_id"), int):
                kwargs["game_id"] = str(toml_data["game_id"])
            timeout = toml_data.get("timeout")
            if isinstance(timeout, int | float) and not isinstance(timeout, bool):
                kwargs["timeout"] = timeout

        if game_id is not None:
            kwargs["game_id"] = game_id
        if private_key is not None:
            kwargs["private_key"] = private_key
        return Config(**kwargs)
