"""Tests for Config model validation, computed paths and TOML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gamejolt_api.api.client import API_URL, API_VERSION
from gamejolt_api.config import Config

DATA_DIR = Path("/fake/data-dir")


class TestConfigPaths:
    """Computed path properties derive from data_dir."""

    def test_config_path(self):
        """Config file is data_dir / config.toml."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.config_path == DATA_DIR / "config.toml"

    def test_log_path(self):
        """Log file is data_dir / gamejolt.log."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.log_path == DATA_DIR / "gamejolt.log"


class TestConfigValidation:
    """Pydantic field constraints."""

    def test_defaults(self):
        """Default values for optional fields."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.game_id is None
        assert cfg.private_key is None
        assert cfg.base_url == API_URL
        assert cfg.api_version == API_VERSION
        assert cfg.timeout == 10.0

    def test_timeout_must_be_positive(self):
        """timeout <= 0 is rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, timeout=0)

    def test_private_key_hidden_from_repr(self):
        """The private key does not appear in repr."""
        cfg = Config(data_dir=DATA_DIR, private_key="top-secret")
        assert "top-secret" not in repr(cfg)


class TestConfigBuild:
    """Config.build merges config.toml and explicit overrides."""

    def test_no_file(self, tmp_path):
        """Without config.toml, defaults apply."""
        cfg = Config.build(tmp_path)
        assert cfg.data_dir == tmp_path
        assert cfg.game_id is None

    def test_reads_toml(self, tmp_path):
        """Values are read from config.toml; an integer game ID becomes text."""
        (tmp_path / "config.toml").write_text('game_id = 869827\nprivate_key = "abc"\ntimeout = 3\n')
        cfg = Config.build(tmp_path)
        assert cfg.game_id == "869827"
        assert cfg.private_key == "abc"
        assert cfg.timeout == 3.0

    def test_overrides_win(self, tmp_path):
        """Explicit arguments override config.toml."""
        (tmp_path / "config.toml").write_text('game_id = "1"\nprivate_key = "abc"\n')
        cfg = Config.build(tmp_path, game_id="2", private_key="xyz")
        assert cfg.game_id == "2"
        assert cfg.private_key == "xyz"

    def test_ignores_wrong_types(self, tmp_path):
        """Values of the wrong type are ignored."""
        (tmp_path / "config.toml").write_text('base_url = 5\ntimeout = true\n')
        cfg = Config.build(tmp_path)
        assert cfg.base_url == API_URL
        assert cfg.timeout == 10.0
