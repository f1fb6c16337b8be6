"""Tests for reading the app-provided credentials file."""

from gamejolt_api.credentials import CREDENTIALS_FILENAME, Credentials, read_credentials


class TestReadCredentials:
    """.gj-credentials parsing."""

    def test_valid(self, tmp_path):
        """Username and token are read from lines two and three."""
        (tmp_path / CREDENTIALS_FILENAME).write_text("0.2.1\nbob\n  tok123  \n")
        assert read_credentials(tmp_path) == Credentials(username="bob", token="tok123")

    def test_missing(self, tmp_path):
        """A missing file yields None."""
        assert read_credentials(tmp_path) is None

    def test_too_short(self, tmp_path):
        """A file without a token line yields None."""
        (tmp_path / CREDENTIALS_FILENAME).write_text("0.2.1\nbob\n")
        assert read_credentials(tmp_path) is None

    def test_blank_token(self, tmp_path):
        """A blank token line yields None."""
        (tmp_path / CREDENTIALS_FILENAME).write_text("0.2.1\nbob\n   \n")
        assert read_credentials(tmp_path) is None
