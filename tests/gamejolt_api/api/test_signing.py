"""Tests for request signing."""

from gamejolt_api.api.signing import SIGNATURE_LENGTH, sign, signed_url

KEY = "78ac632c55945de5cb5f30b735246a8c"
URL = "/scores/add/?game_id=869827&guest=Alice&score=100%20cookies&sort=100"


class TestSign:
    """MD5 of url + key as lowercase hex."""

    def test_known_vector(self):
        """Canonical score submission signs to the known digest."""
        assert sign(URL, KEY) == "a4496b416ad220635787aec5ca89e312"

    def test_absolute_url(self):
        """The base URL is part of the signed text for single requests."""
        url = "https://api.gamejolt.com/api/game/v1_2" + URL
        assert sign(url, KEY) == "45f564113080be3d371e8b58ecf47134"

    def test_length_and_case(self):
        """Signature is 32 lowercase hex characters."""
        signature = sign("/time/?game_id=1", "secret")
        assert len(signature) == SIGNATURE_LENGTH
        assert signature == signature.lower()
        assert all(c in "0123456789abcdef" for c in signature)

    def test_deterministic(self):
        """Same input produces the same signature."""
        assert sign("/time/?game_id=1", "secret") == sign("/time/?game_id=1", "secret")

    def test_key_changes_signature(self):
        """A different key produces a different signature."""
        assert sign(URL, KEY) != sign(URL, "other-key")


class TestSignedUrl:
    """Signature appended as the last query parameter."""

    def test_appends_signature(self):
        """The signature covers the URL before the signature parameter."""
        assert signed_url("/time/?game_id=1", "secret") == "/time/?game_id=1&signature=590c88dca91febb603957ce72d3e0324"
