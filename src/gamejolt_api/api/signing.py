"""Request signing: MD5 digest of the canonical URL followed by the game's private key.

The Game Jolt protocol mandates MD5 for signatures.
"""

from cryptography.hazmat.primitives import hashes

# Hex length of an MD5 digest
SIGNATURE_LENGTH = 32


def sign(url: str, key: str) -> str:
    """Return the lowercase hex MD5 of ``url + key``.

    Args:
        url: The URL exactly as it will be sent, without the signature parameter.
        key: The game's private key.

    """
    digest = hashes.Hash(hashes.MD5())
    digest.update((url + key).encode())
    return digest.finalize().hex()


def signed_url(url: str, key: str) -> str:
    """Append the ``signature`` query parameter to a URL."""
    return f"{url}&signature={sign(url, key)}"
