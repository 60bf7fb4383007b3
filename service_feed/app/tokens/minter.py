"""
Random feed token generation.
"""

import secrets

DEFAULT_TOKEN_BYTES = 20


def mint_token(length: int = DEFAULT_TOKEN_BYTES) -> str:
    """Return ``length`` random bytes rendered as lowercase hex (``2 * length`` chars)."""
    if length < 1:
        raise ValueError("token length must be at least one byte")
    return secrets.token_hex(length)


class TokenMinter:
    """Mints fixed-length feed tokens."""

    def __init__(self, length: int = DEFAULT_TOKEN_BYTES):
        if length < 1:
            raise ValueError("token length must be at least one byte")
        self.length = length

    def mint(self) -> str:
        """Mint a fresh token. Collisions are not checked."""
        return mint_token(self.length)
