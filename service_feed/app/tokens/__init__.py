"""
Token minting for feed URLs.

A token is the only thing standing between a client and a feed, so it
must come from a cryptographically secure source.
"""

from .minter import DEFAULT_TOKEN_BYTES, TokenMinter, mint_token

__all__ = ["DEFAULT_TOKEN_BYTES", "TokenMinter", "mint_token"]
