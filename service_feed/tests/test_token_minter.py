"""
Unit tests for feed token minting.
"""

import re
import pytest
from unittest.mock import patch

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_feed.app.tokens.minter import DEFAULT_TOKEN_BYTES, TokenMinter, mint_token

HEX_40 = re.compile(r"^[0-9a-f]{40}$")


class TestTokenMinter:
    """Test cases for TokenMinter."""

    def test_default_token_is_40_lowercase_hex_chars(self):
        """Default tokens carry 20 random bytes."""
        token = TokenMinter().mint()
        assert DEFAULT_TOKEN_BYTES == 20
        assert HEX_40.match(token)

    def test_length_controls_byte_count(self):
        """Token length is twice the byte length."""
        assert len(mint_token(4)) == 8
        assert len(TokenMinter(32).mint()) == 64

    def test_sequential_tokens_do_not_collide(self):
        """10,000 minted tokens are all distinct."""
        minter = TokenMinter()
        tokens = {minter.mint() for _ in range(10_000)}
        assert len(tokens) == 10_000

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        """A token needs at least one byte of entropy."""
        with pytest.raises(ValueError):
            mint_token(length)
        with pytest.raises(ValueError):
            TokenMinter(length)

    def test_uses_secure_random_source(self):
        """Tokens come from the secrets module."""
        with patch("service_feed.app.tokens.minter.secrets.token_hex", return_value="ab" * 20) as token_hex:
            token = TokenMinter().mint()

        assert token == "ab" * 20
        token_hex.assert_called_once_with(20)
