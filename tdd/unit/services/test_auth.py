"""
Unit tests for request authentication.

These tests verify:
- Whitelisted tokens are accepted
- Unknown, missing and malformed credentials are rejected
- Token encoding matches what clients send
"""
import base64

import pytest

from gitor_server.services.auth import TokenValidator, decode_token, encode_token


@pytest.fixture
def validator():
    return TokenValidator(["alpha-token", "beta-token"])


class TestDecodeToken:
    """Tests for decode_token()."""

    def test_decode_valid_base64(self):
        assert decode_token(base64.b64encode(b"secret").decode()) == b"secret"

    def test_decode_invalid_characters_returns_none(self):
        assert decode_token("not base64!!") is None

    def test_decode_bad_padding_returns_none(self):
        assert decode_token("abc") is None

    def test_decode_non_ascii_returns_none(self):
        assert decode_token("jeton-é") is None


class TestEncodeToken:
    """Tests for encode_token()."""

    def test_encode_round_trips_through_decode(self):
        assert decode_token(encode_token("my-secret")) == b"my-secret"

    def test_encode_uses_standard_alphabet(self):
        # URL-safe base64 would give "Pz4_"
        assert encode_token("?>?") == "Pz4/"


class TestTokenValidator:
    """Tests for TokenValidator.validate()."""

    @pytest.mark.parametrize("token", ["alpha-token", "beta-token"])
    def test_whitelisted_tokens_are_valid(self, validator, token):
        """Every token in the whitelist is accepted."""
        assert validator.validate(encode_token(token)) is True

    @pytest.mark.parametrize("token", ["unknown-secret", "alpha", "alpha-token ", "ALPHA-TOKEN", ""])
    def test_other_tokens_are_invalid(self, validator, token):
        """Anything not exactly in the whitelist is rejected."""
        assert validator.validate(encode_token(token)) is False

    def test_missing_header_is_invalid(self, validator):
        assert validator.validate(None) is False

    def test_empty_header_is_invalid(self, validator):
        assert validator.validate("") is False

    def test_malformed_base64_is_invalid(self, validator):
        assert validator.validate("%%%not-base64%%%") is False

    def test_raw_token_without_encoding_is_invalid(self, validator):
        """The plain token is not accepted in place of its encoding."""
        assert validator.validate("alpha-token") is False

    def test_empty_whitelist_rejects_everything(self):
        validator = TokenValidator([])
        assert validator.validate(encode_token("alpha-token")) is False
