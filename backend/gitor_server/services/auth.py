"""
Request authentication.

Clients send a shared secret in the Authorization header, base64 encoded.
The decoded secret must be one of the tokens whitelisted in the server
configuration. Tokens never expire and carry no scope.
"""

import base64
import binascii
import logging
import secrets
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def decode_token(header_value: str) -> bytes | None:
    """
    Decode an Authorization header value.

    Args:
        header_value: Raw header value (standard base64)

    Returns:
        The decoded token bytes, or None if the value is not valid base64
    """
    try:
        return base64.b64decode(header_value, validate=True)
    except (binascii.Error, ValueError):
        return None


def encode_token(token: str) -> str:
    """Encode a token the way clients put it on the wire."""
    return base64.b64encode(token.encode("utf-8")).decode("ascii")


class TokenValidator:
    """Checks presented credentials against the token whitelist."""

    def __init__(self, whitelist: Iterable[str]):
        self._tokens = [token.encode("utf-8") for token in whitelist]

    def validate(self, header_value: str | None) -> bool:
        """
        Validate a raw Authorization header value.

        Returns:
            True if the header decodes to a whitelisted token, False otherwise
            (missing header, malformed base64 or unknown token).
        """
        if not header_value:
            return False

        decoded = decode_token(header_value)
        if decoded is None:
            logger.warning("Rejected credential: malformed base64")
            return False

        # Compare against every token so timing does not depend on position
        matched = False
        for token in self._tokens:
            if secrets.compare_digest(decoded, token):
                matched = True

        if not matched:
            logger.warning("Rejected credential: token not in whitelist")
        return matched
