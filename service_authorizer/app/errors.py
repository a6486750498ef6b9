"""
Failure taxonomy for the token verification pipeline.

Every failure the pipeline can produce is a ``VerificationError``. The
authorizer boundary catches them once and turns them into a deny decision;
``code`` is what gets logged and counted. ``details`` may carry a key id,
URL or HTTP status, never key material.
"""

from typing import Any, Dict, Optional

from shared.errors import AuthenticationError


class VerificationError(AuthenticationError):
    """Base class for token verification failures."""

    code = "VERIFICATION_ERROR"
    default_message = "Token verification failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.default_message, details, code=self.code)


class AuthHeaderMissing(VerificationError):
    code = "AUTH_HEADER_MISSING"
    default_message = "No authentication header"


class AuthHeaderMalformed(VerificationError):
    code = "AUTH_HEADER_MALFORMED"
    default_message = "Invalid authentication header"


class TokenDecodeError(VerificationError):
    code = "TOKEN_DECODE_ERROR"
    default_message = "Token could not be decoded"


class KeySetUnavailable(VerificationError):
    code = "KEY_SET_UNAVAILABLE"
    default_message = "The JWKS endpoint could not be read"


class KeySetEmpty(VerificationError):
    code = "KEY_SET_EMPTY"
    default_message = "The JWKS endpoint did not contain any keys"


class NoUsableKeys(VerificationError):
    code = "NO_USABLE_KEYS"
    default_message = "The JWKS endpoint did not contain any signature verification keys"


class KeyNotFound(VerificationError):
    code = "KEY_NOT_FOUND"
    default_message = "No signing key matches the token key id"


class MalformedKey(VerificationError):
    code = "MALFORMED_KEY"
    default_message = "Signing key has no certificate chain"


class SignatureInvalid(VerificationError):
    code = "SIGNATURE_INVALID"
    default_message = "Token signature verification failed"


class ClaimsInvalid(VerificationError):
    code = "CLAIMS_INVALID"
    default_message = "Token claims failed validation"


__all__ = [
    "VerificationError",
    "AuthHeaderMissing",
    "AuthHeaderMalformed",
    "TokenDecodeError",
    "KeySetUnavailable",
    "KeySetEmpty",
    "NoUsableKeys",
    "KeyNotFound",
    "MalformedKey",
    "SignatureInvalid",
    "ClaimsInvalid",
]
