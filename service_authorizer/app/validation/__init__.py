"""
Token validation package.

Verifies bearer tokens issued by the upstream identity provider:

- Extracting the token from the Authorization header.
- Reading the key id from the unverified header.
- Resolving a verification certificate (cache, then JWKS fetch).
- Checking signature, algorithm, expiry and optional audience/issuer.

Nothing read from the unverified header or payload is trusted beyond
choosing the verification key.
"""

from .token_verifier import TokenVerifier, VerifiedClaims, extract_bearer_token

__all__ = [
    "TokenVerifier",
    "VerifiedClaims",
    "extract_bearer_token",
]
