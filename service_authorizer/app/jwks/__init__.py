"""
JWKS client package.

Contains logic for retrieving the JSON Web Key Set published by the
identity provider and picking the key that verifies a given token.

Key points:
- One bounded network read per fetch; retries belong to the caller.
- Only RS256 signature keys that carry an x5c certificate chain are usable.
- Keys are matched by kid; the first match in published order wins.
"""

from .models import SigningKey, Certificate
from .fetcher import KeySetFetcher
from .selector import KeySelector

__all__ = [
    "Certificate",
    "KeySelector",
    "KeySetFetcher",
    "SigningKey",
]
