"""
Signing key selection.
"""

from typing import Iterable, List, Optional, Sequence

from shared.logging import get_logger
from ..errors import KeyNotFound, NoUsableKeys
from .models import SigningKey

REQUIRED_USE = "sig"
REQUIRED_KTY = "RSA"
REQUIRED_ALG = "RS256"


def is_usable(key: SigningKey) -> bool:
    """Return True for RS256 signature-verification keys with a certificate chain and kid."""
    return (
        key.use == REQUIRED_USE
        and key.kty == REQUIRED_KTY
        and key.alg == REQUIRED_ALG
        and len(key.x5c) > 0
        and bool(key.kid)
    )


class KeySelector:
    """Filters a key set down to verification keys and picks one by kid."""

    def __init__(self):
        self.logger = get_logger("authorizer.jwks.selector")

    def select_usable(self, keys: Iterable[SigningKey]) -> List[SigningKey]:
        """Keep only the keys usable for RS256 signature verification, in order."""
        return [key for key in keys if is_usable(key)]

    def find(self, usable_keys: Sequence[SigningKey], kid: Optional[str]) -> SigningKey:
        """Return the first key whose kid matches."""
        if not usable_keys:
            raise NoUsableKeys(details={"kid": kid})

        for key in usable_keys:
            if key.kid == kid:
                return key

        self.logger.warning("Key not found", kid=kid, usable_keys=len(usable_keys))
        raise KeyNotFound(f"No signing key matches kid {kid!r}", details={"kid": kid})

    def select(self, keys: Iterable[SigningKey], kid: Optional[str]) -> SigningKey:
        """Filter ``keys`` and return the usable key for ``kid``."""
        usable = self.select_usable(keys)
        if not usable:
            self.logger.warning("No signature verification keys published", kid=kid)
            raise NoUsableKeys(details={"kid": kid})
        return self.find(usable, kid)
