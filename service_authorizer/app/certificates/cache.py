"""
Process-wide cache of resolved verification certificates.

Entries never expire and nothing in the request path evicts them. Stores
are a single dict or attribute assignment, so concurrent verifications that
both miss and both fetch simply race to write the same value.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..jwks.models import Certificate


class CertificateCache(ABC):
    """Interface shared by the cache implementations."""

    @abstractmethod
    def get(self, kid: Optional[str] = None) -> Optional[Certificate]:
        """Return the certificate for ``kid``, or None on a miss."""

    @abstractmethod
    def set(self, kid: Optional[str], certificate: Certificate) -> None:
        """Store ``certificate`` under ``kid``."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached certificate."""


class KeyedCertificateCache(CertificateCache):
    """Caches one certificate per key id."""

    def __init__(self):
        self._certificates: Dict[Optional[str], Certificate] = {}

    def get(self, kid: Optional[str] = None) -> Optional[Certificate]:
        return self._certificates.get(kid)

    def set(self, kid: Optional[str], certificate: Certificate) -> None:
        self._certificates[kid] = certificate

    def clear(self) -> None:
        self._certificates = {}

    def __len__(self) -> int:
        return len(self._certificates)


class SingleSlotCertificateCache(CertificateCache):
    """Holds a single certificate regardless of key id.

    Once warm, every lookup returns the cached certificate even when a token
    names a different kid; such tokens then fail signature verification.
    Only suitable when the identity provider publishes one active key.
    """

    def __init__(self):
        self._certificate: Optional[Certificate] = None

    def get(self, kid: Optional[str] = None) -> Optional[Certificate]:
        return self._certificate

    def set(self, kid: Optional[str], certificate: Certificate) -> None:
        self._certificate = certificate

    def clear(self) -> None:
        self._certificate = None


def create_certificate_cache(mode: str = "keyed") -> CertificateCache:
    """Build the cache for a ``certificate_cache_mode`` setting."""
    if mode == "keyed":
        return KeyedCertificateCache()
    if mode == "single":
        return SingleSlotCertificateCache()
    raise ValueError(f"Unknown certificate cache mode: {mode!r}")
