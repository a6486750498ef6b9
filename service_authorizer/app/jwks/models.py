"""
Value types for published signing keys and the certificates derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SigningKey:
    """One entry of a JSON Web Key Set."""

    alg: Optional[str] = None
    kty: Optional[str] = None
    use: Optional[str] = None
    x5c: Tuple[str, ...] = field(default=(), repr=False)
    n: Optional[str] = field(default=None, repr=False)
    e: Optional[str] = field(default=None, repr=False)
    kid: Optional[str] = None
    x5t: Optional[str] = None

    @classmethod
    def from_jwk(cls, data: Mapping[str, Any]) -> SigningKey:
        """Build a key from a JWK mapping, tolerating missing members."""
        chain = data.get("x5c")
        if not isinstance(chain, (list, tuple)):
            chain = ()
        return cls(
            alg=_as_str(data.get("alg")),
            kty=_as_str(data.get("kty")),
            use=_as_str(data.get("use")),
            x5c=tuple(entry for entry in chain if isinstance(entry, str)),
            n=_as_str(data.get("n")),
            e=_as_str(data.get("e")),
            kid=_as_str(data.get("kid")),
            x5t=_as_str(data.get("x5t")),
        )


@dataclass(frozen=True)
class Certificate:
    """PEM encoded certificate used to verify token signatures."""

    pem: str = field(repr=False)
    kid: Optional[str] = None
    thumbprint: Optional[str] = None

    def __str__(self) -> str:
        return self.pem


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
