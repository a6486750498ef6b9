"""
Token verification pipeline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWKError, JWTClaimsError, JWTError

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..certificates.cache import CertificateCache, KeyedCertificateCache
from ..certificates.codec import CertificateCodec
from ..errors import (
    AuthHeaderMalformed,
    AuthHeaderMissing,
    ClaimsInvalid,
    MalformedKey,
    SignatureInvalid,
    TokenDecodeError,
    VerificationError,
)
from ..jwks.fetcher import KeySetFetcher
from ..jwks.models import Certificate
from ..jwks.selector import REQUIRED_ALG, KeySelector

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class VerifiedClaims:
    """Signature-checked token payload."""

    subject: str
    kid: str
    claims: Dict[str, Any] = field(repr=False)


def extract_bearer_token(authorization_header: Optional[str]) -> str:
    """Return the token carried by a ``Bearer`` Authorization header."""
    if not authorization_header:
        raise AuthHeaderMissing()

    if not authorization_header.lower().startswith(BEARER_PREFIX):
        raise AuthHeaderMalformed()

    token = authorization_header.split(" ", 1)[1].strip()
    if not token:
        raise AuthHeaderMalformed("Authorization header contained empty bearer token")
    return token


class TokenVerifier:
    """Verifies RS256 bearer tokens against certificates from a JWKS endpoint.

    Certificates are resolved cache first; on a miss the key set is fetched,
    filtered, matched by kid and PEM encoded, and the result is cached.
    """

    def __init__(
        self,
        fetcher: KeySetFetcher,
        cache: Optional[CertificateCache] = None,
        *,
        selector: Optional[KeySelector] = None,
        codec: Optional[CertificateCodec] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        leeway: int = 0,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.fetcher = fetcher
        self.cache = cache if cache is not None else KeyedCertificateCache()
        self.selector = selector or KeySelector()
        self.codec = codec or CertificateCodec()
        self.audience = audience
        self.issuer = issuer
        self.leeway = leeway
        self.metrics = metrics
        self.logger = get_logger("authorizer.verifier")

    async def verify(self, authorization_header: Optional[str]) -> VerifiedClaims:
        """Verify the token in ``authorization_header`` and return its claims."""
        token = extract_bearer_token(authorization_header)
        kid = self._read_key_id(token)
        certificate = await self.resolve_certificate(kid)
        claims = self._decode(token, certificate, kid)

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise ClaimsInvalid("Token missing subject claim", details={"kid": kid})

        self.logger.info("Token verified successfully", sub=subject, kid=kid)
        return VerifiedClaims(subject=subject, kid=kid, claims=claims)

    async def resolve_certificate(self, kid: str) -> Certificate:
        """Return the verification certificate for ``kid``."""
        cached = self.cache.get(kid)
        self._record_cache_lookup(cached is not None)
        if cached is not None:
            self.logger.debug("Certificate cache hit", kid=kid)
            return cached

        self.logger.info("Fetching certificate from JWKS endpoint", kid=kid)
        try:
            keys = await self.fetcher.fetch()
            key = self.selector.select(keys, kid)
            certificate = self.codec.to_certificate(key)
        except VerificationError as e:
            e.details.setdefault("kid", kid)
            raise
        self.cache.set(kid, certificate)

        self.logger.info(
            "Valid certificate was downloaded",
            kid=certificate.kid,
            x5t=certificate.thumbprint,
        )
        return certificate

    def _read_key_id(self, token: str) -> str:
        # Unverified: only used to pick the verification key.
        if token.count(".") != 2:
            raise TokenDecodeError("Token must have three dot-separated segments")

        try:
            header = jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenDecodeError(str(e)) from e

        kid = header.get("kid")
        if not isinstance(kid, str) or not kid:
            raise TokenDecodeError("Token header missing key id (kid)")

        alg = header.get("alg")
        if alg != REQUIRED_ALG:
            raise ClaimsInvalid(
                f"Token algorithm {alg!r} is not allowed",
                details={"kid": kid, "alg": alg},
            )
        return kid

    def _decode(self, token: str, certificate: Certificate, kid: str) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "verify_exp": True,
            "verify_aud": self.audience is not None,
            "verify_iss": self.issuer is not None,
            "leeway": self.leeway,
        }
        try:
            return jwt.decode(
                token,
                certificate.pem,
                algorithms=[REQUIRED_ALG],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except ExpiredSignatureError as e:
            raise ClaimsInvalid("Token has expired", details={"kid": kid}) from e
        except JWTClaimsError as e:
            raise ClaimsInvalid(str(e), details={"kid": kid}) from e
        except JWTError as e:
            raise SignatureInvalid(str(e), details={"kid": kid}) from e
        except JWKError as e:
            raise MalformedKey("Certificate could not be loaded", details={"kid": kid}) from e

    def _record_cache_lookup(self, hit: bool) -> None:
        if self.metrics is not None:
            self.metrics.record_cache_lookup(hit)
