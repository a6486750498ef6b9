"""
Certificate helpers: PEM encoding of published key certificates and the
process-wide cache of resolved certificates.
"""

from .codec import CertificateCodec, cert_to_pem
from .cache import (
    CertificateCache,
    KeyedCertificateCache,
    SingleSlotCertificateCache,
    create_certificate_cache,
)

__all__ = [
    "CertificateCache",
    "CertificateCodec",
    "KeyedCertificateCache",
    "SingleSlotCertificateCache",
    "cert_to_pem",
    "create_certificate_cache",
]
