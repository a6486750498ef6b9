"""
PEM encoding for x5c certificate chain entries.
"""

import textwrap

from ..errors import MalformedKey
from ..jwks.models import Certificate, SigningKey

PEM_HEADER = "-----BEGIN CERTIFICATE-----"
PEM_FOOTER = "-----END CERTIFICATE-----"
PEM_LINE_LENGTH = 64


def cert_to_pem(body: str) -> str:
    """Wrap a base64 DER certificate body in PEM boundary markers."""
    body = "".join(body.split())
    lines = textwrap.wrap(body, PEM_LINE_LENGTH)
    return "\n".join([PEM_HEADER, *lines, PEM_FOOTER]) + "\n"


class CertificateCodec:
    """Turns a signing key into the certificate used for verification."""

    def to_certificate(self, key: SigningKey) -> Certificate:
        """Encode the first entry of the key's certificate chain."""
        if not key.x5c:
            raise MalformedKey(details={"kid": key.kid})
        return Certificate(pem=cert_to_pem(key.x5c[0]), kid=key.kid, thumbprint=key.x5t)
