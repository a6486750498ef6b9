"""
Unit tests for CertificateCodec and the certificate caches.
"""

import pytest
from cryptography import x509

from service_authorizer.app.certificates.cache import (
    CertificateCache,
    KeyedCertificateCache,
    SingleSlotCertificateCache,
    create_certificate_cache,
)
from service_authorizer.app.certificates.codec import CertificateCodec, cert_to_pem
from service_authorizer.app.errors import MalformedKey
from service_authorizer.app.jwks.models import Certificate, SigningKey


class TestCertificateCodec:
    """Test cases for PEM encoding."""
    
    def test_pem_markers(self):
        """Output is bounded by the exact certificate markers."""
        pem = cert_to_pem("QUJD")
        
        assert pem == "-----BEGIN CERTIFICATE-----\nQUJD\n-----END CERTIFICATE-----\n"
    
    def test_deterministic(self):
        """Same body always yields the same PEM text."""
        body = "A" * 200
        
        assert cert_to_pem(body) == cert_to_pem(body)
    
    def test_wraps_at_64_characters(self):
        """Long bodies are split into 64 character lines."""
        body = "B" * 150
        
        lines = cert_to_pem(body).splitlines()
        
        assert lines[0] == "-----BEGIN CERTIFICATE-----"
        assert lines[-1] == "-----END CERTIFICATE-----"
        assert [len(line) for line in lines[1:-1]] == [64, 64, 22]
    
    def test_strips_whitespace(self):
        """Embedded whitespace in the chain entry is ignored."""
        assert cert_to_pem(" QU\nJD ") == cert_to_pem("QUJD")
    
    def test_to_certificate_uses_first_chain_entry(self):
        """Only the first x5c entry is encoded."""
        key = SigningKey.from_jwk({"kid": "k1", "x5t": "t1", "x5c": ["Rmlyc3Q=", "U2Vjb25k"]})
        
        certificate = CertificateCodec().to_certificate(key)
        
        assert certificate.pem == cert_to_pem("Rmlyc3Q=")
        assert certificate.kid == "k1"
        assert certificate.thumbprint == "t1"
    
    def test_to_certificate_empty_chain(self):
        """A key without a certificate chain raises MalformedKey."""
        with pytest.raises(MalformedKey):
            CertificateCodec().to_certificate(SigningKey.from_jwk({"kid": "k1"}))
    
    def test_pem_loads_as_x509(self, signing_key):
        """Encoded chain entries load as X.509 certificates."""
        key = SigningKey.from_jwk(signing_key.to_jwk())
        
        certificate = CertificateCodec().to_certificate(key)
        loaded = x509.load_pem_x509_certificate(certificate.pem.encode("ascii"))
        
        assert loaded.subject.rfc4514_string() == "CN=authorizer.test"
    
    def test_repr_hides_pem(self):
        """Certificate repr does not include the PEM text."""
        certificate = Certificate(pem=cert_to_pem("QUJD"), kid="k1")
        
        assert "BEGIN CERTIFICATE" not in repr(certificate)


class TestKeyedCertificateCache:
    """Test cases for the per-kid cache."""
    
    @pytest.fixture
    def cache(self):
        return KeyedCertificateCache()
    
    def test_empty_on_creation(self, cache):
        assert cache.get("k1") is None
        assert len(cache) == 0
    
    def test_get_is_idempotent(self, cache):
        """Two gets without a set return the same value."""
        cache.set("k1", Certificate(pem="pem-1", kid="k1"))
        
        assert cache.get("k1") is cache.get("k1")
    
    def test_entries_are_per_kid(self, cache):
        first = Certificate(pem="pem-1", kid="k1")
        second = Certificate(pem="pem-2", kid="k2")
        
        cache.set("k1", first)
        cache.set("k2", second)
        
        assert cache.get("k1") is first
        assert cache.get("k2") is second
        assert cache.get("k3") is None
    
    def test_last_writer_wins(self, cache):
        cache.set("k1", Certificate(pem="old", kid="k1"))
        cache.set("k1", Certificate(pem="new", kid="k1"))
        
        assert cache.get("k1").pem == "new"
    
    def test_clear(self, cache):
        cache.set("k1", Certificate(pem="pem-1", kid="k1"))
        
        cache.clear()
        
        assert cache.get("k1") is None


class TestSingleSlotCertificateCache:
    """Test cases for the single global slot."""
    
    def test_ignores_kid(self):
        """A warm slot answers for any kid."""
        cache = SingleSlotCertificateCache()
        certificate = Certificate(pem="pem-1", kid="k1")
        
        cache.set("k1", certificate)
        
        assert cache.get("k1") is certificate
        assert cache.get("other") is certificate
        assert cache.get() is certificate
    
    def test_get_is_idempotent(self):
        cache = SingleSlotCertificateCache()
        
        assert cache.get() is None
        assert cache.get() is None
        
        cache.set(None, Certificate(pem="pem-1"))
        
        assert cache.get() is cache.get()
    
    def test_clear(self):
        cache = SingleSlotCertificateCache()
        cache.set("k1", Certificate(pem="pem-1", kid="k1"))
        
        cache.clear()
        
        assert cache.get("k1") is None


class TestCreateCertificateCache:
    """Test cases for cache mode selection."""
    
    def test_keyed_mode(self):
        assert isinstance(create_certificate_cache("keyed"), KeyedCertificateCache)
    
    def test_single_mode(self):
        assert isinstance(create_certificate_cache("single"), SingleSlotCertificateCache)
    
    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            create_certificate_cache("lru")
    
    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            CertificateCache()
    
    def test_incomplete_cache_cannot_be_instantiated(self):
        """Implementations must provide get, set and clear."""
        class ReadOnlyCache(CertificateCache):
            def get(self, kid=None):
                return None
        
        with pytest.raises(TypeError):
            ReadOnlyCache()
